"""Assemble per-file test groups into one generated test module."""

import re
from collections.abc import Iterable, Sequence

from docexample.generator.nodes import CompileWarning, GeneratedSource, Group
from docexample.generator.render import INDENT, SourceRenderer

_NON_WORD_RE = re.compile(r"\W+")


def assemble(
    per_file_nodes: Sequence[Group],
    package_ref: str,
    class_name: str,
    super_types: Sequence[str],
    warnings: Iterable[CompileWarning] = (),
) -> GeneratedSource:
    """Wrap compiled groups in a final class extending `super_types`.

    Each group becomes one test method, in the given order. Duplicate titles
    are all kept; method names stay distinct through their index.
    """
    lines = [
        f'"""Examples extracted from doc comments for {package_ref}. Generated by docexample, do not edit."""',
        "",
        "import typing",
    ]
    lines.extend(f"import {module}" for module in _modules_of(super_types))
    lines.extend(["", "", "@typing.final", f"class {class_name}({', '.join(super_types)}):"])

    if not per_file_nodes:
        lines.append(f"{INDENT}pass")
    width = len(str(len(per_file_nodes)))
    for index, node in enumerate(per_file_nodes, 1):
        renderer = SourceRenderer()
        lines.append("")
        lines.append(f"{INDENT}def test_{index:0{width}d}_{_slug(node.title)}(self):")
        lines.extend(renderer.render(node, depth=2))

    return GeneratedSource(
        package_ref=package_ref,
        class_name=class_name,
        text="\n".join(lines) + "\n",
        warnings=tuple(warnings),
    )


def _modules_of(super_types: Sequence[str]) -> list[str]:
    """Modules to import for dotted super types, in first-use order."""
    modules: list[str] = []
    for super_type in super_types:
        module, _, _ = super_type.rpartition(".")
        if module and module != "typing" and module not in modules:
            modules.append(module)
    return modules


def _slug(title: str) -> str:
    return _NON_WORD_RE.sub("_", title).strip("_").lower() or "examples"

"""End-to-end generation: source files in, one generated test module out."""

import ast
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from docexample.exceptions import SourceParseError
from docexample.generator.assembler import assemble
from docexample.generator.comments import AssociatedComments
from docexample.generator.compiler import TreeCompiler
from docexample.generator.declarations import declarations_of
from docexample.generator.folder import parse_dialect
from docexample.generator.nodes import CompileWarning, GeneratedSource, Group
from docexample.generator.options import ExampleOptions
from docexample.logging import get_pipeline_logger

logger = get_pipeline_logger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """One input file: its path (for messages), text and dotted module name."""

    path: str
    text: str
    module_name: str

    @classmethod
    def from_path(cls, path: Path, root: Path) -> "SourceFile":
        return cls(str(path), path.read_text(encoding="utf-8"), module_name(path, root))


def module_name(path: Path, root: Path) -> str:
    """Dotted module name of `path` relative to the source root.

    e.g. src/shop/cart.py under src -> shop.cart; src/shop/__init__.py -> shop
    """
    parts = list(path.relative_to(root).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts) or root.name


def discover_sources(source_dir: Path) -> list[SourceFile]:
    """All .py files under source_dir, sorted by relative path."""
    files = sorted(source_dir.rglob("*.py"), key=lambda p: p.relative_to(source_dir).parts)
    return [SourceFile.from_path(path, source_dir) for path in files]


def compile_file(source: SourceFile, options: ExampleOptions) -> tuple[Group | None, list[CompileWarning]]:
    """Parse one file and compile its module declaration.

    Raises:
        SourceParseError: The file is not valid under the input dialect.
        MalformedCodeBlockError: A code block in one of its doc comments is invalid.
    """
    try:
        tree = ast.parse(source.text, filename=source.path, feature_version=parse_dialect(options.input_dialect))
    except SyntaxError as e:
        raise SourceParseError(source.path, e.lineno or 0, e.offset or 0, e.msg) from e

    compiler = TreeCompiler(
        AssociatedComments.build(tree, source.text),
        path=source.path,
        dialect=options.test_dialect,
        policy=options.empty_sections,
    )
    group = compiler.compile(declarations_of(source.module_name, tree))
    logger.debug("Compiled %s: %s", source.path, "examples found" if group else "nothing to generate")
    return group, compiler.warnings


def generate(files: Sequence[SourceFile], options: ExampleOptions) -> GeneratedSource:
    """Compile every file in order and assemble the generated test module.

    Any error aborts the whole run; no partial output is produced.
    """
    groups: list[Group] = []
    warnings: list[CompileWarning] = []
    for source in files:
        group, file_warnings = compile_file(source, options)
        warnings.extend(file_warnings)
        if group is not None:
            groups.append(group)

    logger.info("Generated %s from %d of %d files", options.class_name, len(groups), len(files))
    return assemble(groups, options.package_ref, options.class_name, options.super_types, warnings)

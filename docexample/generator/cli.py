"""CLI for generating and checking doc-comment example suites."""

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from docexample.exceptions import DocExampleError
from docexample.generator.folder import EmptySectionPolicy
from docexample.generator.nodes import GeneratedSource
from docexample.generator.options import ExampleOptions
from docexample.generator.pipeline import discover_sources, generate
from docexample.logging import setup_logging
from docexample.settings import settings


def main(argv: list[str] | None = None) -> int:
    """Entry point with generate/check subcommands."""
    parser = argparse.ArgumentParser(prog="docexample", description="Generate unit tests from examples in doc comments")
    parser.add_argument("--source-dir", type=Path, default=Path("."), help="Root of the source tree to scan")
    parser.add_argument("--output", type=Path, help="Generated module path (default: <class name in snake case>.py)")
    parser.add_argument("--package-ref", help="Dotted package of the generated module")
    parser.add_argument("--class-name", help="Generated class name (default: DOCEXAMPLE_CLASS_NAME, else <SourceDir>Examples)")
    parser.add_argument("--super-type", dest="super_types", action="append", help="Base class of the generated class, repeatable")
    parser.add_argument("--input-dialect", help="Python grammar version of the sources, e.g. 3.12")
    parser.add_argument("--test-dialect", help="Python grammar version of the code blocks, e.g. 3.12")
    parser.add_argument("--keep-empty-sections", action="store_true", help="Keep tags without code as title-only cases")
    parser.add_argument("--log-level", help="Log level override (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("generate", help="Write the generated test module")
    subparsers.add_parser("check", help="Fail when the generated test module is out of date")

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1
    setup_logging(level=args.log_level)

    try:
        options = _build_options(args)
    except ValidationError as e:
        print(f"FAIL: invalid options:\n{e}", file=sys.stderr)
        return 1
    output = args.output or Path(f"{_snake_case(options.class_name)}.py")

    sources = [source for source in discover_sources(args.source_dir) if Path(source.path).resolve() != output.resolve()]
    try:
        result = generate(sources, options)
    except DocExampleError as e:
        print(f"FAIL: {e}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"WARNING: {warning}", file=sys.stderr)

    if args.command == "generate":
        return _run_generate(result, output)
    return _run_check(result, output)


def _build_options(args: argparse.Namespace) -> ExampleOptions:
    """Command-line values over settings; the class name falls back to the source directory only when neither sets it."""
    class_name = args.class_name
    if class_name is None and "class_name" not in settings.model_fields_set:
        class_name = _default_class_name(args.source_dir)
    return ExampleOptions.from_settings(
        settings,
        package_ref=args.package_ref,
        class_name=class_name,
        super_types=tuple(args.super_types) if args.super_types else None,
        input_dialect=args.input_dialect,
        test_dialect=args.test_dialect,
        empty_sections=EmptySectionPolicy.KEEP if args.keep_empty_sections else None,
    )


def _default_class_name(source_dir: Path) -> str:
    """<Name>Examples from the source directory name, e.g. my_shop -> MyShopExamples."""
    stem = source_dir.resolve().name
    words = [word for word in stem.replace("-", "_").split("_") if word]
    name = "".join(word[:1].upper() + word[1:] for word in words) + "Examples"
    return name if name.isidentifier() else "DocExamples"


def _snake_case(name: str) -> str:
    return "".join(f"_{char.lower()}" if char.isupper() and i else char.lower() for i, char in enumerate(name))


def _run_generate(result: GeneratedSource, output: Path) -> int:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.text, encoding="utf-8")
    size = len(result.text.encode("utf-8"))
    print(f"  wrote {output} ({size:,} bytes, {len(result.warnings)} warnings)")
    return 0


def _run_check(result: GeneratedSource, output: Path) -> int:
    if not output.exists():
        print(f"FAIL: {output} does not exist. Run 'generate' first.", file=sys.stderr)
        return 1
    if output.read_text(encoding="utf-8") != result.text:
        print(f"FAIL: {output} is stale")
        return 1
    print(f"OK: {output} is up-to-date")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""docexample - unit tests generated from examples in doc comments.

Code blocks under an ``@example`` (or any other) tag in a docstring become
test cases, nested in groups that mirror the module, class and member the
docstring documents.

Quick Start:
    >>> from pathlib import Path
    >>> from docexample import ExampleOptions, discover_sources, generate
    >>>
    >>> options = ExampleOptions.from_settings(class_name="ShopExamples")
    >>> result = generate(discover_sources(Path("src")), options)
    >>> Path("tests/test_shop_examples.py").write_text(result.text)

Environment Variables:
    - DOCEXAMPLE_PACKAGE_REF, DOCEXAMPLE_CLASS_NAME, DOCEXAMPLE_SUPER_TYPES
    - DOCEXAMPLE_INPUT_DIALECT, DOCEXAMPLE_TEST_DIALECT
    - DOCEXAMPLE_LOG_LEVEL, DOCEXAMPLE_LOGGING_CONFIG
"""

from .exceptions import DocExampleError, MalformedCodeBlockError, SourceParseError
from .generator import (
    CompileWarning,
    EmptySectionPolicy,
    ExampleOptions,
    GeneratedSource,
    SourceFile,
    discover_sources,
    generate,
)
from .logging import LoggingConfig, get_pipeline_logger, setup_logging
from .runtime import FreeSpec
from .settings import Settings, settings

__version__ = "0.1.0"

__all__ = [
    "CompileWarning",
    "DocExampleError",
    "EmptySectionPolicy",
    "ExampleOptions",
    "FreeSpec",
    "GeneratedSource",
    "LoggingConfig",
    "MalformedCodeBlockError",
    "Settings",
    "SourceFile",
    "SourceParseError",
    "discover_sources",
    "generate",
    "get_pipeline_logger",
    "settings",
    "setup_logging",
]

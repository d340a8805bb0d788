"""Test-structure tree produced by folding and compiling doc comments.

The tree says what test structure is produced; turning it into Python text
is the job of docexample.generator.render.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourcePosition:
    """1-based line and 0-based column inside a source file."""

    path: str
    line: int
    column: int = 0

    def shifted(self, lines: int, column: int | None = None) -> "SourcePosition":
        return SourcePosition(self.path, self.line + lines, self.column if column is None else column)

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class CompileWarning:
    """A recoverable problem found while folding a doc comment."""

    position: SourcePosition
    message: str
    text: str

    def __str__(self) -> str:
        return f"{self.position}: {self.message}: {self.text}"


@dataclass(frozen=True)
class Code:
    """One statement parsed from a code block, normalised by ast.unparse."""

    source: str


@dataclass(frozen=True)
class Markup:
    """Descriptive text rendered in the test output, never an assertion."""

    text: str


@dataclass(frozen=True)
class Section:
    """A test case compiled from one tag of a doc comment.

    `body` runs inside its own scope; `cleanup` runs afterwards whether or
    not the body raised.
    """

    title: str
    body: tuple["Statement", ...]
    cleanup: tuple["Statement", ...] = ()


@dataclass(frozen=True)
class Group:
    """A named test group mirroring one declaration (package, class or member)."""

    title: str
    children: tuple["Statement", ...] = field(default_factory=tuple)


Statement = Code | Markup | Section | Group


@dataclass(frozen=True)
class GeneratedSource:
    """The generated test module and the warnings collected while building it."""

    package_ref: str
    class_name: str
    text: str
    warnings: tuple[CompileWarning, ...] = ()

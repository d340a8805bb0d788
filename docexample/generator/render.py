"""Serialize test-structure trees to Python source text.

Groups and sections become nested functions registered through the
FreeSpec runtime decorators, so every section body gets its own function
scope while still seeing the bindings of its enclosing groups:

    @self.group('Widget')
    def _group_1():
        @self.case('example basic')
        def _case_2():
            self.markup('shows construction')
            w = 1
"""

import io
import itertools
import tokenize
from typing import assert_never

from docexample.generator.nodes import Code, Group, Markup, Section, Statement

INDENT = "    "


class SourceRenderer:
    """Renders statements with function names numbered in output order."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)

    def render(self, statement: Statement, depth: int = 0) -> list[str]:
        pad = INDENT * depth
        if isinstance(statement, Code):
            return _indent_code(statement.source, pad)
        if isinstance(statement, Markup):
            return [f"{pad}self.markup({statement.text!r})"]
        if isinstance(statement, Group):
            lines = [f"{pad}@self.group({statement.title!r})", f"{pad}def _group_{next(self._counter)}():"]
            return lines + self._block(statement.children, depth + 1)
        if isinstance(statement, Section):
            lines = [f"{pad}@self.case({statement.title!r})", f"{pad}def _case_{next(self._counter)}():"]
            if not statement.cleanup:
                return lines + self._block(statement.body, depth + 1)
            inner = INDENT * (depth + 1)
            return (
                lines
                + [f"{inner}try:"]
                + self._block(statement.body, depth + 2)
                + [f"{inner}finally:"]
                + self._block(statement.cleanup, depth + 2)
            )
        assert_never(statement)

    def _block(self, statements: tuple[Statement, ...], depth: int) -> list[str]:
        if not statements:
            return [f"{INDENT * depth}pass"]
        lines: list[str] = []
        for statement in statements:
            lines.extend(self.render(statement, depth))
        return lines


def _indent_code(source: str, pad: str) -> list[str]:
    """Indent statement source, leaving the inside of multi-line strings untouched."""
    inside = _string_interior_lines(source)
    return [line if number in inside or not line else f"{pad}{line}" for number, line in enumerate(source.splitlines(), 1)]


def _string_interior_lines(source: str) -> set[int]:
    """1-based numbers of the lines that continue a multi-line string literal."""
    lines: set[int] = set()
    fstring_starts: list[int] = []
    for token in tokenize.generate_tokens(io.StringIO(source).readline):
        if token.type == tokenize.FSTRING_START:
            fstring_starts.append(token.start[0])
        elif token.type == tokenize.FSTRING_END:
            lines.update(range(fstring_starts.pop() + 1, token.end[0] + 1))
        elif token.type == tokenize.STRING:
            lines.update(range(token.start[0] + 1, token.end[0] + 1))
    return lines

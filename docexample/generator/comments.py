"""Association of doc comments with declarations.

The index is built once per parsed module. Documentation attaches to a
declaration in three ways:

- a docstring (modules, classes, functions);
- a block of ``#:`` comments on the lines directly above the declaration
  (or above its first decorator);
- an attribute docstring, the string literal statement right after an
  assignment.

A ``#:`` comment after code on the declaration's first line is recorded as
the declaration's trailing comment.
"""

import ast
import inspect
import io
import re
import tokenize
from dataclasses import dataclass
from typing import Literal

_DOC_COMMENT_PREFIX = "#:"
_BINDINGS = (ast.Assign, ast.AnnAssign, ast.TypeAlias)
_DOCUMENTED = (ast.ClassDef, ast.FunctionDef, ast.AsyncFunctionDef)
_OPENING_QUOTE_RE = re.compile("[A-Za-z]*('''|\"\"\"|'|\")")


@dataclass(frozen=True)
class Comment:
    """Text of one doc comment, positioned at its first text line.

    `column` is where the first text line starts; `indent` is where the
    following lines start once the common indentation is removed.
    """

    text: str
    line: int
    column: int
    kind: Literal["docstring", "comment"]
    indent: int


@dataclass(frozen=True)
class _CommentLine:
    text: str
    line: int
    column: int


class AssociatedComments:
    """Lookup from declaration nodes to the doc comments attached to them."""

    def __init__(
        self,
        leading: dict[ast.AST, tuple[Comment, ...]] | None = None,
        trailing: dict[ast.AST, tuple[Comment, ...]] | None = None,
    ):
        self._leading = leading or {}
        self._trailing = trailing or {}

    @classmethod
    def build(cls, tree: ast.Module, source: str) -> "AssociatedComments":
        blocks, same_line = _scan_comments(source)
        lines = source.splitlines()
        blocks_by_end = {block.line + block.text.count("\n"): block for block in blocks}
        leading: dict[ast.AST, tuple[Comment, ...]] = {}
        trailing: dict[ast.AST, tuple[Comment, ...]] = {}

        if docstring := _docstring_comment(tree, lines):
            leading[tree] = (docstring,)

        def index_body(body: list[ast.stmt]) -> None:
            for position, node in enumerate(body):
                found: list[Comment] = []
                start = node.decorator_list[0].lineno if isinstance(node, _DOCUMENTED) and node.decorator_list else node.lineno
                if block := blocks_by_end.get(start - 1):
                    found.append(block)
                if isinstance(node, _DOCUMENTED):
                    if docstring := _docstring_comment(node, lines):
                        found.append(docstring)
                elif isinstance(node, _BINDINGS) and position + 1 < len(body):
                    if attribute_doc := _string_statement(body[position + 1], lines):
                        found.append(attribute_doc)
                if found:
                    leading[node] = tuple(sorted(found, key=lambda c: (c.line, c.column)))
                if comment := same_line.get(node.lineno):
                    trailing[node] = (comment,)
                if isinstance(node, ast.ClassDef):
                    index_body(node.body)

        index_body(tree.body)
        return cls(leading, trailing)

    def leading(self, node: ast.AST) -> tuple[Comment, ...]:
        """Doc comments preceding `node`, ordered by source position. Empty when undocumented."""
        return self._leading.get(node, ())

    def trailing(self, node: ast.AST) -> tuple[Comment, ...]:
        return self._trailing.get(node, ())


def _scan_comments(source: str) -> tuple[list[Comment], dict[int, Comment]]:
    """Collect ``#:`` comment blocks on their own lines, and ``#:`` comments after code."""
    standalone: list[_CommentLine] = []
    same_line: dict[int, Comment] = {}
    for token in tokenize.generate_tokens(io.StringIO(source).readline):
        if token.type != tokenize.COMMENT or not token.string.startswith(_DOC_COMMENT_PREFIX):
            continue
        row, start = token.start
        column = start
        text = token.string[len(_DOC_COMMENT_PREFIX) :]
        if text.startswith(" "):
            text = text[1:]
            column += 1
        column += len(_DOC_COMMENT_PREFIX)
        if token.line[:start].strip():
            same_line[row] = Comment(text.rstrip(), row, column, "comment", column)
        else:
            standalone.append(_CommentLine(text.rstrip(), row, column))

    blocks: list[Comment] = []
    run: list[_CommentLine] = []
    for entry in standalone:
        if run and entry.line != run[-1].line + 1:
            blocks.append(_merge(run))
            run = []
        run.append(entry)
    if run:
        blocks.append(_merge(run))
    return blocks, same_line


def _merge(run: list[_CommentLine]) -> Comment:
    return Comment("\n".join(entry.text for entry in run), run[0].line, run[0].column, "comment", run[0].column)


def _docstring_comment(node: ast.Module | ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef, lines: list[str]) -> Comment | None:
    if not node.body:
        return None
    return _string_statement(node.body[0], lines)


def _string_statement(node: ast.stmt, lines: list[str]) -> Comment | None:
    """A bare string literal statement as a cleaned doc comment."""
    if not (isinstance(node, ast.Expr) and isinstance(node.value, ast.Constant) and isinstance(node.value.value, str)):
        return None
    raw: str = node.value.value
    text = inspect.cleandoc(raw)
    if not text:
        return None
    raw_lines = raw.splitlines()
    skipped = next((i for i, line in enumerate(raw_lines) if line.strip()), 0)
    if skipped:
        column = _indentation(raw_lines[skipped])
    else:
        source_line = lines[node.lineno - 1]
        quote = _char_column(source_line, node.col_offset)
        opening = _OPENING_QUOTE_RE.match(source_line, quote)
        column = (opening.end() if opening else quote) + _indentation(raw_lines[0])
    margins = [_indentation(line) for line in raw_lines[1:] if line.strip()]
    return Comment(text, node.lineno + skipped, column, "docstring", min(margins, default=column))


def _indentation(line: str) -> int:
    expanded = line.expandtabs()
    return len(expanded) - len(expanded.lstrip())


def _char_column(line: str, byte_offset: int) -> int:
    """ast column offsets count UTF-8 bytes."""
    return len(line.encode("utf-8")[:byte_offset].decode("utf-8", errors="ignore"))

"""Fold one doc comment's tokens into test statements.

The fold runs from the last token toward the first. Code blocks and prose
accumulate until a tag token is reached; the tag then closes over
everything accumulated after it in source order, which is the tag's own
sub-section. Whatever is left when the first token has been folded is the
comment's preamble: it runs ahead of every section compiled from the same
comment.
"""

import ast
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import assert_never

from docexample.exceptions import MalformedCodeBlockError
from docexample.generator.nodes import Code, CompileWarning, Markup, Section, SourcePosition, Statement
from docexample.generator.tokens import (
    CodeBlock,
    Description,
    DocToken,
    Heading,
    InheritDoc,
    Paragraph,
    TaggedSection,
    UntaggedSection,
)
from docexample.logging import get_pipeline_logger

logger = get_pipeline_logger(__name__)

_UNKNOWN_POSITION = SourcePosition("<doc>", 1)


class EmptySectionPolicy(StrEnum):
    """What to do with a tag that has no code block under it."""

    DROP = "drop"
    KEEP = "keep"  # emit a section holding only the tag's markup


@dataclass(frozen=True)
class FoldState:
    """Accumulator threaded through the right fold.

    At most one of `pending_code` / `pending_trailing` grows between two
    tags; both are cleared by every tag token. `completed` only grows at
    the front, so it is always in final order.
    """

    pending_code: tuple[Statement, ...] = ()
    pending_trailing: tuple[Statement, ...] = ()
    completed: tuple[Statement, ...] = ()

    def result(self) -> tuple[Statement, ...]:
        """Preamble code and prose ahead of the completed sections.

        Prose alone is not test content: a comment without code or sections folds to nothing.
        """
        if not self.pending_code and not self.completed:
            return ()
        return self.pending_code + self.pending_trailing + self.completed


def parse_dialect(dialect: str) -> tuple[int, int]:
    """Turn a "3.N" dialect string into an ast feature_version tuple."""
    major, _, minor = dialect.partition(".")
    return int(major), int(minor)


def fold(
    tokens: tuple[DocToken, ...] | list[DocToken],
    *,
    dialect: str = "3.12",
    origin: SourcePosition | None = None,
    indent: int | None = None,
    warnings: list[CompileWarning] | None = None,
    policy: EmptySectionPolicy = EmptySectionPolicy.DROP,
) -> tuple[Statement, ...]:
    """Fold a comment's tokens into preamble statements followed by sections.

    Args:
        tokens: Tokens of one comment, in source order.
        dialect: Grammar version used to parse code blocks.
        origin: Position of the comment's first text line, for errors and warnings.
        indent: Column of the comment's later lines; defaults to the origin column.
        warnings: Collector for malformed-tag warnings.
        policy: Treatment of tags without code.

    Raises:
        MalformedCodeBlockError: A code block is not a valid statement sequence.
    """
    origin = origin or _UNKNOWN_POSITION
    indent = origin.column if indent is None else indent
    state = FoldState()
    found: list[CompileWarning] = []
    for token in reversed(tokens):
        state = _step(token, state, dialect, origin, indent, found, policy)
    for warning in reversed(found):
        logger.warning("%s", warning)
        if warnings is not None:
            warnings.append(warning)
    return state.result()


def _step(
    token: DocToken,
    state: FoldState,
    dialect: str,
    origin: SourcePosition,
    indent: int,
    found: list[CompileWarning],
    policy: EmptySectionPolicy,
) -> FoldState:
    if isinstance(token, CodeBlock):
        return replace(state, pending_code=_parse_code(token, dialect, origin) + state.pending_code)
    if isinstance(token, TaggedSection):
        if token.name is not None:
            title = f"{token.label} {token.name}"
            preface: tuple[Statement, ...] = (Markup(token.body),) if token.body else ()
        else:
            title = f"{token.label} {token.body}".rstrip()
            preface = ()
        return _close_section(state, title, preface, policy)
    if isinstance(token, UntaggedSection):
        return _close_section(state, f"{token.label} {token.body}".rstrip(), (), policy)
    if isinstance(token, Paragraph):
        if not token.text:
            return state
        return _splice(state, Markup(f"<p>{token.text}</p>"))
    if isinstance(token, Heading):
        return _splice(state, Markup(f"<h{token.level}>{token.text}</h{token.level}>"))
    if isinstance(token, Description):
        if token.text.startswith("@"):
            _warn_malformed_tag(token, origin, indent, found)
        return _splice(state, Markup(token.text))
    if isinstance(token, InheritDoc):
        return _splice(state, Markup("@inheritdoc"))
    assert_never(token)


def _close_section(state: FoldState, title: str, preface: tuple[Statement, ...], policy: EmptySectionPolicy) -> FoldState:
    if state.pending_code:
        section = Section(title, preface + state.pending_code, state.pending_trailing)
    elif policy is EmptySectionPolicy.KEEP:
        section = Section(title, preface + state.pending_trailing)
    else:
        logger.debug("Dropping section %r without code", title)
        return FoldState(completed=state.completed)
    return FoldState(completed=(section, *state.completed))


def _splice(state: FoldState, markup: Markup) -> FoldState:
    """Markup joins the code it annotates once a code block exists; before that it trails."""
    if state.pending_code:
        return replace(state, pending_code=(markup, *state.pending_code))
    return replace(state, pending_trailing=(markup, *state.pending_trailing))


def _parse_code(token: CodeBlock, dialect: str, origin: SourcePosition) -> tuple[Statement, ...]:
    try:
        module = ast.parse(token.text, mode="exec", feature_version=parse_dialect(dialect))
    except SyntaxError as e:
        line = origin.line + token.line + max((e.lineno or 1) - 1, 0)
        raise MalformedCodeBlockError(origin.path, line, e.offset or 0, e.msg) from e
    return tuple(Code(ast.unparse(statement)) for statement in module.body)


def _warn_malformed_tag(token: Description, origin: SourcePosition, indent: int, found: list[CompileWarning]) -> None:
    position = origin if token.line == 0 else origin.shifted(token.line, indent)
    found.append(CompileWarning(position, "malformed tag kept as text", token.text))

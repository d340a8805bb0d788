"""Typed tokens of a single doc comment.

A doc comment is tokenized into an ordered sequence of these values. Order
is significant: the folder walks the sequence from the end toward the start.
Every token carries `line`, its 0-based line offset inside the comment text.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code inside the comment, already dedented."""

    text: str
    line: int = 0


@dataclass(frozen=True)
class TaggedSection:
    """A recognised tag, e.g. ``@example basic: shows construction``."""

    label: str
    name: str | None
    body: str
    line: int = 0


@dataclass(frozen=True)
class UntaggedSection:
    """A recognised tag whose text has no name/description split."""

    label: str
    body: str
    line: int = 0


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    line: int = 0


@dataclass(frozen=True)
class Paragraph:
    """Prose after the leading description. Empty text marks a separator."""

    text: str
    line: int = 0


@dataclass(frozen=True)
class Description:
    """Leading prose of the comment, or text the tokenizer could not read as a tag."""

    text: str
    line: int = 0


@dataclass(frozen=True)
class InheritDoc:
    line: int = 0


DocToken = CodeBlock | TaggedSection | UntaggedSection | Heading | Paragraph | Description | InheritDoc

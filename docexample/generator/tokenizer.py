"""Doc comment tokenizer.

Turns the text of one doc comment into an ordered tuple of DocToken values.
The grammar is line based:

    Leading prose becomes the description.

    # Heading

    @example basic: shows construction
        (tag continuation lines join the tag body)

    ```python
    widget = Widget()
    ```

    @inheritdoc
"""

import re
import textwrap

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

# Tags that only make sense with a name (@param x: ...)
NAMED_TAGS: frozenset[str] = frozenset({"param", "type", "keyword", "raises", "throws", "ivar", "cvar", "var", "group"})
# Tags that may stand on their own; a "<word>:" prefix still names them
FREE_TAGS: frozenset[str] = frozenset({
    "example",
    "note",
    "see",
    "return",
    "returns",
    "rtype",
    "since",
    "author",
    "version",
    "deprecated",
    "todo",
    "warning",
    "attention",
    "bug",
    "usecase",
    "constructor",
})
KNOWN_TAGS: frozenset[str] = NAMED_TAGS | FREE_TAGS

_FENCE_RE = re.compile(r"^(?P<fence>`{3,}|~{3,})\s*[\w+.-]*\s*$")
_TAG_RE = re.compile(r"^@(?P<label>[A-Za-z_][\w-]*)(?P<rest>.*)$")
_NAMED_REST_RE = re.compile(r"^\s+(?P<name>[^\s:]+):(?:\s+(?P<body>.*))?$")
_HEADING_RE = re.compile(r"^(?P<marks>#{1,6})\s+(?P<text>.+?)(?:\s+#+)?\s*$")
_SEPARATOR_RE = re.compile(r"^-{3,}$")


def tokenize_doc(text: str) -> tuple[DocToken, ...]:
    """Tokenize a cleaned doc comment (no common indentation, no quotes)."""
    lines = text.expandtabs().splitlines()
    tokens: list[DocToken] = []
    index = 0
    while index < len(lines):
        stripped = lines[index].strip()
        if not stripped:
            index += 1
            continue

        if fence := _FENCE_RE.match(stripped):
            end = _closing_fence(lines, index + 1, fence.group("fence"))
            start = _first_text_line(lines, index + 1, end)
            body = textwrap.dedent("\n".join(lines[start:end])).rstrip("\n")
            tokens.append(CodeBlock(body, line=start))
            index = end + 1
            continue

        if heading := _HEADING_RE.match(stripped):
            tokens.append(Heading(len(heading.group("marks")), heading.group("text"), line=index))
            index += 1
            continue

        if _SEPARATOR_RE.match(stripped):
            tokens.append(Paragraph("", line=index))
            index += 1
            continue

        if tag := _TAG_RE.match(stripped):
            end = _block_end(lines, index + 1)
            continuation = [line.strip() for line in lines[index + 1 : end]]
            tokens.append(_tag_token(tag.group("label"), tag.group("rest"), continuation, stripped, index))
            index = end
            continue

        end = _block_end(lines, index + 1)
        prose = " ".join(line.strip() for line in lines[index:end])
        tokens.append(Paragraph(prose, line=index) if tokens else Description(prose, line=index))
        index = end

    return tuple(tokens)


def _tag_token(label: str, rest: str, continuation: list[str], raw: str, line: int) -> DocToken:
    """Classify one tag line plus its continuation lines."""
    if label == "inheritdoc" and not rest.strip() and not continuation:
        return InheritDoc(line=line)
    if label not in KNOWN_TAGS:
        return Description(_join(raw, continuation), line=line)

    if named := _NAMED_REST_RE.match(rest):
        return TaggedSection(label, named.group("name"), _join(named.group("body") or "", continuation), line=line)

    rest = rest.strip()
    if rest.startswith(":"):
        if label in NAMED_TAGS:
            return Description(_join(raw, continuation), line=line)
        return TaggedSection(label, None, _join(rest[1:].strip(), continuation), line=line)

    if not rest and label in NAMED_TAGS:
        return Description(_join(raw, continuation), line=line)
    if label in NAMED_TAGS or not rest:
        return UntaggedSection(label, _join(rest, continuation), line=line)
    return TaggedSection(label, None, _join(rest, continuation), line=line)


def _join(first: str, continuation: list[str]) -> str:
    return " ".join(part for part in (first, *continuation) if part)


def _closing_fence(lines: list[str], start: int, fence: str) -> int:
    """Index of the line closing `fence`, or len(lines) when unterminated."""
    for index in range(start, len(lines)):
        stripped = lines[index].strip()
        if stripped.startswith(fence) and not stripped.strip(fence[0]):
            return index
    return len(lines)


def _block_end(lines: list[str], start: int) -> int:
    """Index of the first line that ends a prose or tag block."""
    for index in range(start, len(lines)):
        stripped = lines[index].strip()
        if not stripped or _FENCE_RE.match(stripped) or _HEADING_RE.match(stripped) or _SEPARATOR_RE.match(stripped) or _TAG_RE.match(stripped):
            return index
    return len(lines)


def _first_text_line(lines: list[str], start: int, end: int) -> int:
    """Index of the first non-blank line in lines[start:end], or `start` when all are blank."""
    return next((index for index in range(start, end) if lines[index].strip()), start)

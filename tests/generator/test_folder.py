import pytest

from docexample.exceptions import MalformedCodeBlockError
from docexample.generator.folder import EmptySectionPolicy, FoldState, fold, parse_dialect
from docexample.generator.nodes import Code, CompileWarning, Markup, Section, SourcePosition
from docexample.generator.tokens import (
    CodeBlock,
    Description,
    Heading,
    InheritDoc,
    Paragraph,
    TaggedSection,
    UntaggedSection,
)

BASIC = TaggedSection("example", "basic", "shows construction")


# ---------------------------------------------------------------------------
# nothing to test
# ---------------------------------------------------------------------------


def test_prose_only_comment_folds_to_nothing():
    tokens = (Description("Just prose."), Heading(2, "Usage"), Paragraph("More prose."), InheritDoc())
    assert fold(tokens) == ()


def test_empty_token_sequence():
    assert fold(()) == ()


def test_tag_without_code_is_dropped():
    assert fold((BASIC,)) == ()
    assert fold((BASIC, Paragraph("Only words here."))) == ()


def test_tag_without_code_kept_as_title_only_section_when_asked():
    result = fold((BASIC, Paragraph("words")), policy=EmptySectionPolicy.KEEP)
    assert result == (Section("example basic", (Markup("shows construction"), Markup("<p>words</p>"))),)


# ---------------------------------------------------------------------------
# sections
# ---------------------------------------------------------------------------


def test_named_tag_with_code():
    result = fold((BASIC, CodeBlock("w = 1")))
    assert result == (Section("example basic", (Markup("shows construction"), Code("w = 1"))),)


def test_two_code_blocks_keep_source_order():
    result = fold((BASIC, CodeBlock("a = 1"), CodeBlock("b = a + 1")))
    assert result == (Section("example basic", (Markup("shows construction"), Code("a = 1"), Code("b = a + 1"))),)


def test_prose_between_code_blocks_stays_in_place():
    result = fold((BASIC, CodeBlock("a = 1"), Paragraph("then"), CodeBlock("b = 2")))
    assert result[0].body == (Markup("shows construction"), Code("a = 1"), Markup("<p>then</p>"), Code("b = 2"))


def test_prose_after_last_code_block_is_cleanup():
    result = fold((BASIC, CodeBlock("w = 1"), Paragraph("after")))
    assert result == (Section("example basic", (Markup("shows construction"), Code("w = 1")), (Markup("<p>after</p>"),)),)


def test_nameless_tag_title_uses_body():
    result = fold((TaggedSection("note", None, "watch out"), CodeBlock("x = 1")))
    assert result == (Section("note watch out", (Code("x = 1"),)),)


def test_untagged_section_title():
    assert fold((UntaggedSection("example", ""), CodeBlock("x = 1"))) == (Section("example", (Code("x = 1"),)),)
    assert fold((UntaggedSection("param", "size"), CodeBlock("x = 1"))) == (Section("param size", (Code("x = 1"),)),)


def test_sections_keep_source_order():
    tokens = (
        TaggedSection("example", "a", "first"),
        CodeBlock("x = 1"),
        TaggedSection("example", "b", "second"),
        CodeBlock("y = 2"),
    )
    assert [section.title for section in fold(tokens)] == ["example a", "example b"]


def test_code_is_normalised():
    result = fold((BASIC, CodeBlock("total   =  sum( [1,2] )")))
    assert result[0].body[-1] == Code("total = sum([1, 2])")


def test_multi_line_statement_is_one_code_statement():
    result = fold((BASIC, CodeBlock("def double(x):\n    return x * 2\nassert double(2) == 4")))
    assert result[0].body[1:] == (Code("def double(x):\n    return x * 2"), Code("assert double(2) == 4"))


# ---------------------------------------------------------------------------
# preamble
# ---------------------------------------------------------------------------


def test_code_before_any_tag_is_shared_preamble():
    result = fold((CodeBlock("import math"), BASIC, CodeBlock("x = math.pi")))
    assert result == (
        Code("import math"),
        Section("example basic", (Markup("shows construction"), Code("x = math.pi"))),
    )


def test_description_before_sections_is_kept():
    result = fold((Description("Intro."), BASIC, CodeBlock("w = 1")))
    assert result[0] == Markup("Intro.")
    assert isinstance(result[1], Section)


def test_description_joins_preamble_code():
    result = fold((Description("Intro."), CodeBlock("import math")))
    assert result == (Markup("Intro."), Code("import math"))


def test_separator_paragraph_is_ignored():
    result = fold((BASIC, CodeBlock("w = 1"), Paragraph("")))
    assert result == (Section("example basic", (Markup("shows construction"), Code("w = 1"))),)


def test_heading_and_inheritdoc_markup():
    result = fold((BASIC, Heading(2, "Usage"), InheritDoc(), CodeBlock("w = 1")))
    assert result[0].body == (Markup("shows construction"), Markup("<h2>Usage</h2>"), Markup("@inheritdoc"), Code("w = 1"))


# ---------------------------------------------------------------------------
# errors and warnings
# ---------------------------------------------------------------------------


def test_malformed_tag_warns_and_keeps_text():
    warnings: list[CompileWarning] = []
    tokens = (Description("@frobnicate x", line=2), CodeBlock("y = 2", line=4))
    result = fold(tokens, origin=SourcePosition("shop.py", 10, 4), warnings=warnings)
    assert result == (Markup("@frobnicate x"), Code("y = 2"))
    assert len(warnings) == 1
    assert warnings[0].position == SourcePosition("shop.py", 12, 4)
    assert warnings[0].text == "@frobnicate x"


def test_malformed_tags_are_anchored_at_their_own_line_and_column():
    warnings: list[CompileWarning] = []
    tokens = (Description("@first", line=0), Description("@second", line=3), CodeBlock("y = 2", line=5))
    fold(tokens, origin=SourcePosition("shop.py", 10, 7), indent=4, warnings=warnings)
    assert [warning.position for warning in warnings] == [SourcePosition("shop.py", 10, 7), SourcePosition("shop.py", 13, 4)]


def test_malformed_tag_without_collector_does_not_fail():
    assert fold((Description("@frobnicate x"), CodeBlock("y = 2"))) == (Markup("@frobnicate x"), Code("y = 2"))


def test_malformed_code_block_is_fatal():
    with pytest.raises(MalformedCodeBlockError) as exc_info:
        fold((BASIC, CodeBlock("x = = 1", line=3)), origin=SourcePosition("shop.py", 10))
    assert exc_info.value.path == "shop.py"
    assert exc_info.value.line == 13
    assert "shop.py:13" in str(exc_info.value)


def test_code_block_parsed_with_test_dialect():
    tokens = (BASIC, CodeBlock("if (n := 3) > 2:\n    pass"))
    assert fold(tokens, dialect="3.12")
    with pytest.raises(MalformedCodeBlockError):
        fold(tokens, dialect="3.7")


def test_parse_dialect():
    assert parse_dialect("3.12") == (3, 12)
    assert parse_dialect("3.8") == (3, 8)


def test_fold_state_result_order():
    state = FoldState(pending_code=(Code("a = 1"),), pending_trailing=(Markup("t"),), completed=(Section("s", (Code("b = 2"),)),))
    assert state.result() == (Code("a = 1"), Markup("t"), Section("s", (Code("b = 2"),)))

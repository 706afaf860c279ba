"""Tests for block segmentation."""

from handoffnotes.adapters.block_segmenter import MarkdownSegmenter, parse_blocks
from handoffnotes.core.model import (
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    Spacer,
)


def test_plain_lines_become_paragraphs():
    """Each non-blank plain line is one paragraph with trimmed content."""
    blocks = parse_blocks("BP stable overnight  \n   Pain 3/10")
    assert blocks == [Paragraph("BP stable overnight"), Paragraph("Pain 3/10")]


def test_blank_line_spacer():
    """A blank line between paragraphs becomes a spacer."""
    assert parse_blocks("a\n\nb") == [Paragraph("a"), Spacer(), Paragraph("b")]


def test_whitespace_only_line_is_blank():
    """Lines holding only whitespace count as blank."""
    assert parse_blocks("a\n \t \nb") == [Paragraph("a"), Spacer(), Paragraph("b")]


def test_crlf_line_endings():
    """CRLF input splits the same as LF input."""
    assert parse_blocks("# Title\r\n- a\r\n- b\r\n") == parse_blocks("# Title\n- a\n- b\n")


def test_empty_input_has_no_blocks():
    """None and empty string produce zero blocks."""
    assert parse_blocks("") == []
    assert parse_blocks(None) == []
    assert MarkdownSegmenter().segment(None) == []


def test_list_accumulation():
    """Consecutive bullet lines collapse into one list."""
    blocks = parse_blocks("- a\n- b\n- c")
    assert blocks == [ListBlock("unordered", ("a", "b", "c"))]


def test_star_and_dash_bullets_share_a_list():
    """Both bullet markers are the same list kind."""
    assert parse_blocks("- a\n* b") == [ListBlock("unordered", ("a", "b"))]


def test_list_kind_switch():
    """Switching marker kind closes one list and opens another."""
    blocks = parse_blocks("- a\n1. b")
    assert blocks == [
        ListBlock("unordered", ("a",)),
        ListBlock("ordered", ("b",)),
    ]


def test_ordered_list_numbers_are_ignored():
    """Source numbering is not kept, only item order."""
    blocks = parse_blocks("3. first\n10. second")
    assert blocks == [ListBlock("ordered", ("first", "second"))]
    assert blocks[0].ordered


def test_blank_line_terminates_list():
    """A blank line ends a list; the next item starts a new one."""
    blocks = parse_blocks("- a\n\n- b")
    assert blocks == [
        ListBlock("unordered", ("a",)),
        Spacer(),
        ListBlock("unordered", ("b",)),
    ]


def test_paragraph_terminates_list():
    """A paragraph line flushes the open list first."""
    blocks = parse_blocks("- a\nnote\n- b")
    assert blocks == [
        ListBlock("unordered", ("a",)),
        Paragraph("note"),
        ListBlock("unordered", ("b",)),
    ]


def test_heading_levels():
    """One to three hashes make headings; four fall through."""
    assert parse_blocks("# A") == [Heading(1, "A")]
    assert parse_blocks("## B") == [Heading(2, "B")]
    assert parse_blocks("### C") == [Heading(3, "C")]
    assert parse_blocks("#### D") == [Paragraph("#### D")]


def test_heading_needs_space_and_content():
    """A hash run without a following space or content is a paragraph."""
    assert parse_blocks("#Title") == [Paragraph("#Title")]
    assert parse_blocks("#   ") == [Paragraph("#")]


def test_heading_content_is_trimmed():
    """Extra spacing after the hashes is not part of the content."""
    assert parse_blocks("##    Overnight  ") == [Heading(2, "Overnight")]


def test_heading_flushes_list():
    """A heading closes an open list."""
    blocks = parse_blocks("- a\n## Next")
    assert blocks == [ListBlock("unordered", ("a",)), Heading(2, "Next")]


def test_horizontal_rule_boundary():
    """Three or more hyphens divide; two do not."""
    assert parse_blocks("---") == [HorizontalRule()]
    assert parse_blocks("-----") == [HorizontalRule()]
    assert parse_blocks("--") == [Paragraph("--")]


def test_rule_flushes_list():
    """A rule closes an open list."""
    blocks = parse_blocks("1. a\n---\n1. b")
    assert blocks == [
        ListBlock("ordered", ("a",)),
        HorizontalRule(),
        ListBlock("ordered", ("b",)),
    ]


def test_bare_bullet_marker_is_paragraph():
    """A marker without content is not a list item."""
    assert parse_blocks("-") == [Paragraph("-")]
    assert parse_blocks("1.") == [Paragraph("1.")]


def test_bold_line_is_not_a_bullet():
    """A line opening with ** is a paragraph, not a * bullet."""
    assert parse_blocks("**Allergies:** PCN") == [Paragraph("**Allergies:** PCN")]


def test_indented_list_item():
    """Leading indentation does not create nesting."""
    assert parse_blocks("- a\n    - b") == [ListBlock("unordered", ("a", "b"))]


def test_list_items_keep_inline_markup():
    """Item text is stored raw, markup untouched."""
    blocks = parse_blocks("- **NPO** after midnight")
    assert blocks[0].items == ("**NPO** after midnight",)


def test_trailing_newline_yields_spacer():
    """A trailing newline is one final blank line."""
    assert parse_blocks("a\n") == [Paragraph("a"), Spacer()]


def test_block_order_matches_source():
    """Mixed input keeps source order."""
    text = "# Handoff\n\n## Vitals\n- HR 88\n- BP 120/80\n---\n1. Recheck labs\nDone"
    kinds = [b.kind for b in parse_blocks(text)]
    assert kinds == ["heading", "spacer", "heading", "list", "hr", "list", "paragraph"]


def test_to_dict():
    """Blocks serialize to plain dicts."""
    assert ListBlock("ordered", ("x",)).to_dict() == {
        "kind": "list",
        "list_kind": "ordered",
        "items": ["x"],
    }
    assert Heading(2, "Vitals").to_dict() == {"kind": "heading", "level": 2, "content": "Vitals"}


def test_byte_order_mark_does_not_block_classification():
    """A leading U+FEFF is ignored when classifying the first line."""
    assert parse_blocks("\ufeff# Title") == [Heading(1, "Title")]
    assert parse_blocks("\ufeff- a\n- b") == [ListBlock("unordered", ("a", "b"))]

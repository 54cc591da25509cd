"""Tests for the escape encoder output format."""

from ansimark.encoder import encode, encode_segment, segment_codes
from ansimark.model import Document, Segment, Selection, StyleChange, apply_style

ESC = "\u001b["
RESET = "\u001b[0m"


def test_plain_text_is_fenced_without_escapes():
    out = encode(Document.from_text("hello"))
    assert out == "```ansi\nhello\n```"
    assert ESC not in out


def test_single_colored_segment():
    doc = apply_style(Document.from_text("hello"), Selection(0, 5), StyleChange(foreground="31"))
    assert encode(doc) == "```ansi\n\u001b[31mhello\u001b[0m\n```"


def test_three_spans_middle_raw():
    doc = Document((
        Segment("hello", foreground="31", styles=("1",)),
        Segment(" "),
        Segment("world", background="45"),
    ))
    assert encode(doc) == (
        "```ansi\n"
        "\u001b[1;31mhello\u001b[0m"
        " "
        "\u001b[45mworld\u001b[0m"
        "\n```"
    )


def test_codes_order_styles_then_foreground_then_background():
    seg = Segment("x", foreground="36", background="41", styles=("4", "1"))
    assert segment_codes(seg) == ["1", "4", "36", "41"]
    assert encode_segment(seg) == "\u001b[1;4;36;41mx\u001b[0m"


def test_plain_segment_encodes_raw():
    assert encode_segment(Segment("raw")) == "raw"


def test_empty_and_blank_text_encode_to_nothing():
    assert encode(Document()) == ""
    assert encode(Document.from_text("   \n ")) == ""


def test_blank_check_uses_raw_text():
    doc = Document.from_text("  ")
    assert encode(doc, raw_text="  ") == ""
    # Whitespace segments still encode once the raw input has content
    doc = Document((Segment("a"), Segment("  ", background="40")))
    assert encode(doc, raw_text="a  ") == "```ansi\na\u001b[40m  \u001b[0m\n```"


def test_empty_segments_are_skipped():
    doc = Document((Segment("a"), Segment(""), Segment("b", foreground="32")))
    assert encode(doc) == "```ansi\na\u001b[32mb\u001b[0m\n```"


def test_redundant_adjacent_segments_are_not_merged():
    doc = Document((Segment("a", foreground="31"), Segment("b", foreground="31")))
    assert encode(doc) == "```ansi\n\u001b[31ma\u001b[0m\u001b[31mb\u001b[0m\n```"


def test_encoding_is_deterministic():
    doc = Document((Segment("a", styles=("1",)), Segment("b")))
    assert encode(doc) == encode(Document(tuple(doc.segments)))

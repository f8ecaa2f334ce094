from datetime import timedelta

import pytest

from vttsuite.core.markup import (
    escape_text,
    parse_line,
    parse_tag,
    render_line,
    render_line_item,
    unescape_text,
)
from vttsuite.core.models import Line, LineItem, StyleAttributes, WebVTTTag


def test_escape_text() -> None:
    assert escape_text("a & b < c > d\xa0e") == "a &amp; b &lt; c &gt; d&nbsp;e"
    assert escape_text("&amp;") == "&amp;amp;"


def test_unescape_text_is_single_pass() -> None:
    assert unescape_text("a &amp; b &lt; c &gt; d&nbsp;e") == "a & b < c > d\xa0e"
    assert unescape_text("&amp;lt;") == "&lt;"
    assert unescape_text("x&nbspy") == "x\xa0y"


@pytest.mark.parametrize("text", [
    "plain",
    "Tom & Jerry <3",
    "&amp; already escaped",
    "non\xa0breaking",
    "&nbsp",
])
def test_unescape_reverses_escape(text: str) -> None:
    assert unescape_text(escape_text(text)) == text


def test_parse_tag() -> None:
    assert parse_tag("<b>") == WebVTTTag(name="b")
    assert parse_tag("<c.yellow.bg>") == WebVTTTag(name="c", classes=["yellow", "bg"])
    assert parse_tag("<v Bob>") == WebVTTTag(name="v", annotation="Bob")
    assert parse_tag("<lang en-US>") == WebVTTTag(name="lang", annotation="en-US")
    assert parse_tag("<v.loud Mary Jane>") == WebVTTTag(name="v", classes=["loud"], annotation="Mary Jane")


def test_parse_line_with_voice_and_bold() -> None:
    line = parse_line("<v Bob>Hello <b>world</b></v>")

    assert line.voice_name == "Bob"
    assert [item.text for item in line.items] == ["Hello", "world"]
    assert line.items[0].inline_style is None
    assert [tag.name for tag in line.items[1].inline_style.tags] == ["b"]


def test_parse_line_keeps_first_voice_only() -> None:
    line = parse_line("<v Alice>one <v Bob>two")

    assert line.voice_name == "Alice"
    assert line.text() == "one two"


def test_parse_line_takes_voice_after_anonymous_voice() -> None:
    line = parse_line("<v>one <v Bob>two")

    assert line.voice_name == "Bob"
    assert render_line(line) == "<v Bob>one two"


def test_parse_line_anonymous_voice_has_no_name() -> None:
    assert parse_line("<v>hello").voice_name is None


def test_parse_line_ignores_extra_closing_tags() -> None:
    line = parse_line("a</b> c</i>")

    assert [item.text for item in line.items] == ["a", "c"]
    assert all(item.inline_style is None for item in line.items)


def test_parse_line_nested_tags_snapshot_the_stack() -> None:
    line = parse_line("<i>slanted <b>both</b> again</i>")

    assert [item.text for item in line.items] == ["slanted", "both", "again"]
    assert [tag.name for tag in line.items[0].inline_style.tags] == ["i"]
    assert [tag.name for tag in line.items[1].inline_style.tags] == ["i", "b"]
    assert [tag.name for tag in line.items[2].inline_style.tags] == ["i"]


def test_parse_line_derives_color_from_class_tag() -> None:
    line = parse_line("<c.yellow>Out of vision</c>")

    assert line.items[0].inline_style.color == "#ffff00"


def test_parse_line_inline_timestamps() -> None:
    line = parse_line("Never <00:00:01.000>drink <00:00:02.000>liquid")

    assert [item.text for item in line.items] == ["Never", "drink", "liquid"]
    assert line.items[0].start_at is None
    assert line.items[1].start_at == timedelta(seconds=1)
    assert line.items[2].start_at == timedelta(seconds=2)


def test_parse_line_bad_inline_timestamp_defaults_to_zero() -> None:
    line = parse_line("<00:00:99.000>late")

    assert line.items[0].text == "late"
    assert line.items[0].start_at == timedelta(0)


def test_parse_line_inline_timestamp_needs_ascii_digits() -> None:
    text = "<\u0660\u0660:\u0660\u0661.\u0660\u0660\u0660>late"
    line = parse_line(text)

    assert len(line.items) == 1
    assert line.items[0].text == text
    assert line.items[0].start_at is None


def test_parse_line_unescapes_text() -> None:
    line = parse_line("&lt;b&gt; is not a tag &amp; neither is &nbsp;this")

    assert line.items[0].text == "<b> is not a tag & neither is \xa0this"
    assert line.items[0].inline_style is None


def test_parse_line_blank_has_no_items() -> None:
    assert parse_line("   ").items == []


def test_render_line_with_voice() -> None:
    line = Line(
        items=[
            LineItem(text="Hello"),
            LineItem(text="world", inline_style=StyleAttributes(tags=[WebVTTTag(name="b")])),
        ],
        voice_name="Bob",
    )

    assert render_line(line) == "<v Bob>Hello <b>world</b>"


def test_render_line_item_escapes_and_timestamps() -> None:
    item = LineItem(text="a < b", start_at=timedelta(seconds=2))

    assert render_line_item(item) == "<00:00:02.000>a &lt; b"


def test_render_line_item_color_without_class_tag() -> None:
    item = LineItem(text="noise", inline_style=StyleAttributes(color="#FF0000"))

    assert render_line_item(item) == "<c.red>noise</c>"


def test_render_line_item_does_not_repeat_color_class() -> None:
    line = parse_line("<c.yellow>hi</c>")

    assert render_line(line) == "<c.yellow>hi</c>"


def test_render_line_item_unknown_color_is_dropped() -> None:
    item = LineItem(text="x", inline_style=StyleAttributes(color="#123456"))

    assert render_line_item(item) == "x"


@pytest.mark.parametrize("text", [
    "<b><i>both</i></b>",
    "<c.magenta.loud>song</c>",
    "<lang en>hello</lang>",
    "<u>under</u> plain <ruby>kanji</ruby>",
])
def test_rendered_tags_tokenize_to_same_names_and_classes(text: str) -> None:
    first = parse_line(text)
    second = parse_line(render_line(first))

    def tag_shape(line):
        return [
            [(tag.name, tag.classes) for tag in item.inline_style.tags] if item.inline_style else []
            for item in line.items
        ]

    assert tag_shape(second) == tag_shape(first)
    assert second.text() == first.text()

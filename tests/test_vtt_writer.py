from datetime import timedelta
import io

import pytest

from vttsuite.core.models import Cue, Document, Line, LineItem, Region, StyleAttributes
from vttsuite.core.vtt_reader import load_webvtt, parse_webvtt
from vttsuite.core.vtt_writer import WebVTTWriter, render_webvtt, save_webvtt


def test_end_to_end_voice_and_bold() -> None:
    document = parse_webvtt(
        "WEBVTT\n"
        "\n"
        "00:00:01.000 --> 00:00:04.000 align:center\n"
        "<v Bob>Hello <b>world</b></v>\n"
    )

    assert render_webvtt(document) == (
        "WEBVTT\n"
        "\n"
        "1\n"
        "00:00:01.000 --> 00:00:04.000 align:center\n"
        "<v Bob>Hello <b>world</b>\n"
    )


def test_render_sample_is_canonical(sample_vtt: str, canonical_vtt: str) -> None:
    assert render_webvtt(parse_webvtt(sample_vtt)) == canonical_vtt


def test_canonical_output_is_stable(canonical_vtt: str) -> None:
    assert render_webvtt(parse_webvtt(canonical_vtt)) == canonical_vtt


def test_round_trip_keeps_cues(sample_vtt: str) -> None:
    original = parse_webvtt(sample_vtt)
    reparsed = parse_webvtt(render_webvtt(original))

    assert [(c.start, c.end, c.text()) for c in reparsed.cues] == \
        [(c.start, c.end, c.text()) for c in original.cues]


def test_render_empty_document() -> None:
    assert render_webvtt(Document()) == "WEBVTT\n"


def test_render_with_correlation_offset(simple_vtt: str) -> None:
    text = render_webvtt(parse_webvtt(simple_vtt), offset=timedelta(seconds=10))

    assert text.startswith(
        "WEBVTT\n"
        "X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000\n"
        "\n"
        "1\n"
    )


def test_correlation_offset_is_reapplied_on_read(simple_vtt: str) -> None:
    text = render_webvtt(parse_webvtt(simple_vtt), offset=timedelta(seconds=10))

    assert parse_webvtt(text).cues[0].start == timedelta(seconds=11)


def test_cues_are_renumbered() -> None:
    document = Document(cues=[
        Cue(start=timedelta(seconds=1), end=timedelta(seconds=2),
            lines=[Line(items=[LineItem(text="a")])], index=7),
        Cue(start=timedelta(seconds=3), end=timedelta(seconds=4),
            lines=[Line(items=[LineItem(text="b")])], index=3),
    ])

    assert render_webvtt(document) == (
        "WEBVTT\n"
        "\n"
        "1\n"
        "00:00:01.000 --> 00:00:02.000\n"
        "a\n"
        "\n"
        "2\n"
        "00:00:03.000 --> 00:00:04.000\n"
        "b\n"
    )


def test_regions_are_sorted_by_id() -> None:
    document = Document(regions={
        "b": Region(id="b", inline_style=StyleAttributes(width="10%")),
        "a": Region(id="a", inline_style=StyleAttributes(lines=2)),
    })

    assert render_webvtt(document) == (
        "WEBVTT\n"
        "\n"
        "Region: id=a lines=2\n"
        "Region: id=b width=10%\n"
    )


def test_comments_and_escaping() -> None:
    document = Document(cues=[
        Cue(start=timedelta(seconds=1), end=timedelta(seconds=2),
            lines=[Line(items=[LineItem(text="Fish & <chips>")])],
            comments=["first", "second"]),
    ])

    assert render_webvtt(document) == (
        "WEBVTT\n"
        "\n"
        "NOTE first\n"
        "second\n"
        "\n"
        "1\n"
        "00:00:01.000 --> 00:00:02.000\n"
        "Fish &amp; &lt;chips&gt;\n"
    )


def test_write_to_stream(simple_vtt: str) -> None:
    stream = io.StringIO()
    WebVTTWriter().write(parse_webvtt(simple_vtt), stream)

    assert stream.getvalue().startswith("WEBVTT\n\n1\n00:00:01.000 --> 00:00:02.000\nFirst\n")


def test_write_to_failing_stream_names_destination(simple_vtt: str) -> None:
    class BrokenStream:
        name = "broken-sink"

        def write(self, content):
            raise OSError("disk full")

    with pytest.raises(IOError, match="broken-sink"):
        WebVTTWriter().write(parse_webvtt(simple_vtt), BrokenStream())


def test_save_webvtt_uses_unix_newlines(tmp_path, simple_vtt: str) -> None:
    output = tmp_path / "nested" / "out.vtt"
    save_webvtt(parse_webvtt(simple_vtt), output)

    raw = output.read_bytes()
    assert raw.startswith(b"WEBVTT\n\n1\n")
    assert b"\r\n" not in raw
    assert len(load_webvtt(output).cues) == 2


def test_write_file_failure_names_destination(tmp_path, simple_vtt: str) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(IOError, match="Cannot write VTT file"):
        WebVTTWriter().write_file(parse_webvtt(simple_vtt), blocker / "out.vtt")

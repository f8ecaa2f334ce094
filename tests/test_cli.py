from datetime import timedelta
from pathlib import Path

import pytest

from vttsuite.core.vtt_reader import load_webvtt
from vttsuite.ui.cli import CLIHandler, attach_signed_values, main
from vttsuite.utils.constants import APP_VERSION, BACKUP_DIR_NAME


def run_cli(*argv: str) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(list(argv))
    return excinfo.value.code


def test_parser_knows_every_command() -> None:
    parser = CLIHandler().create_parser()

    args = parser.parse_args(["sync", "episode.vtt", "--offset", "-2s", "--no-backup"])
    assert args.command == "sync"
    assert args.offset == "-2s"
    assert args.no_backup

    args = parser.parse_args(["shift-start", "episode.vtt", "--to", "00:00:50.983"])
    assert args.target == "00:00:50.983"
    assert args.input == Path("episode.vtt")

    args = parser.parse_args(["convert", "episode.vtt", "--webvtt-offset", "10"])
    assert args.webvtt_offset == 10.0


def test_version(capsys) -> None:
    assert run_cli("--version") == 0
    assert APP_VERSION in capsys.readouterr().out


def test_no_command_fails() -> None:
    assert run_cli() == 1


def test_convert_to_output(write_vtt, sample_vtt: str, canonical_vtt: str, tmp_path: Path) -> None:
    source = write_vtt(sample_vtt)
    output = tmp_path / "clean.vtt"

    assert run_cli("convert", str(source), "-o", str(output)) == 0
    assert output.read_text(encoding="utf-8") == canonical_vtt


def test_convert_with_correlation_offset(write_vtt, simple_vtt: str, tmp_path: Path) -> None:
    source = write_vtt(simple_vtt)
    output = tmp_path / "hls.vtt"

    assert run_cli("convert", str(source), "-o", str(output), "--webvtt-offset", "10") == 0
    assert "X-TIMESTAMP-MAP=LOCAL:00:00:00.000,MPEGTS:900000" in output.read_text(encoding="utf-8")


def test_convert_in_place_creates_backup(write_vtt, simple_vtt: str, tmp_path: Path) -> None:
    source = write_vtt(simple_vtt)

    assert run_cli("convert", str(source)) == 0
    assert len(list((tmp_path / BACKUP_DIR_NAME).iterdir())) == 1


def test_convert_malformed_file_fails(write_vtt) -> None:
    source = write_vtt("WEBVTT\n\n00:01.000 --> 00:02.000 region:nowhere\nhi\n")

    assert run_cli("convert", str(source)) == 1


def test_convert_missing_input_fails(tmp_path: Path) -> None:
    assert run_cli("convert", str(tmp_path / "missing.vtt")) == 1


def test_sync(write_vtt, simple_vtt: str, tmp_path: Path) -> None:
    source = write_vtt(simple_vtt)

    assert run_cli("sync", str(source), "--offset", "1500ms", "--no-backup") == 0
    assert load_webvtt(source).cues[0].start == timedelta(milliseconds=2500)
    assert not (tmp_path / BACKUP_DIR_NAME).exists()


@pytest.mark.parametrize("offset", ["-500ms", "-0.5s", "-00:00:00.500"])
def test_sync_moves_cues_earlier(write_vtt, simple_vtt: str, offset: str) -> None:
    source = write_vtt(simple_vtt)

    assert run_cli("sync", str(source), "--offset", offset, "--no-backup") == 0
    assert load_webvtt(source).cues[0].start == timedelta(milliseconds=500)


def test_attach_signed_values() -> None:
    assert attach_signed_values(["sync", "a.vtt", "--offset", "-2s", "-o", "b.vtt"]) == \
        ["sync", "a.vtt", "--offset=-2s", "-o", "b.vtt"]
    assert attach_signed_values(["sync", "a.vtt", "--offset", "2s"]) == ["sync", "a.vtt", "--offset", "2s"]
    assert attach_signed_values(["sync", "a.vtt", "--offset", "-o"]) == ["sync", "a.vtt", "--offset", "-o"]


def test_shift_start_rejects_negative_target(write_vtt, simple_vtt: str) -> None:
    source = write_vtt(simple_vtt)

    assert run_cli("shift-start", str(source), "--to", "-00:00:01.000", "--no-backup") == 1


def test_sync_rejects_bad_offset(write_vtt, simple_vtt: str) -> None:
    source = write_vtt(simple_vtt)

    assert run_cli("sync", str(source), "--offset", "later") == 1


def test_shift_start(write_vtt, simple_vtt: str, tmp_path: Path) -> None:
    source = write_vtt(simple_vtt)
    output = tmp_path / "aligned.vtt"

    assert run_cli("shift-start", str(source), "--to", "00:01:00.000", "-o", str(output)) == 0
    assert load_webvtt(output).cues[0].start == timedelta(minutes=1)


def test_info_for_file(write_vtt, sample_vtt: str, capsys) -> None:
    source = write_vtt(sample_vtt)

    assert run_cli("info", str(source)) == 0

    out = capsys.readouterr().out
    assert "Cues: 2" in out
    assert "Regions: 1" in out
    assert "Styles: 1" in out
    assert "Duration: 00:00:07.500" in out


def test_info_for_directory(write_vtt, simple_vtt: str, tmp_path: Path, capsys) -> None:
    write_vtt(simple_vtt, "one.vtt")
    write_vtt(simple_vtt, "season/two.vtt")

    assert run_cli("info", str(tmp_path)) == 0

    out = capsys.readouterr().out
    assert "one.vtt" in out
    assert "two.vtt" in out


def test_info_for_empty_directory_fails(tmp_path: Path) -> None:
    assert run_cli("info", str(tmp_path)) == 1

# tests/conftest.py
from pathlib import Path
import pytest

SAMPLE_VTT = (
    "WEBVTT\n"
    "\n"
    "STYLE\n"
    "::cue(b) {\n"
    "  color: peachpuff;\n"
    "}\n"
    "\n"
    "Region: id=fred width=40% lines=3 regionanchor=0%,100% viewportanchor=10%,90% scroll=up\n"
    "\n"
    "NOTE this is a comment\n"
    "that spans lines\n"
    "\n"
    "1\n"
    "00:01.000 --> 00:04.000 align:center region:fred\n"
    "<v Bob>Hello <b>world</b></v>\n"
    "\n"
    "2\n"
    "00:00:05.000 --> 00:00:07.500 position:10%,line-left size:35%\n"
    "Second <c.yellow>line</c>\n"
    "&amp; more\n"
)

# SAMPLE_VTT as written back by the writer
SAMPLE_VTT_CANONICAL = (
    "WEBVTT\n"
    "\n"
    "STYLE\n"
    "::cue(b) {\n"
    "color: peachpuff;\n"
    "}\n"
    "\n"
    "Region: id=fred lines=3 regionanchor=0%,100% scroll=up viewportanchor=10%,90% width=40%\n"
    "\n"
    "NOTE this is a comment\n"
    "that spans lines\n"
    "\n"
    "1\n"
    "00:00:01.000 --> 00:00:04.000 align:center region:fred\n"
    "<v Bob>Hello <b>world</b>\n"
    "\n"
    "2\n"
    "00:00:05.000 --> 00:00:07.500 position:10%,line-left size:35%\n"
    "Second <c.yellow>line</c>\n"
    "&amp; more\n"
)

SIMPLE_VTT = (
    "WEBVTT\n"
    "\n"
    "00:00:01.000 --> 00:00:02.000\n"
    "First\n"
    "\n"
    "00:00:03.000 --> 00:00:05.000\n"
    "Second\n"
)


@pytest.fixture
def sample_vtt() -> str:
    return SAMPLE_VTT


@pytest.fixture
def write_vtt(tmp_path: Path):
    """Write VTT text to a file under tmp_path and return its path."""
    def _write(content: str, name: str = "episode.vtt") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="\n")
        return path
    return _write


@pytest.fixture
def canonical_vtt() -> str:
    return SAMPLE_VTT_CANONICAL


@pytest.fixture
def simple_vtt() -> str:
    return SIMPLE_VTT

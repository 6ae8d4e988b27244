"""Tests for the one-line state file format."""

from pathlib import Path

import pytest

from jdk_pulse.core.non_ideal_state import InvalidHome, StateCorrupt
from jdk_pulse.core.state_format import parse_state_content, render_state_content, validate_home
from jdk_pulse.core.types import ActiveSelection

STATE = Path("/home/u/.jdk_current")


def test_parse_single_line() -> None:
    result = parse_state_content(b"/opt/jdk-21\n", path=STATE)
    assert result == ActiveSelection(home="/opt/jdk-21")


@pytest.mark.parametrize("raw", [b"", b"\n", b"  \n\n"])
def test_blank_content_means_none_selected(raw: bytes) -> None:
    assert parse_state_content(raw, path=STATE) == ActiveSelection.none()


def test_windows_line_endings_are_accepted() -> None:
    result = parse_state_content(b"C:\\Program Files\\Java\\jdk-21\r\n", path=STATE)
    assert result == ActiveSelection(home="C:\\Program Files\\Java\\jdk-21")


@pytest.mark.parametrize(
    ("raw", "reason_fragment"),
    [
        (b"\xff\xfe\x00", "UTF-8"),
        (b"/opt/jdk\x00\n", "NUL"),
        (b"/opt/a\n/opt/b\n", "found 2"),
        (b"relative/jdk\n", "absolute"),
    ],
)
def test_corrupt_content(raw: bytes, reason_fragment: str) -> None:
    result = parse_state_content(raw, path=STATE)
    assert isinstance(result, StateCorrupt)
    assert reason_fragment in result.reason
    assert result.path == str(STATE)


def test_render_is_single_line() -> None:
    assert render_state_content("/opt/jdk-17") == b"/opt/jdk-17\n"


def test_validate_home_accepts_directory(tmp_path: Path) -> None:
    assert validate_home(str(tmp_path)) is None


@pytest.mark.parametrize(
    ("home", "reason"),
    [
        ("", "not a single-line path"),
        ("/opt/a\n/opt/b", "not a single-line path"),
        ("jdk-17", "not an absolute path"),
    ],
)
def test_validate_home_rejects_bad_strings(home: str, reason: str) -> None:
    result = validate_home(home)
    assert isinstance(result, InvalidHome)
    assert result.reason == reason


def test_validate_home_rejects_missing_and_files(tmp_path: Path) -> None:
    missing = validate_home(str(tmp_path / "nope"))
    assert isinstance(missing, InvalidHome)
    assert missing.reason == "path does not exist"

    file_path = tmp_path / "file"
    file_path.write_text("", encoding="utf-8")
    not_dir = validate_home(str(file_path))
    assert isinstance(not_dir, InvalidHome)
    assert not_dir.reason == "not a directory"

"""Format of the canonical state file: one line, the absolute JDK home."""

import os
from pathlib import Path

from jdk_pulse.core.non_ideal_state import InvalidHome, StateCorrupt
from jdk_pulse.core.types import ActiveSelection


def parse_state_content(raw: bytes, *, path: Path) -> ActiveSelection | StateCorrupt:
    """Parse state file bytes.

    Empty or whitespace-only content means "none selected".
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return StateCorrupt(path=str(path), reason="not valid UTF-8")
    if "\x00" in text:
        return StateCorrupt(path=str(path), reason="contains NUL bytes")
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return ActiveSelection.none()
    if len(lines) > 1:
        return StateCorrupt(path=str(path), reason=f"expected one line, found {len(lines)}")
    home = lines[0]
    if not (Path(home).is_absolute() or _is_windows_absolute(home)):
        return StateCorrupt(path=str(path), reason=f"not an absolute path: {home!r}")
    return ActiveSelection(home=home)


def render_state_content(home: str) -> bytes:
    return f"{home}\n".encode()


def validate_home(home: str) -> InvalidHome | None:
    """Check that ``home`` can be selected. Returns None when it can."""
    if not home or "\n" in home or "\r" in home or "\x00" in home:
        return InvalidHome(home=home, reason="not a single-line path")
    if not (Path(home).is_absolute() or _is_windows_absolute(home)):
        return InvalidHome(home=home, reason="not an absolute path")
    path = Path(home)
    if not path.exists():
        return InvalidHome(home=home, reason="path does not exist")
    if not path.is_dir():
        return InvalidHome(home=home, reason="not a directory")
    if not os.access(path, os.R_OK | os.X_OK):
        return InvalidHome(home=home, reason="directory is not readable")
    return None


def _is_windows_absolute(home: str) -> bool:
    return len(home) >= 3 and home[0].isalpha() and home[1] == ":" and home[2] in "\\/"

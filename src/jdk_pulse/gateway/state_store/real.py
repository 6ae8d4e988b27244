"""Real StateStore implementation using atomic file replacement."""

import logging
import os
import tempfile
from pathlib import Path

from jdk_pulse.core.non_ideal_state import InvalidHome, StateCorrupt, StateWriteFailed
from jdk_pulse.core.state_format import parse_state_content, render_state_content, validate_home
from jdk_pulse.core.types import ActiveSelection
from jdk_pulse.gateway.state_store.abc import StateStore

logger = logging.getLogger(__name__)


def atomic_write_bytes(path: Path, data: bytes, *, mode: int | None = None) -> None:
    """Replace ``path`` with ``data`` so readers never see a partial file.

    Writes a temp file in the same directory, fsyncs it and renames it over
    the target. On failure the temp file is removed and the target is left
    untouched.

    Raises:
        OSError: If the directory is not writable or the rename fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class RealStateStore(StateStore):
    """Production implementation backed by one file per user."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> ActiveSelection | StateCorrupt:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return ActiveSelection.none()
        except IsADirectoryError:
            return StateCorrupt(path=str(self._path), reason="is a directory")
        except OSError as e:
            return StateCorrupt(path=str(self._path), reason=str(e))
        return parse_state_content(raw, path=self._path)

    def write(self, home: str) -> ActiveSelection | InvalidHome | StateWriteFailed:
        invalid = validate_home(home)
        if invalid is not None:
            logger.debug("Rejecting selection: %s", invalid.message)
            return invalid
        try:
            atomic_write_bytes(self._path, render_state_content(home))
        except OSError as e:
            logger.debug("State write to %s failed: %s", self._path, e)
            return StateWriteFailed(path=str(self._path), reason=str(e))
        logger.debug("Wrote %s to %s", home, self._path)
        return ActiveSelection(home=home)

    def clear(self) -> ActiveSelection | StateWriteFailed:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            return StateWriteFailed(path=str(self._path), reason=str(e))
        logger.debug("Cleared %s", self._path)
        return ActiveSelection.none()

"""Fake StateStore implementation for testing."""

from pathlib import Path

from jdk_pulse.core.non_ideal_state import InvalidHome, StateCorrupt, StateWriteFailed
from jdk_pulse.core.state_format import validate_home
from jdk_pulse.core.types import ActiveSelection
from jdk_pulse.gateway.state_store.abc import StateStore


class FakeStateStore(StateStore):
    """Test implementation - in-memory storage, no state file.

    Homes are still validated against the real filesystem, so tests pass
    ``tmp_path`` directories as JDK homes.

    Usage:
        store = FakeStateStore(home="/opt/jdk-21")
        store.write(str(tmp_path / "jdk-17"))
        assert store.writes == [str(tmp_path / "jdk-17")]
    """

    def __init__(
        self,
        *,
        home: str | None = None,
        corrupt_reason: str | None = None,
        write_error: str | None = None,
        path: Path | None = None,
    ) -> None:
        """Create FakeStateStore.

        Args:
            home: Initially selected home (None = no selection)
            corrupt_reason: If set, read() returns StateCorrupt until a write or clear
            write_error: If set, write() and clear() fail with StateWriteFailed
            path: Reported state file path
        """
        self._home = home
        self._corrupt_reason = corrupt_reason
        self._write_error = write_error
        self._path = path if path is not None else Path("/fake/home/.jdk_current")
        self._writes: list[str] = []
        self._clear_count = 0

    @property
    def writes(self) -> list[str]:
        """Homes successfully written, in order. For test assertions only."""
        return list(self._writes)

    @property
    def clear_count(self) -> int:
        """Number of successful clear() calls. For test assertions only."""
        return self._clear_count

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> ActiveSelection | StateCorrupt:
        if self._corrupt_reason is not None:
            return StateCorrupt(path=str(self._path), reason=self._corrupt_reason)
        return ActiveSelection(home=self._home)

    def write(self, home: str) -> ActiveSelection | InvalidHome | StateWriteFailed:
        invalid = validate_home(home)
        if invalid is not None:
            return invalid
        if self._write_error is not None:
            return StateWriteFailed(path=str(self._path), reason=self._write_error)
        self._home = home
        self._corrupt_reason = None
        self._writes.append(home)
        return ActiveSelection(home=home)

    def clear(self) -> ActiveSelection | StateWriteFailed:
        if self._write_error is not None:
            return StateWriteFailed(path=str(self._path), reason=self._write_error)
        self._home = None
        self._corrupt_reason = None
        self._clear_count += 1
        return ActiveSelection.none()

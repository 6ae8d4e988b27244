"""Abstract base class for the canonical active-JDK state.

The state is one file holding one line: the absolute home of the selected
JDK. Shell hooks read the same file without any of this package's code, so
every implementation must keep that format.

Three implementations:
- RealStateStore: Production - atomic replace on the real filesystem
- FakeStateStore: Testing - in-memory storage, never touches disk
- DryRunStateStore: Preview - reads real, prints instead of writing
"""

from abc import ABC, abstractmethod
from pathlib import Path

from jdk_pulse.core.non_ideal_state import InvalidHome, StateCorrupt, StateWriteFailed
from jdk_pulse.core.types import ActiveSelection


class StateStore(ABC):
    """Single-writer-many-reader record of the active JDK."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Location of the state file (consumed by the shell hooks)."""
        ...

    @abstractmethod
    def read(self) -> ActiveSelection | StateCorrupt:
        """Read the current selection.

        Returns:
            ActiveSelection (``home=None`` when the file is missing or empty),
            or StateCorrupt if the file cannot be parsed as one path line
        """
        ...

    @abstractmethod
    def write(self, home: str) -> ActiveSelection | InvalidHome | StateWriteFailed:
        """Atomically replace the selection.

        ``home`` is validated as an existing, readable directory before
        anything is written; concurrent readers observe either the previous
        or the new content, never a mixture.

        Args:
            home: Absolute JDK home path

        Returns:
            The new selection, InvalidHome, or StateWriteFailed (prior content intact)
        """
        ...

    @abstractmethod
    def clear(self) -> ActiveSelection | StateWriteFailed:
        """Remove the selection (explicit user action). Missing file is fine."""
        ...

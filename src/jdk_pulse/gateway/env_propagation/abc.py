"""Abstract base class for pushing the selection into OS environment stores.

Used where processes cannot poll the state file (desktop applications on
Windows and macOS). On store-and-poll platforms the shell hook already
converges, so the implementation is a no-op.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from jdk_pulse.core.non_ideal_state import PropagationFailed
from jdk_pulse.core.types import ActiveSelection


@dataclass(frozen=True)
class PropagationApplied:
    """The OS environment store now reflects the selection."""

    mechanism: str
    home: str | None


@dataclass(frozen=True)
class PropagationSkipped:
    """This platform has no global store to update."""

    mechanism: str


PropagationOutcome = PropagationApplied | PropagationSkipped | PropagationFailed


class EnvPropagator(ABC):
    """Best-effort propagation of the active JDK to OS-global environment."""

    @property
    @abstractmethod
    def mechanism(self) -> str:
        """Short name for messages (e.g. "launchctl", "windows-registry", "none")."""
        ...

    @property
    @abstractmethod
    def supports_global_store(self) -> bool:
        """Whether propagate() touches an OS-level store at all."""
        ...

    @abstractmethod
    def propagate(self, selection: ActiveSelection) -> PropagationOutcome:
        """Update the home-path and search-path entries, then notify listeners.

        A selection with ``home=None`` removes the entries.

        Returns:
            PropagationApplied, PropagationSkipped, or PropagationFailed (non-fatal)
        """
        ...

    @abstractmethod
    def read_current(self) -> str | None:
        """Home value currently held by the OS store (None if unset or unsupported)."""
        ...

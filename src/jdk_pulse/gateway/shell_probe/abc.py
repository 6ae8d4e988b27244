"""Abstract base class for probing a fresh interactive shell."""

from abc import ABC, abstractmethod

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import ProbeFailure
from jdk_pulse.core.shell_probe import ShellSnapshot


class ShellProbe(ABC):
    """Starts a new interactive shell and reports the Java it ends up with."""

    @abstractmethod
    def probe(
        self, shell_path: str, *, timeout: float, cancel: CancelToken | None
    ) -> ShellSnapshot | ProbeFailure:
        """Run the probe script in ``shell_path``.

        The child is killed (and reaped) on timeout or cancellation.

        Returns:
            ShellSnapshot, or ProbeTimeout / ProbeSpawnFailed / ProbeCancelled
        """
        ...

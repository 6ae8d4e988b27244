"""Fake ShellProbe implementation for testing."""

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.non_ideal_state import ProbeCancelled, ProbeFailure
from jdk_pulse.core.shell_probe import ShellSnapshot
from jdk_pulse.gateway.shell_probe.abc import ShellProbe


class FakeShellProbe(ShellProbe):
    """Returns a canned snapshot or failure.

    Usage:
        probe = FakeShellProbe(java_home="/opt/jdk-21", java_version="21.0.1")
        probe = FakeShellProbe(failure=ProbeTimeout(command="zsh", timeout_seconds=2))
    """

    def __init__(
        self,
        *,
        java_home: str | None = None,
        java_version: str | None = None,
        failure: ProbeFailure | None = None,
    ) -> None:
        self._java_home = java_home
        self._java_version = java_version
        self._failure = failure
        self._probed: list[str] = []

    @property
    def probed_shells(self) -> list[str]:
        """Shell paths probed, in order. For test assertions only."""
        return list(self._probed)

    def probe(
        self, shell_path: str, *, timeout: float, cancel: CancelToken | None
    ) -> ShellSnapshot | ProbeFailure:
        self._probed.append(shell_path)
        if cancel is not None and cancel.cancelled:
            return ProbeCancelled(command=f"{shell_path} -i -c <probe>")
        if self._failure is not None:
            return self._failure
        output = None
        if self._java_version is not None:
            output = f'openjdk version "{self._java_version}"'
        return ShellSnapshot(
            shell=shell_path, java_home=self._java_home, java_version_output=output
        )

"""Non-ideal states returned (not raised) by jdk-pulse operations.

Each type carries a human-readable ``message`` plus the context the UI layer
needs to render a differentiated explanation, and an ``error_type`` slug.
Callers narrow ``T | NonIdealState`` unions with isinstance checks, or with
``EnsureIdeal`` at the CLI boundary.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class NonIdealState(Protocol):
    """Structural type implemented by every non-ideal state below."""

    @property
    def error_type(self) -> str: ...

    @property
    def message(self) -> str: ...


@dataclass(frozen=True)
class DiscoveryUnavailable:
    """A discovery source could not run. Never aborts discovery."""

    source: str
    reason: str

    @property
    def error_type(self) -> str:
        return "discovery-unavailable"

    @property
    def message(self) -> str:
        return f"JDK source '{self.source}' unavailable: {self.reason}"


@dataclass(frozen=True)
class InvalidHome:
    """Selection target is missing, not a directory, or unreadable."""

    home: str
    reason: str

    @property
    def error_type(self) -> str:
        return "invalid-home"

    @property
    def message(self) -> str:
        return f"Invalid JDK home {self.home}: {self.reason}"


@dataclass(frozen=True)
class StateCorrupt:
    """The canonical state file exists but cannot be parsed as one path line."""

    path: str
    reason: str

    @property
    def error_type(self) -> str:
        return "state-corrupt"

    @property
    def message(self) -> str:
        return (
            f"State file {self.path} is corrupt ({self.reason}). "
            "Run 'jdk-pulse clear' or select a JDK again to replace it."
        )


@dataclass(frozen=True)
class StateWriteFailed:
    """The atomic replace of the state file failed; prior content is intact."""

    path: str
    reason: str

    @property
    def error_type(self) -> str:
        return "state-write-failed"

    @property
    def message(self) -> str:
        return f"Could not write state file {self.path}: {self.reason}"


@dataclass(frozen=True)
class JdkNotFound:
    """No discovered JDK matches the requested id or version."""

    requested: str
    known_ids: tuple[str, ...]

    @property
    def error_type(self) -> str:
        return "jdk-not-found"

    @property
    def message(self) -> str:
        if not self.known_ids:
            return f"JDK '{self.requested}' not found (no JDKs discovered)"
        return f"JDK '{self.requested}' not found. Known ids: {', '.join(self.known_ids)}"


@dataclass(frozen=True)
class TargetUnwritable:
    """A shell configuration file cannot be opened for writing."""

    path: str
    reason: str

    @property
    def error_type(self) -> str:
        return "target-unwritable"

    @property
    def message(self) -> str:
        return f"Cannot write {self.path}: {self.reason}"


@dataclass(frozen=True)
class MalformedBlock:
    """Hook markers are unbalanced, duplicated or out of order."""

    path: str
    reason: str

    @property
    def error_type(self) -> str:
        return "malformed-block"

    @property
    def message(self) -> str:
        return (
            f"jdk-pulse hook block in {self.path} is malformed ({self.reason}). "
            "Fix the marker lines by hand; nothing was changed."
        )


@dataclass(frozen=True)
class ProbeTimeout:
    """A subprocess probe exceeded its time budget and was killed."""

    command: str
    timeout_seconds: float

    @property
    def error_type(self) -> str:
        return "probe-timeout"

    @property
    def message(self) -> str:
        return f"'{self.command}' did not finish within {self.timeout_seconds:g}s"


@dataclass(frozen=True)
class ProbeSpawnFailed:
    """A subprocess probe could not be started."""

    command: str
    reason: str

    @property
    def error_type(self) -> str:
        return "probe-spawn-failed"

    @property
    def message(self) -> str:
        return f"Could not start '{self.command}': {self.reason}"


@dataclass(frozen=True)
class ProbeCancelled:
    """A subprocess probe was cancelled by the caller and was killed."""

    command: str

    @property
    def error_type(self) -> str:
        return "probe-cancelled"

    @property
    def message(self) -> str:
        return f"'{self.command}' was cancelled"


@dataclass(frozen=True)
class PropagationFailed:
    """The OS environment store could not be updated. Non-fatal."""

    mechanism: str
    reason: str

    @property
    def error_type(self) -> str:
        return "propagation-failed"

    @property
    def message(self) -> str:
        return f"Could not update OS environment via {self.mechanism}: {self.reason}"


ProbeFailure = ProbeTimeout | ProbeSpawnFailed | ProbeCancelled

"""Fake EnvPropagator implementation for testing."""

from jdk_pulse.core.non_ideal_state import PropagationFailed
from jdk_pulse.core.types import ActiveSelection
from jdk_pulse.gateway.env_propagation.abc import (
    EnvPropagator,
    PropagationApplied,
    PropagationOutcome,
    PropagationSkipped,
)


class FakeEnvPropagator(EnvPropagator):
    """In-memory OS environment store.

    This class has NO public setup methods. All state is provided via the
    constructor.

    Usage:
        propagator = FakeEnvPropagator(global_store=True)
        propagator.propagate(ActiveSelection(home="/opt/jdk-21"))
        assert propagator.propagated == ["/opt/jdk-21"]
    """

    def __init__(
        self,
        *,
        global_store: bool = False,
        current: str | None = None,
        failure_reason: str | None = None,
    ) -> None:
        """Create FakeEnvPropagator.

        Args:
            global_store: Whether this fake behaves like a platform with an OS store
            current: Initial value reported by read_current()
            failure_reason: If set, propagate() returns PropagationFailed
        """
        self._global_store = global_store
        self._current = current
        self._failure_reason = failure_reason
        self._propagated: list[str | None] = []

    @property
    def propagated(self) -> list[str | None]:
        """Homes passed to propagate(), in order. For test assertions only."""
        return list(self._propagated)

    @property
    def mechanism(self) -> str:
        return "fake" if self._global_store else "none"

    @property
    def supports_global_store(self) -> bool:
        return self._global_store

    def propagate(self, selection: ActiveSelection) -> PropagationOutcome:
        self._propagated.append(selection.home)
        if self._failure_reason is not None:
            return PropagationFailed(mechanism=self.mechanism, reason=self._failure_reason)
        if not self._global_store:
            return PropagationSkipped(mechanism=self.mechanism)
        self._current = selection.home
        return PropagationApplied(mechanism=self.mechanism, home=selection.home)

    def read_current(self) -> str | None:
        return self._current if self._global_store else None

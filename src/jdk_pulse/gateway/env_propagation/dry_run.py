"""Dry-run implementation of EnvPropagator."""

from jdk_pulse.cli.output import user_output
from jdk_pulse.core.types import ActiveSelection
from jdk_pulse.gateway.env_propagation.abc import (
    EnvPropagator,
    PropagationOutcome,
    PropagationSkipped,
)


class DryRunEnvPropagator(EnvPropagator):
    """Dry-run wrapper that reports what would be propagated."""

    def __init__(self, wrapped: EnvPropagator) -> None:
        self._wrapped = wrapped

    @property
    def mechanism(self) -> str:
        return self._wrapped.mechanism

    @property
    def supports_global_store(self) -> bool:
        return self._wrapped.supports_global_store

    def propagate(self, selection: ActiveSelection) -> PropagationOutcome:
        if self._wrapped.supports_global_store:
            target = selection.home if selection.home is not None else "(unset)"
            user_output(f"[DRY RUN] Would set JAVA_HOME={target} via {self.mechanism}")
        return PropagationSkipped(mechanism=self.mechanism)

    def read_current(self) -> str | None:
        return self._wrapped.read_current()

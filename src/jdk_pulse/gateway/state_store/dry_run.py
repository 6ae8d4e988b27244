"""Dry-run implementation of StateStore."""

from pathlib import Path

from jdk_pulse.cli.output import user_output
from jdk_pulse.core.non_ideal_state import InvalidHome, StateCorrupt, StateWriteFailed
from jdk_pulse.core.state_format import validate_home
from jdk_pulse.core.types import ActiveSelection
from jdk_pulse.gateway.state_store.abc import StateStore


class DryRunStateStore(StateStore):
    """Dry-run wrapper that prints instead of writing.

    Reads are delegated to the wrapped implementation; writes are validated
    exactly like the real store, then reported instead of persisted.
    """

    def __init__(self, wrapped: StateStore) -> None:
        self._wrapped = wrapped

    @property
    def path(self) -> Path:
        return self._wrapped.path

    def read(self) -> ActiveSelection | StateCorrupt:
        return self._wrapped.read()

    def write(self, home: str) -> ActiveSelection | InvalidHome | StateWriteFailed:
        invalid = validate_home(home)
        if invalid is not None:
            return invalid
        user_output(f"[DRY RUN] Would write {home} to {self._wrapped.path}")
        return ActiveSelection(home=home)

    def clear(self) -> ActiveSelection | StateWriteFailed:
        user_output(f"[DRY RUN] Would remove {self._wrapped.path}")
        return ActiveSelection.none()

"""Facade over registry, state store, propagation, hooks and doctor.

This is the command-style interface the CLI (or any other front end, such
as a tray menu) calls. Every method is request/response; the ``submit_*``
variants run the blocking work on an executor so a UI thread stays free.
"""

import logging
import re
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from pathlib import Path

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.doctor import Doctor, DoctorReport
from jdk_pulse.core.hook_manager import HookInstalled, HookRemoved
from jdk_pulse.core.non_ideal_state import (
    InvalidHome,
    JdkNotFound,
    MalformedBlock,
    PropagationFailed,
    StateCorrupt,
    StateWriteFailed,
    TargetUnwritable,
)
from jdk_pulse.core.registry import DiscoverySnapshot
from jdk_pulse.core.types import ActiveJdk, ActiveSelection, HookStatus, JdkRecord, ShellKind
from jdk_pulse.gateway.env_propagation.abc import PropagationOutcome

logger = logging.getLogger(__name__)

_MAJOR_ONLY = re.compile(r"^\d+$")


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of a successful selection change.

    Attributes:
        record: The selected JDK (None when the selection was cleared; a
            minimal "unknown" record when a path outside discovery was chosen)
        selection: What the state file now holds
        propagation: What happened in the OS environment store
    """

    record: JdkRecord | None
    selection: ActiveSelection
    propagation: PropagationOutcome

    @property
    def warnings(self) -> tuple[str, ...]:
        if isinstance(self.propagation, PropagationFailed):
            return (self.propagation.message,)
        return ()


class Orchestrator:
    """Sequences state writes, propagation and diagnostics."""

    def __init__(self, ctx: JdkPulseContext) -> None:
        self._ctx = ctx
        self._snapshot: DiscoverySnapshot | None = None
        self._lock = threading.Lock()

    # --- Discovery ---

    def refresh(self, cancel: CancelToken | None = None) -> DiscoverySnapshot:
        snapshot = self._ctx.registry.discover_snapshot(cancel)
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def snapshot(self) -> DiscoverySnapshot:
        with self._lock:
            cached = self._snapshot
        if cached is not None:
            return cached
        return self.refresh()

    def list_jdks(self) -> tuple[JdkRecord, ...]:
        return self.snapshot().records

    def submit_discovery(
        self, executor: Executor, cancel: CancelToken | None = None
    ) -> "Future[DiscoverySnapshot]":
        return executor.submit(self.refresh, cancel)

    # --- Selection ---

    def get_active_jdk(self) -> ActiveJdk | None | StateCorrupt:
        """Resolve the selected home against discovery.

        Returns None when nothing is selected.
        """
        selection = self._ctx.state_store.read()
        if isinstance(selection, StateCorrupt):
            return selection
        if selection.home is None:
            return None
        record = self.snapshot().find_by_home(selection.home)
        if record is None:
            return ActiveJdk.unknown(selection.home)
        return ActiveJdk(record=record, known=True)

    def resolve(self, requested: str) -> JdkRecord | str | JdkNotFound:
        """Map an id, a major version or a path to a record or a home path.

        Paths that discovery did not report are returned as plain strings.
        An unknown id triggers one re-discovery before giving up.
        """
        path = self._as_path(requested)
        if path is not None:
            found = self.snapshot().find_by_home(path)
            return found if found is not None else path

        found = self._lookup(self.snapshot(), requested)
        if found is not None:
            return found
        logger.debug("'%s' not in cached discovery, re-discovering", requested)
        snapshot = self.refresh()
        found = self._lookup(snapshot, requested)
        if found is not None:
            return found
        return JdkNotFound(requested=requested, known_ids=snapshot.ids)

    def set_active_jdk(
        self, requested: str
    ) -> SelectionResult | JdkNotFound | InvalidHome | StateWriteFailed:
        resolved = self.resolve(requested)
        if isinstance(resolved, JdkNotFound):
            return resolved
        home = resolved.home if isinstance(resolved, JdkRecord) else resolved

        written = self._ctx.state_store.write(home)
        if isinstance(written, InvalidHome | StateWriteFailed):
            return written

        propagation = self._ctx.propagator.propagate(written)
        if isinstance(propagation, PropagationFailed):
            logger.warning("%s", propagation.message)

        record = resolved if isinstance(resolved, JdkRecord) else ActiveJdk.unknown(home).record
        logger.debug("Selected %s (%s)", record.id, home)
        return SelectionResult(record=record, selection=written, propagation=propagation)

    def clear_active_jdk(self) -> SelectionResult | StateWriteFailed:
        cleared = self._ctx.state_store.clear()
        if isinstance(cleared, StateWriteFailed):
            return cleared
        propagation = self._ctx.propagator.propagate(cleared)
        if isinstance(propagation, PropagationFailed):
            logger.warning("%s", propagation.message)
        return SelectionResult(record=None, selection=cleared, propagation=propagation)

    # --- Doctor ---

    def doctor(self, *, probe_timeout: float | None = None) -> Doctor:
        config = self._ctx.global_config
        return Doctor(
            state_store=self._ctx.state_store,
            registry=self._ctx.registry,
            hook_manager=self._ctx.hook_manager,
            propagator=self._ctx.propagator,
            shell_probe=self._ctx.shell_probe,
            tool_locator=self._ctx.tool_locator,
            login_shell=self._ctx.login_shell,
            shells=self._ctx.configured_shells,
            external_tools=config.external_tools,
            probe_timeout=probe_timeout if probe_timeout is not None else config.probe_timeout,
        )

    def run_doctor_sync(
        self, cancel: CancelToken | None = None, *, probe_timeout: float | None = None
    ) -> DoctorReport:
        return self.doctor(probe_timeout=probe_timeout).run(cancel)

    def submit_doctor(
        self, executor: Executor, cancel: CancelToken | None = None
    ) -> "Future[DoctorReport]":
        return executor.submit(self.run_doctor_sync, cancel)

    # --- Shell integration ---

    def install_shell_integration(
        self, shell: ShellKind
    ) -> HookInstalled | TargetUnwritable | MalformedBlock:
        return self._ctx.hook_manager.install(shell)

    def remove_shell_integration(
        self, shell: ShellKind
    ) -> HookRemoved | TargetUnwritable | MalformedBlock:
        return self._ctx.hook_manager.remove(shell)

    def shell_integration_status(self, shell: ShellKind) -> HookStatus:
        return self._ctx.hook_manager.status(shell)

    # --- Helpers ---

    def _as_path(self, requested: str) -> str | None:
        if requested == "~":
            return str(self._ctx.home_dir)
        if requested.startswith("~/"):
            return str(self._ctx.home_dir / requested[2:])
        if requested.startswith("/") or Path(requested).is_absolute():
            return requested
        return None

    @staticmethod
    def _lookup(snapshot: DiscoverySnapshot, requested: str) -> JdkRecord | None:
        found = snapshot.find_by_id(requested)
        if found is not None:
            return found
        if _MAJOR_ONLY.match(requested):
            return snapshot.select_by_major(int(requested))
        return None

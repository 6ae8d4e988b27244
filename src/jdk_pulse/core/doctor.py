"""Health checks for ``jdk-pulse doctor``.

Each check compares what should be true (the canonical selection) against
what the machine actually shows and returns a tri-state verdict. Probes that
cannot reach a conclusion (timeout, spawn failure, cancellation) yield
``warn``, never ``fail``, and never stop the remaining checks.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from jdk_pulse.core.cancellation import CancelToken
from jdk_pulse.core.hook_manager import HookManager
from jdk_pulse.core.non_ideal_state import ProbeFailure, StateCorrupt
from jdk_pulse.core.platform import normalize_home
from jdk_pulse.core.registry import DiscoverySnapshot, JdkRegistry
from jdk_pulse.core.shell_probe import ShellSnapshot
from jdk_pulse.core.types import ActiveSelection, ShellKind
from jdk_pulse.core.versions import parse_major_version, parse_release_file
from jdk_pulse.gateway.env_propagation.abc import EnvPropagator
from jdk_pulse.gateway.shell_probe.abc import ShellProbe
from jdk_pulse.gateway.state_store.abc import StateStore
from jdk_pulse.gateway.tool_locator.abc import ToolLocator

logger = logging.getLogger(__name__)

Verdict = Literal["ok", "warn", "fail"]

_VERDICT_RANK: dict[Verdict, int] = {"ok": 0, "warn": 1, "fail": 2}


@dataclass(frozen=True)
class DoctorCheck:
    """Result of a single check.

    Attributes:
        name: Check name, e.g. "state_file" or "hook.zsh"
        verdict: ok, warn or fail
        observed: What the check saw
        expected: What it should have seen (None when nothing is expected)
        notes: Explanation for warn/fail
    """

    name: str
    verdict: Verdict
    observed: str | None = None
    expected: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class DoctorReport:
    checks: tuple[DoctorCheck, ...]

    @property
    def worst_verdict(self) -> Verdict:
        worst: Verdict = "ok"
        for check in self.checks:
            if _VERDICT_RANK[check.verdict] > _VERDICT_RANK[worst]:
                worst = check.verdict
        return worst

    def verdict_counts(self) -> dict[Verdict, int]:
        """Number of checks per verdict; every verdict is present."""
        counts: dict[Verdict, int] = {"ok": 0, "warn": 0, "fail": 0}
        for check in self.checks:
            counts[check.verdict] += 1
        return counts

    def get(self, name: str) -> DoctorCheck | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Flat mapping from check name to its fields."""
        return {
            check.name: {
                "observed": check.observed,
                "expected": check.expected,
                "verdict": check.verdict,
                "notes": check.notes,
            }
            for check in self.checks
        }


def check_state_file(selection: ActiveSelection | StateCorrupt, path: Path) -> DoctorCheck:
    if isinstance(selection, StateCorrupt):
        return DoctorCheck(
            name="state_file", verdict="fail", observed=str(path), notes=selection.message
        )
    if selection.home is None:
        return DoctorCheck(
            name="state_file",
            verdict="warn",
            observed="(none)",
            notes=f"No JDK selected ({path} absent). Run 'jdk-pulse use <id>'.",
        )
    if not Path(selection.home).is_dir():
        return DoctorCheck(
            name="state_file",
            verdict="fail",
            observed=selection.home,
            notes="Selected JDK home no longer exists",
        )
    return DoctorCheck(name="state_file", verdict="ok", observed=selection.home)


def check_registry(snapshot: DiscoverySnapshot) -> DoctorCheck:
    count = len(snapshot.records)
    notes = "; ".join(note.message for note in snapshot.notes) or None
    if count == 0:
        return DoctorCheck(
            name="registry",
            verdict="warn",
            observed="0 JDKs",
            notes=notes or "No JDKs discovered",
        )
    return DoctorCheck(name="registry", verdict="ok", observed=f"{count} JDK(s)", notes=notes)


def check_selection_known(home: str, snapshot: DiscoverySnapshot) -> DoctorCheck:
    record = snapshot.find_by_home(home)
    if record is None:
        return DoctorCheck(
            name="selection_known",
            verdict="warn",
            observed=home,
            notes="Selected home is not among the discovered JDKs",
        )
    return DoctorCheck(name="selection_known", verdict="ok", observed=record.id)


def check_shell(
    result: ShellSnapshot | ProbeFailure, expected_home: str | None, expected_major: int | None
) -> list[DoctorCheck]:
    """Compare a probed shell's JAVA_HOME and ``java -version`` against the selection."""
    if not isinstance(result, ShellSnapshot):
        notes = f"Inconclusive: {result.message}"
        return [
            DoctorCheck(
                name="shell.java_home", verdict="warn", expected=expected_home, notes=notes
            ),
            DoctorCheck(
                name="shell.java_version",
                verdict="warn",
                expected=_major_text(expected_major),
                notes=notes,
            ),
        ]

    checks: list[DoctorCheck] = []
    if expected_home is None:
        checks.append(
            DoctorCheck(
                name="shell.java_home",
                verdict="warn",
                observed=result.java_home,
                notes="Nothing selected to compare against",
            )
        )
    elif result.java_home is not None and normalize_home(result.java_home) == normalize_home(
        expected_home
    ):
        checks.append(
            DoctorCheck(
                name="shell.java_home",
                verdict="ok",
                observed=result.java_home,
                expected=expected_home,
            )
        )
    else:
        checks.append(
            DoctorCheck(
                name="shell.java_home",
                verdict="fail",
                observed=result.java_home,
                expected=expected_home,
                notes=(
                    f"New {Path(result.shell).name} shells see JAVA_HOME="
                    f"{result.java_home or '(unset)'}, expected {expected_home}. "
                    "Is the shell hook installed?"
                ),
            )
        )

    observed_major = result.java_major
    observed_text = result.java_version
    if expected_major is None:
        checks.append(
            DoctorCheck(
                name="shell.java_version",
                verdict="warn",
                observed=observed_text,
                notes="Selected JDK version unknown",
            )
        )
    elif observed_major == expected_major:
        checks.append(
            DoctorCheck(
                name="shell.java_version",
                verdict="ok",
                observed=observed_text,
                expected=_major_text(expected_major),
            )
        )
    else:
        checks.append(
            DoctorCheck(
                name="shell.java_version",
                verdict="fail",
                observed=observed_text,
                expected=_major_text(expected_major),
                notes=(
                    "'java -version' did not report a version"
                    if observed_text is None
                    else f"'java' on PATH is version {observed_text}"
                ),
            )
        )
    return checks


def check_hook(shell: ShellKind, hook_manager: HookManager) -> DoctorCheck:
    name = f"hook.{shell}"
    status = hook_manager.status(shell)
    path = str(hook_manager.rc_path(shell))
    if status == "installed":
        return DoctorCheck(name=name, verdict="ok", observed=path)
    if status == "malformed":
        return DoctorCheck(
            name=name,
            verdict="fail",
            observed=path,
            notes="Hook markers are unbalanced or duplicated; fix them by hand",
        )
    if status == "unreadable":
        return DoctorCheck(
            name=name,
            verdict="fail",
            observed=path,
            notes="Cannot read the rc file; check its permissions",
        )
    return DoctorCheck(
        name=name,
        verdict="warn",
        observed=path,
        notes=f"Not installed. Run 'jdk-pulse shell install {shell}'.",
    )


def check_os_environment(propagator: EnvPropagator, expected_home: str | None) -> DoctorCheck:
    current = propagator.read_current()
    matches = (
        current is None
        if expected_home is None
        else current is not None and normalize_home(current) == normalize_home(expected_home)
    )
    if matches:
        return DoctorCheck(
            name="os_environment", verdict="ok", observed=current, expected=expected_home
        )
    return DoctorCheck(
        name="os_environment",
        verdict="warn",
        observed=current,
        expected=expected_home,
        notes=f"{propagator.mechanism} JAVA_HOME differs; re-run 'jdk-pulse use' to propagate",
    )


def check_tool(name: str, tool_locator: ToolLocator) -> DoctorCheck:
    path = tool_locator.find(name)
    if path is None:
        return DoctorCheck(
            name=f"tool.{name}", verdict="warn", notes=f"'{name}' not found on PATH"
        )
    return DoctorCheck(name=f"tool.{name}", verdict="ok", observed=path)


def _major_text(major: int | None) -> str | None:
    return None if major is None else str(major)


class Doctor:
    """Runs every check once and assembles a DoctorReport."""

    def __init__(
        self,
        *,
        state_store: StateStore,
        registry: JdkRegistry,
        hook_manager: HookManager,
        propagator: EnvPropagator,
        shell_probe: ShellProbe,
        tool_locator: ToolLocator,
        login_shell: str | None,
        shells: tuple[ShellKind, ...],
        external_tools: tuple[str, ...],
        probe_timeout: float,
    ) -> None:
        self._state_store = state_store
        self._registry = registry
        self._hook_manager = hook_manager
        self._propagator = propagator
        self._shell_probe = shell_probe
        self._tool_locator = tool_locator
        self._login_shell = login_shell
        self._shells = shells
        self._external_tools = external_tools
        self._probe_timeout = probe_timeout

    def run(self, cancel: CancelToken | None = None) -> DoctorReport:
        checks: list[DoctorCheck] = []

        selection = self._state_store.read()
        checks.append(check_state_file(selection, self._state_store.path))
        expected_home = selection.home if isinstance(selection, ActiveSelection) else None

        snapshot = self._registry.discover_snapshot(cancel)
        checks.append(check_registry(snapshot))

        expected_major: int | None = None
        if expected_home is not None:
            checks.append(check_selection_known(expected_home, snapshot))
            record = snapshot.find_by_home(expected_home)
            if record is not None:
                expected_major = record.version_major
            else:
                expected_major = _major_from_release_file(expected_home)

        if self._login_shell is None:
            for name in ("shell.java_home", "shell.java_version"):
                checks.append(DoctorCheck(name=name, verdict="warn", notes="$SHELL is not set"))
        else:
            logger.debug("Probing %s", self._login_shell)
            result = self._shell_probe.probe(
                self._login_shell, timeout=self._probe_timeout, cancel=cancel
            )
            checks.extend(check_shell(result, expected_home, expected_major))

        for shell in self._shells:
            checks.append(check_hook(shell, self._hook_manager))

        if self._propagator.supports_global_store:
            checks.append(check_os_environment(self._propagator, expected_home))

        for tool in self._external_tools:
            checks.append(check_tool(tool, self._tool_locator))

        return DoctorReport(checks=tuple(checks))


def _major_from_release_file(home: str) -> int | None:
    """Best effort for homes that discovery did not report."""
    try:
        content = (Path(home) / "release").read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    version = parse_release_file(content).get("JAVA_VERSION")
    if version is None:
        return None
    return parse_major_version(version)

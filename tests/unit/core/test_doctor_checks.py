"""Tests for the doctor's checks and report."""

import sys
from pathlib import Path

import pytest

from jdk_pulse.core.doctor import Doctor, DoctorCheck, DoctorReport, check_shell
from jdk_pulse.core.hook_block import BEGIN_MARKER
from jdk_pulse.core.hook_manager import HookManager
from jdk_pulse.core.non_ideal_state import ProbeSpawnFailed, ProbeTimeout
from jdk_pulse.core.registry import JdkRegistry
from jdk_pulse.core.shell_probe import ShellSnapshot
from jdk_pulse.core.types import ShellKind
from jdk_pulse.gateway.env_propagation.fake import FakeEnvPropagator
from jdk_pulse.gateway.jdk_source.fake import FakeJdkSource
from jdk_pulse.gateway.shell_probe.abc import ShellProbe
from jdk_pulse.gateway.shell_probe.fake import FakeShellProbe
from jdk_pulse.gateway.shell_probe.real import RealShellProbe
from jdk_pulse.gateway.state_store.fake import FakeStateStore
from jdk_pulse.gateway.tool_locator.fake import FakeToolLocator
from tests.test_utils.jdk_env import candidate, make_jdk_home


def _doctor(
    tmp_path: Path,
    *,
    selected: str | None,
    records: list[tuple[Path, str]],
    shell_probe: ShellProbe,
    propagator: FakeEnvPropagator | None = None,
    tools: dict[str, str] | None = None,
    external_tools: tuple[str, ...] = (),
    shells: tuple[ShellKind, ...] = ("bash",),
    login_shell: str | None = "/bin/bash",
    state_store: FakeStateStore | None = None,
) -> Doctor:
    store = state_store if state_store is not None else FakeStateStore(
        home=selected, path=tmp_path / ".jdk_current"
    )
    source = FakeJdkSource(candidates=[candidate(home, version) for home, version in records])
    return Doctor(
        state_store=store,
        registry=JdkRegistry([source], preferred_roots=[]),
        hook_manager=HookManager(home_dir=tmp_path, state_file=store.path, environ={}),
        propagator=propagator if propagator is not None else FakeEnvPropagator(),
        shell_probe=shell_probe,
        tool_locator=FakeToolLocator(tools=tools),
        login_shell=login_shell,
        shells=shells,
        external_tools=external_tools,
        probe_timeout=2.0,
    )


def _install_bash_hook(tmp_path: Path) -> None:
    HookManager(
        home_dir=tmp_path, state_file=tmp_path / ".jdk_current", environ={}
    ).install("bash")


def test_all_ok_when_shell_matches_selection(tmp_path: Path) -> None:
    home = make_jdk_home(tmp_path, "jdk-21")
    _install_bash_hook(tmp_path)
    doctor = _doctor(
        tmp_path,
        selected=str(home),
        records=[(home, "21.0.1")],
        shell_probe=FakeShellProbe(java_home=str(home), java_version="21.0.1"),
    )

    report = doctor.run()

    assert report.worst_verdict == "ok", report.to_dict()
    assert [c.name for c in report.checks] == [
        "state_file",
        "registry",
        "selection_known",
        "shell.java_home",
        "shell.java_version",
        "hook.bash",
    ]


def test_probe_timeout_is_warn_and_other_checks_complete(tmp_path: Path) -> None:
    home = make_jdk_home(tmp_path, "jdk-21")
    doctor = _doctor(
        tmp_path,
        selected=str(home),
        records=[(home, "21.0.1")],
        shell_probe=FakeShellProbe(
            failure=ProbeTimeout(command="/bin/bash -i -c <probe>", timeout_seconds=2.0)
        ),
        tools={"docker": "/usr/bin/docker"},
        external_tools=("docker",),
    )

    report = doctor.run()

    java_home = report.get("shell.java_home")
    assert java_home is not None
    assert java_home.verdict == "warn"
    assert java_home.notes is not None
    assert java_home.notes.startswith("Inconclusive:")
    assert report.get("shell.java_version") is not None
    tool = report.get("tool.docker")
    assert tool is not None
    assert tool.verdict == "ok"
    assert report.worst_verdict == "warn"


def test_report_counts_verdicts() -> None:
    report = DoctorReport(
        checks=(
            DoctorCheck(name="state_file", verdict="ok"),
            DoctorCheck(name="registry", verdict="ok"),
            DoctorCheck(name="hook.zsh", verdict="warn"),
            DoctorCheck(name="shell.java_home", verdict="fail"),
        )
    )

    assert report.verdict_counts() == {"ok": 2, "warn": 1, "fail": 1}
    assert report.worst_verdict == "fail"
    assert DoctorReport(checks=()).verdict_counts() == {"ok": 0, "warn": 0, "fail": 0}


def test_mismatched_shell_is_fail(tmp_path: Path) -> None:
    jdk17 = make_jdk_home(tmp_path, "jdk-17")
    jdk21 = make_jdk_home(tmp_path, "jdk-21")
    doctor = _doctor(
        tmp_path,
        selected=str(jdk21),
        records=[(jdk17, "17.0.9"), (jdk21, "21.0.1")],
        shell_probe=FakeShellProbe(java_home=str(jdk17), java_version="17.0.9"),
    )

    report = doctor.run()

    java_home = report.get("shell.java_home")
    java_version = report.get("shell.java_version")
    assert java_home is not None and java_home.verdict == "fail"
    assert java_home.observed == str(jdk17)
    assert java_home.expected == str(jdk21)
    assert java_version is not None and java_version.verdict == "fail"
    assert java_version.expected == "21"
    assert report.worst_verdict == "fail"


def test_nothing_selected_is_warn(tmp_path: Path) -> None:
    doctor = _doctor(tmp_path, selected=None, records=[], shell_probe=FakeShellProbe())

    report = doctor.run()

    state = report.get("state_file")
    assert state is not None
    assert state.verdict == "warn"
    assert state.observed == "(none)"
    assert report.get("selection_known") is None
    assert report.worst_verdict == "warn"


def test_corrupt_state_is_fail(tmp_path: Path) -> None:
    store = FakeStateStore(corrupt_reason="expected one line, found 2", path=tmp_path / "s")
    doctor = _doctor(
        tmp_path, selected=None, records=[], shell_probe=FakeShellProbe(), state_store=store
    )

    report = doctor.run()

    state = report.get("state_file")
    assert state is not None
    assert state.verdict == "fail"
    assert state.notes is not None and "found 2" in state.notes


def test_selected_home_removed_is_fail(tmp_path: Path) -> None:
    doctor = _doctor(
        tmp_path,
        selected=str(tmp_path / "uninstalled-jdk"),
        records=[],
        shell_probe=FakeShellProbe(),
    )

    state = doctor.run().get("state_file")

    assert state is not None
    assert state.verdict == "fail"


def test_selection_outside_discovery_uses_release_file(tmp_path: Path) -> None:
    home = make_jdk_home(tmp_path, "custom", version="17.0.9")
    doctor = _doctor(
        tmp_path,
        selected=str(home),
        records=[],
        shell_probe=FakeShellProbe(java_home=str(home), java_version="17.0.9"),
    )

    report = doctor.run()

    known = report.get("selection_known")
    version = report.get("shell.java_version")
    assert known is not None and known.verdict == "warn"
    assert version is not None and version.verdict == "ok"


def test_malformed_hook_is_fail(tmp_path: Path) -> None:
    (tmp_path / ".bashrc").write_text(f"{BEGIN_MARKER}\n", encoding="utf-8")
    doctor = _doctor(tmp_path, selected=None, records=[], shell_probe=FakeShellProbe())

    hook = doctor.run().get("hook.bash")

    assert hook is not None
    assert hook.verdict == "fail"


def test_unreadable_hook_file_is_fail(tmp_path: Path) -> None:
    (tmp_path / ".bashrc").mkdir()
    doctor = _doctor(tmp_path, selected=None, records=[], shell_probe=FakeShellProbe())

    hook = doctor.run().get("hook.bash")

    assert hook is not None
    assert hook.verdict == "fail"
    assert hook.notes is not None and "Cannot read" in hook.notes


def test_missing_hook_and_tool_are_warn(tmp_path: Path) -> None:
    doctor = _doctor(
        tmp_path,
        selected=None,
        records=[],
        shell_probe=FakeShellProbe(),
        shells=("zsh",),
        external_tools=("docker",),
    )

    report = doctor.run()

    hook = report.get("hook.zsh")
    tool = report.get("tool.docker")
    assert hook is not None and hook.verdict == "warn"
    assert tool is not None and tool.verdict == "warn"


def test_unset_login_shell_skips_probe(tmp_path: Path) -> None:
    probe = FakeShellProbe()
    doctor = _doctor(tmp_path, selected=None, records=[], shell_probe=probe, login_shell=None)

    report = doctor.run()

    assert probe.probed_shells == []
    java_home = report.get("shell.java_home")
    assert java_home is not None and java_home.notes == "$SHELL is not set"


def test_os_environment_checked_only_with_global_store(tmp_path: Path) -> None:
    home = make_jdk_home(tmp_path, "jdk-21")
    without = _doctor(
        tmp_path, selected=str(home), records=[], shell_probe=FakeShellProbe()
    ).run()
    stale = _doctor(
        tmp_path,
        selected=str(home),
        records=[],
        shell_probe=FakeShellProbe(),
        propagator=FakeEnvPropagator(global_store=True, current="/opt/old-jdk"),
    ).run()
    synced = _doctor(
        tmp_path,
        selected=str(home),
        records=[],
        shell_probe=FakeShellProbe(),
        propagator=FakeEnvPropagator(global_store=True, current=str(home)),
    ).run()

    assert without.get("os_environment") is None
    stale_check = stale.get("os_environment")
    synced_check = synced.get("os_environment")
    assert stale_check is not None and stale_check.verdict == "warn"
    assert synced_check is not None and synced_check.verdict == "ok"


def test_unavailable_source_is_noted_on_registry_check(tmp_path: Path) -> None:
    store = FakeStateStore(path=tmp_path / ".jdk_current")
    doctor = Doctor(
        state_store=store,
        registry=JdkRegistry(
            [FakeJdkSource(name="java_home", unavailable_reason="timed out")],
            preferred_roots=[],
        ),
        hook_manager=HookManager(home_dir=tmp_path, state_file=store.path, environ={}),
        propagator=FakeEnvPropagator(),
        shell_probe=FakeShellProbe(),
        tool_locator=FakeToolLocator(),
        login_shell="/bin/bash",
        shells=(),
        external_tools=(),
        probe_timeout=1.0,
    )

    registry = doctor.run().get("registry")

    assert registry is not None
    assert registry.verdict == "warn"
    assert registry.notes is not None and "timed out" in registry.notes


def test_check_shell_spawn_failure_is_inconclusive() -> None:
    checks = check_shell(
        ProbeSpawnFailed(command="/bin/zsh -i -c <probe>", reason="No such file"),
        expected_home="/opt/jdk-21",
        expected_major=21,
    )

    assert [c.verdict for c in checks] == ["warn", "warn"]


def test_check_shell_tolerates_trailing_separator() -> None:
    checks = check_shell(
        ShellSnapshot(
            shell="/bin/zsh",
            java_home="/opt/jdk-21/",
            java_version_output='openjdk version "21.0.1"',
        ),
        expected_home="/opt/jdk-21",
        expected_major=21,
    )

    assert [c.verdict for c in checks] == ["ok", "ok"]


def test_report_serializes_to_flat_mapping() -> None:
    report = DoctorReport(
        checks=(
            DoctorCheck(name="state_file", verdict="ok", observed="/opt/jdk"),
            DoctorCheck(name="hook.zsh", verdict="warn", notes="Not installed"),
        )
    )

    assert report.to_dict() == {
        "state_file": {"observed": "/opt/jdk", "expected": None, "verdict": "ok", "notes": None},
        "hook.zsh": {
            "observed": None,
            "expected": None,
            "verdict": "warn",
            "notes": "Not installed",
        },
    }
    assert report.worst_verdict == "warn"


@pytest.mark.skipif(sys.platform == "win32", reason="uses a /bin/sh script as the login shell")
def test_hanging_login_shell_is_warn_within_timeout(tmp_path: Path) -> None:
    shell = tmp_path / "slowsh"
    shell.write_text("#!/bin/sh\nsleep 60\n", encoding="utf-8")
    shell.chmod(0o755)
    doctor = Doctor(
        state_store=FakeStateStore(path=tmp_path / ".jdk_current"),
        registry=JdkRegistry([], preferred_roots=[]),
        hook_manager=HookManager(
            home_dir=tmp_path, state_file=tmp_path / ".jdk_current", environ={}
        ),
        propagator=FakeEnvPropagator(),
        shell_probe=RealShellProbe(environ={"PATH": "/usr/bin:/bin"}),
        tool_locator=FakeToolLocator(),
        login_shell=str(shell),
        shells=(),
        external_tools=(),
        probe_timeout=0.5,
    )

    report = doctor.run()

    java_home = report.get("shell.java_home")
    assert java_home is not None
    assert java_home.verdict == "warn"
    assert java_home.notes is not None and "did not finish" in java_home.notes

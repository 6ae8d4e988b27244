"""Doctor command: compare the selection with what the machine shows."""

import json

import click

from jdk_pulse.cli.output import machine_output, user_output
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.doctor import DoctorCheck, DoctorReport
from jdk_pulse.core.orchestrator import Orchestrator

_ICONS = {
    "ok": click.style("✅", fg="green"),
    "warn": click.style("⚠️ ", fg="yellow"),
    "fail": click.style("❌", fg="red"),
}

_SECTIONS = (
    ("Canonical State", ("state_file", "registry", "selection_known")),
    ("Shells", ("shell.", "hook.")),
    ("OS Environment", ("os_environment",)),
    ("External Tools", ("tool.",)),
)


def _format_check(check: DoctorCheck) -> None:
    summary = check.observed if check.observed is not None else "-"
    user_output(f"{_ICONS[check.verdict]} {check.name}: {summary}")
    if check.expected is not None and check.verdict != "ok":
        user_output(click.style(f"   expected: {check.expected}", dim=True))
    if check.notes:
        for line in check.notes.split("\n"):
            user_output(click.style(f"   {line}", dim=True))


def _in_section(check: DoctorCheck, prefixes: tuple[str, ...]) -> bool:
    return any(
        check.name == p or (p.endswith(".") and check.name.startswith(p)) for p in prefixes
    )


def render_report(report: DoctorReport) -> None:
    for title, prefixes in _SECTIONS:
        checks = [c for c in report.checks if _in_section(c, prefixes)]
        if not checks:
            continue
        user_output(click.style(title, bold=True))
        for check in checks:
            _format_check(check)
        user_output("")

    counts = report.verdict_counts()
    failed = counts["fail"]
    warned = counts["warn"]
    if failed == 0 and warned == 0:
        user_output(click.style("✨ All checks passed!", fg="green", bold=True))
    elif failed == 0:
        user_output(click.style(f"{warned} warning(s), no failures", fg="yellow", bold=True))
    else:
        user_output(
            click.style(f"{failed} check(s) failed, {warned} warning(s)", fg="red", bold=True)
        )


@click.command("doctor")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON on stdout")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds allowed for each probe (default: probe_timeout from config)",
)
@click.pass_obj
def doctor_cmd(ctx: JdkPulseContext, as_json: bool, timeout: float | None) -> None:
    """Check that shells and the OS environment agree with the selection.

    Starts your login shell the way a new terminal would and compares its
    JAVA_HOME and 'java -version' with the state file. Exits with status 1
    when any check fails.

    \b
    Checks:
      - state file and discovered JDKs
      - JAVA_HOME and java version in a fresh interactive shell
      - shell hook installation
      - OS environment store (macOS launchd, Windows registry)
      - external tools such as docker
    """
    if not as_json:
        user_output(click.style("🔍 Checking JDK sync...", bold=True))
        user_output("")

    report = Orchestrator(ctx).run_doctor_sync(probe_timeout=timeout)

    if as_json:
        machine_output(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(report)

    if report.worst_verdict == "fail":
        raise SystemExit(1)

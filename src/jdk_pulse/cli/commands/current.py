"""Show the active JDK."""

import json

import click

from jdk_pulse.cli.ensure_ideal import EnsureIdeal
from jdk_pulse.cli.output import machine_output, user_output
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.orchestrator import Orchestrator


@click.command("current")
@click.option("--json", "as_json", is_flag=True, help="Print the record as JSON on stdout")
@click.pass_obj
def current_cmd(ctx: JdkPulseContext, as_json: bool) -> None:
    """Show the JDK recorded in the state file."""
    active = EnsureIdeal.ideal_state(Orchestrator(ctx).get_active_jdk())

    if as_json:
        payload = None if active is None else {**active.record.to_dict(), "known": active.known}
        machine_output(json.dumps(payload, indent=2))
        return

    if active is None:
        user_output("No JDK selected. Run 'jdk-pulse use <id>' to select one.")
        return

    record = active.record
    if active.known:
        user_output(f"{click.style(record.label, bold=True)}  {record.id}")
    else:
        user_output(
            click.style(record.home, bold=True)
            + click.style("  (not among discovered JDKs)", dim=True)
        )
    machine_output(record.home)

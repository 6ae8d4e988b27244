"""Select the active JDK."""

import click

from jdk_pulse.cli.ensure_ideal import EnsureIdeal
from jdk_pulse.cli.output import user_output
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.orchestrator import Orchestrator, SelectionResult
from jdk_pulse.gateway.env_propagation.abc import PropagationApplied


def report_selection(result: SelectionResult) -> None:
    for warning in result.warnings:
        user_output(click.style("Warning: ", fg="yellow") + warning)
    if isinstance(result.propagation, PropagationApplied):
        mechanism = result.propagation.mechanism
        user_output(click.style(f"  OS environment updated via {mechanism}", dim=True))


@click.command("use")
@click.argument("target", metavar="ID|HOME|MAJOR")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
@click.pass_obj
def use_cmd(ctx: JdkPulseContext, target: str, dry_run: bool) -> None:
    """Make a JDK the active one.

    TARGET is an id from 'jdk-pulse list', an absolute JDK home (or ~/...),
    or a bare major version such as 21.

    \b
    Examples:
      jdk-pulse use 21
      jdk-pulse use eclipse-adoptium-21.0.1-3f9a2c
      jdk-pulse use ~/.sdkman/candidates/java/17.0.9-tem
    """
    if dry_run:
        ctx = ctx.with_dry_run()
    result = EnsureIdeal.ideal_state(Orchestrator(ctx).set_active_jdk(target))

    record = result.record
    if record is not None and record.id != "unknown":
        description = f"{record.label} ({record.home})"
    else:
        description = str(result.selection.home)
    verb = "Would switch" if ctx.dry_run else "Switched"
    user_output(click.style("✓ ", fg="green") + f"{verb} to {description}")
    report_selection(result)
    if not ctx.dry_run:
        user_output("New shells pick this up immediately; open shells at their next prompt.")

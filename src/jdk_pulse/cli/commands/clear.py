"""Clear the active JDK selection."""

import click

from jdk_pulse.cli.commands.use import report_selection
from jdk_pulse.cli.ensure_ideal import EnsureIdeal
from jdk_pulse.cli.output import user_output
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.orchestrator import Orchestrator


@click.command("clear")
@click.option("-f", "--force", is_flag=True, help="Do not ask for confirmation")
@click.option("--dry-run", is_flag=True, help="Show what would change without writing")
@click.pass_obj
def clear_cmd(ctx: JdkPulseContext, force: bool, dry_run: bool) -> None:
    """Remove the state file so no JDK is selected.

    This is also how to recover from a corrupt state file.
    """
    if dry_run:
        ctx = ctx.with_dry_run()
    elif not force:
        click.confirm(f"Remove {ctx.state_store.path}?", abort=True, err=True)

    result = EnsureIdeal.ideal_state(Orchestrator(ctx).clear_active_jdk())
    if not ctx.dry_run:
        user_output(click.style("✓ ", fg="green") + "Selection cleared")
    report_selection(result)

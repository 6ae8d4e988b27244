"""List discovered JDKs."""

import json

import click
from rich.console import Console
from rich.table import Table

from jdk_pulse.cli.output import machine_output, user_output
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.orchestrator import Orchestrator
from jdk_pulse.core.platform import normalize_home
from jdk_pulse.core.types import ActiveSelection


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON on stdout")
@click.pass_obj
def list_cmd(ctx: JdkPulseContext, as_json: bool) -> None:
    """List installed JDKs, marking the active one with *."""
    orchestrator = Orchestrator(ctx)
    records = orchestrator.list_jdks()

    if as_json:
        machine_output(json.dumps([r.to_dict() for r in records], indent=2))
        return

    if not records:
        user_output("No JDKs found.")
        return

    selection = ctx.state_store.read()
    active_key = (
        normalize_home(selection.home)
        if isinstance(selection, ActiveSelection) and selection.home is not None
        else None
    )

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("", no_wrap=True)
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("version", no_wrap=True)
    table.add_column("vendor", style="yellow", no_wrap=True)
    table.add_column("home", no_wrap=True)
    for record in records:
        marker = "*" if normalize_home(record.home) == active_key else ""
        table.add_row(marker, record.id, record.version_full, record.vendor or "-", record.home)

    console = Console(stderr=True, soft_wrap=True)
    console.print(table)

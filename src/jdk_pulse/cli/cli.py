import logging

import click

from jdk_pulse.cli.commands.clear import clear_cmd
from jdk_pulse.cli.commands.config import config_group
from jdk_pulse.cli.commands.current import current_cmd
from jdk_pulse.cli.commands.doctor import doctor_cmd
from jdk_pulse.cli.commands.list_cmd import list_cmd
from jdk_pulse.cli.commands.shell import shell_group
from jdk_pulse.cli.commands.use import use_cmd
from jdk_pulse.core.context import create_context

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="jdk-pulse")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Keep the active JDK in sync across shells and the OS environment."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(dry_run=False)


cli.add_command(clear_cmd)
cli.add_command(config_group)
cli.add_command(current_cmd)
cli.add_command(doctor_cmd)
cli.add_command(list_cmd)
cli.add_command(shell_group)
cli.add_command(use_cmd)

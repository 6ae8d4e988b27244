"""Show and update ~/.jdk-pulse/config.toml."""

import click

from jdk_pulse.cli.ensure_ideal import EnsureIdeal
from jdk_pulse.cli.output import user_output
from jdk_pulse.core.config import get_config_keys, parse_cli_value
from jdk_pulse.core.context import JdkPulseContext


@click.group("config")
def config_group() -> None:
    """Manage jdk-pulse configuration."""


@config_group.command("show")
@click.pass_obj
def config_show(ctx: JdkPulseContext) -> None:
    """Print every configuration key with its current value."""
    user_output(click.style(f"Configuration ({ctx.config_store.path}):", bold=True))
    for key in get_config_keys():
        user_output(f"  {key}={ctx.global_config.display_value(key)}")


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
def config_set(ctx: JdkPulseContext, key: str, value: str) -> None:
    """Update configuration with a value for the given key.

    List keys (extra_jdk_dirs, external_tools, shells) take comma-separated
    values; an empty string clears them.
    """
    try:
        parsed = parse_cli_value(key, value)
        updated = EnsureIdeal.ideal_state(ctx.config_store.set_value(key, parsed))
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from None
    user_output(f"Set {key}={updated.display_value(key)}")

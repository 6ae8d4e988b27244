"""Shell integration commands: install, uninstall, status, print."""

import click

from jdk_pulse.cli.ensure_ideal import EnsureIdeal
from jdk_pulse.cli.output import machine_output, user_output
from jdk_pulse.core.context import JdkPulseContext
from jdk_pulse.core.orchestrator import Orchestrator
from jdk_pulse.core.shells import detect_login_shell
from jdk_pulse.core.types import SUPPORTED_SHELLS, ShellKind

_ACTION_TEXT = {
    "created": "Created {path} with the jdk-pulse hook",
    "installed": "Added the jdk-pulse hook to {path}",
    "updated": "Updated the jdk-pulse hook in {path}",
    "unchanged": "jdk-pulse hook in {path} is already up to date",
}

_SHELL_CHOICE = click.Choice(list(SUPPORTED_SHELLS))


def _resolve_shell(ctx: JdkPulseContext, shell: str | None) -> ShellKind:
    if shell is not None:
        return shell  # type: ignore[return-value]
    detected = detect_login_shell(ctx.environ)
    if detected is None:
        user_output(
            click.style("Error: ", fg="red")
            + "Cannot detect a supported shell from $SHELL; pass one of: "
            + ", ".join(SUPPORTED_SHELLS)
        )
        raise SystemExit(1)
    return detected


@click.group("shell")
def shell_group() -> None:
    """Manage the shell hook that applies the selection at each prompt."""


@shell_group.command("install")
@click.argument("shell", type=_SHELL_CHOICE, required=False)
@click.pass_obj
def shell_install(ctx: JdkPulseContext, shell: str | None) -> None:
    """Add (or refresh) the hook block in SHELL's rc file.

    Defaults to the shell in $SHELL. Running it again is harmless.
    """
    kind = _resolve_shell(ctx, shell)
    result = EnsureIdeal.ideal_state(Orchestrator(ctx).install_shell_integration(kind))
    message = _ACTION_TEXT[result.action].format(path=result.path)
    user_output(click.style("✓ ", fg="green") + message)
    if result.action != "unchanged":
        user_output("Open a new terminal (or source the file) to activate it.")


@shell_group.command("uninstall")
@click.argument("shell", type=_SHELL_CHOICE, required=False)
@click.pass_obj
def shell_uninstall(ctx: JdkPulseContext, shell: str | None) -> None:
    """Remove the hook block from SHELL's rc file, leaving the rest untouched."""
    kind = _resolve_shell(ctx, shell)
    result = EnsureIdeal.ideal_state(Orchestrator(ctx).remove_shell_integration(kind))
    if result.removed:
        message = f"Removed the jdk-pulse hook from {result.path}"
        user_output(click.style("✓ ", fg="green") + message)
    else:
        user_output(f"No jdk-pulse hook in {result.path}")


@shell_group.command("status")
@click.pass_obj
def shell_status(ctx: JdkPulseContext) -> None:
    """Show the hook status for every supported shell."""
    orchestrator = Orchestrator(ctx)
    for kind in SUPPORTED_SHELLS:
        status = orchestrator.shell_integration_status(kind)
        color = {
            "installed": "green",
            "not-installed": None,
            "malformed": "red",
            "unreadable": "red",
        }[status]
        path = ctx.hook_manager.rc_path(kind)
        user_output(f"{kind:<5} {click.style(status, fg=color)}  {path}")


@shell_group.command("print")
@click.argument("shell", type=_SHELL_CHOICE)
@click.pass_obj
def shell_print(ctx: JdkPulseContext, shell: str) -> None:
    """Print the hook block for SHELL on stdout.

    For setups that manage rc files elsewhere, e.g.:

    \b
      eval "$(jdk-pulse shell print bash)"
    """
    machine_output(ctx.hook_manager.render_block(shell), nl=False)  # type: ignore[arg-type]

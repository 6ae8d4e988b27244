"""jdk-pulse CLI entry point.

Keeps a single active JDK in sync across shell sessions and OS environment
stores. See `jdk-pulse --help` for details.
"""


def main() -> None:
    """CLI entry point used by the `jdk-pulse` console script."""
    from jdk_pulse.cli.cli import cli

    cli()

"""CLI error handling for non-ideal-state type narrowing."""

from typing import TypeVar

import click

from jdk_pulse.cli.output import user_output
from jdk_pulse.core.non_ideal_state import NonIdealState

T = TypeVar("T")


class EnsureIdeal:
    """Helper class for narrowing non-ideal-state discriminated unions."""

    @staticmethod
    def ideal_state(result: T | NonIdealState) -> T:
        """Ensure result is not a NonIdealState, otherwise exit with error.

        Takes ``T | NonIdealState`` and returns ``T``, so the type checker
        knows the value is not a NonIdealState after this call.

        Raises:
            SystemExit: If result is NonIdealState (with exit code 1)

        Example:
            >>> result = EnsureIdeal.ideal_state(orchestrator.set_active_jdk("21"))
        """
        if isinstance(result, NonIdealState):
            user_output(click.style("Error: ", fg="red") + result.message)
            raise SystemExit(1)
        return result

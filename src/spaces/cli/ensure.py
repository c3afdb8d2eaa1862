"""Precondition checks for command bodies.

A failed check prints a red ``Error:`` line and exits with status 1, the same
way ``SpacesGroup`` reports a ``UserError``. Use it for checks on command
input that need no exception type of their own.
"""

from typing import TypeVar

import click

from spaces.cli.output import user_output

T = TypeVar("T")


def fail(error_message: str, exit_code: int = 1) -> None:
    """Print ``error_message`` after a red ``Error:`` and exit."""
    user_output(click.style("Error: ", fg="red") + error_message)
    raise SystemExit(exit_code)


class Ensure:
    """Guards used by command bodies. Each exits the CLI when its check fails."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Exit with ``error_message`` unless ``condition`` holds.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Return ``value``, or exit with ``error_message`` when it is None.

        The return type drops the ``None`` from ``value``'s type.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            fail(error_message)
        return value  # type: ignore[return-value]

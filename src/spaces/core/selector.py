"""Interactive selection from a list of workspaces."""

from abc import ABC, abstractmethod

import click

from spaces.cli.output import user_output


class WorkspaceSelector(ABC):
    """Ask the user to pick options from a list."""

    @abstractmethod
    def select(self, options: list[str], message: str) -> int | None:
        """Return the index of the chosen option, or None if the user aborted."""
        ...

    @abstractmethod
    def select_many(self, options: list[str], message: str) -> list[int]:
        """Return the indices of the chosen options, in list order.

        Every option starts out selected. An empty list means nothing was chosen
        or the user aborted.
        """
        ...


def _show_options(options: list[str], message: str) -> None:
    user_output(message)
    for number, option in enumerate(options, start=1):
        user_output(f"  {click.style(str(number), fg='cyan')}) {option}")


def parse_selection(answer: str, option_count: int) -> list[int] | None:
    """Parse "all", "0" or space/comma separated option numbers into indices.

    Returns None when the answer names a number outside 1..option_count or is
    not a number at all.
    """
    answer = answer.strip().lower()
    if answer in ("", "all"):
        return list(range(option_count))
    if answer == "0":
        return []

    indices: set[int] = set()
    for token in answer.replace(",", " ").split():
        if not token.isdigit():
            return None
        number = int(token)
        if not 1 <= number <= option_count:
            return None
        indices.add(number - 1)
    return sorted(indices)


class PromptWorkspaceSelector(WorkspaceSelector):
    """Numbered menu on stderr, answered through ``click.prompt``.

    Entering 0, Ctrl-C or EOF aborts the selection.
    """

    def select(self, options: list[str], message: str) -> int | None:
        if not options:
            return None

        _show_options(options, message)
        try:
            choice = click.prompt(
                "Choice (0 to cancel)",
                type=click.IntRange(0, len(options)),
                err=True,
            )
        except click.Abort:
            return None

        if choice == 0:
            return None
        return choice - 1

    def select_many(self, options: list[str], message: str) -> list[int]:
        if not options:
            return []

        _show_options(options, message)
        while True:
            try:
                answer = click.prompt(
                    "Numbers to select, separated by spaces (0 to cancel)",
                    default="all",
                    err=True,
                )
            except click.Abort:
                return []

            indices = parse_selection(answer, len(options))
            if indices is not None:
                return indices
            user_output(click.style(f"Enter numbers from 1 to {len(options)}", fg="yellow"))

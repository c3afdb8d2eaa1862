"""Output utilities for CLI commands with clear intent.

- user_output: human-facing messages, routed to stderr
- machine_output: data meant for scripts (paths, JSON), routed to stdout
- format_cascade_summary: end-of-run panel for a cascading rebase
"""

from typing import Any

import click
from rich.panel import Panel
from rich.text import Text

from spaces.core.rebase import ChildRebaseResult


def user_output(message: Any = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Write machine-readable output to stdout."""
    click.echo(message, nl=nl)


def format_cascade_summary(results: list[ChildRebaseResult], new_base: str) -> Panel:
    """Format the per-child outcomes of a cascading rebase as a Rich panel.

    Args:
        results: Outcomes in the order the children were rebased
        new_base: Description of the new base (workspace or branch name)

    Returns:
        Rich Panel listing each child with its outcome and, for failures,
        what the user has to do next
    """
    overall_success = all(r.succeeded for r in results)

    lines: list[Text] = []
    for result in results:
        if result.succeeded:
            lines.append(Text(f"✅ {result.workspace}: rebased onto {new_base}", style="green"))
        else:
            lines.append(Text(f"❌ {result.workspace}: {result.outcome.describe()}", style="red"))

    failed = [r.workspace for r in results if not r.succeeded]
    if failed:
        lines.append(Text(""))
        lines.append(
            Text(
                "Failed workspaces keep their old stack parent. Resolve them with "
                "'git rebase --continue' or 'git rebase --abort' inside each workspace.",
                style="yellow",
            )
        )

    content = Text("\n").join(lines)
    if overall_success:
        title = "Cascade Rebase Complete"
    else:
        title = "Cascade Rebase Finished With Failures"
    return Panel(
        content, title=title, border_style="green" if overall_success else "red", padding=(1, 2)
    )

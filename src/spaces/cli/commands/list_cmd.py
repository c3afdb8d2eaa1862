import json
from datetime import UTC, datetime

import click

from spaces.cli.core import require_project
from spaces.cli.output import machine_output, user_output
from spaces.core.cleanup import is_stale
from spaces.core.context import SpacesContext
from spaces.core.workspace_types import WorkspaceStatus


def _format_line(
    name: str,
    status: WorkspaceStatus | None,
    parent: str | None,
    active: bool,
    stale: bool,
    verbose: bool,
) -> str:
    parts = [click.style(name, fg="cyan", bold=True)]
    if status is None:
        parts.append(click.style("[status unavailable]", fg="red"))
    else:
        parts.append(click.style(f"[{status.branch}]", fg="yellow"))
        if status.ahead or status.behind:
            parts.append(f"+{status.ahead} -{status.behind}")
        if status.uncommitted_changes:
            parts.append(click.style(f"{status.uncommitted_changes} uncommitted", fg="red"))
    if parent is not None:
        parts.append(click.style(f"↳ {parent}", dim=True))
    if active:
        parts.append(click.style("(active)", fg="green"))
    if stale:
        parts.append(click.style("(stale)", fg="bright_black"))

    line = " ".join(parts)
    if verbose and status is not None and status.last_commit:
        line += "\n    " + click.style(status.last_commit, dim=True)
    return line


@click.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print workspaces as JSON.")
@click.option("-v", "--verbose", is_flag=True, help="Show the last commit of each workspace.")
@click.pass_obj
def list_cmd(ctx: SpacesContext, as_json: bool, verbose: bool) -> None:
    """List the workspaces of the current project."""
    project = require_project(ctx)
    listing = ctx.listing(project)
    names = listing.list_workspace_names()
    edges = ctx.stack_graph(project).edges()
    now = datetime.now(UTC)

    rows: list[dict[str, object]] = []
    lines: list[str] = []
    for name in names:
        path = listing.workspace_path(name)
        status = ctx.git.get_status(path)
        edge = edges.get(name)
        parent = edge.based_on if edge is not None else None
        active = ctx.sessions.session_exists(name)
        stale = status is not None and is_stale(status, ctx.global_config.stale_days, now)

        if as_json:
            rows.append(
                {
                    "name": name,
                    "path": str(path),
                    "branch": status.branch if status else None,
                    "ahead": status.ahead if status else None,
                    "behind": status.behind if status else None,
                    "uncommittedChanges": status.uncommitted_changes if status else None,
                    "lastCommit": status.last_commit if status else None,
                    "stackParent": parent,
                    "activeSession": active,
                    "stale": stale,
                }
            )
        else:
            lines.append(_format_line(name, status, parent, active, stale, verbose))

    if as_json:
        machine_output(json.dumps(rows, indent=2))
        return

    if not names:
        user_output(f'No workspaces in project "{project.name}". Create one with: spaces add NAME')
        return

    for line in lines:
        user_output(line)

"""Switch to a workspace by exact or approximate name."""

import click

from spaces.cli.core import require_project, require_workspaces
from spaces.cli.output import machine_output
from spaces.core.context import SpacesContext
from spaces.core.resolver import Cancelled


@click.command("switch")
@click.argument("query", required=False)
@click.option("-f", "--force", is_flag=True, help="Take the best fuzzy match without asking.")
@click.option("--no-session", is_flag=True, help="Print the path instead of opening a session.")
@click.pass_obj
def switch_cmd(ctx: SpacesContext, query: str | None, force: bool, no_session: bool) -> None:
    """Open the workspace matching QUERY.

    QUERY may be abbreviated: "fb" finds "feature-branch". When several
    workspaces match you are asked to choose. Without QUERY every workspace is
    offered.
    """
    project = require_project(ctx)
    names = require_workspaces(ctx, project)
    resolver = ctx.resolver(project)

    if query is None:
        result = resolver.choose_from_all(names, "Select workspace:")
    else:
        result = resolver.resolve(query, names, force=force)

    if isinstance(result, Cancelled):
        ctx.feedback.info("Cancelled")
        return

    if result.fuzzy and query is not None:
        ctx.feedback.info(
            f"Matched {click.style(query, fg='yellow')} → {click.style(result.name, fg='cyan')}"
        )

    if no_session or not ctx.sessions.supports_sessions:
        ctx.feedback.success(f"Workspace: {result.path}")
        machine_output(str(result.path))
        return

    ctx.sessions.create_or_attach(result.name, result.path)

import click

from spaces.cli.core import require_project
from spaces.cli.output import user_output
from spaces.core.context import SpacesContext


@click.command("status")
@click.pass_obj
def stack_status(ctx: SpacesContext) -> None:
    """Show how far each stacked workspace has fallen behind its parent."""
    project = require_project(ctx)
    listing = ctx.listing(project)
    live = set(listing.list_workspace_names())
    edges = ctx.stack_graph(project).edges()

    stacked = sorted(name for name in edges if name in live)
    if not stacked:
        user_output("No stacked workspaces")
        return

    for name in stacked:
        edge = edges[name]
        label = f"{click.style(name, fg='cyan')} → {click.style(edge.based_on, fg='cyan')}"
        if edge.based_on not in live:
            user_output(f"{label}  {click.style('parent missing', fg='red')}")
            continue

        behind = ctx.git.count_commits_behind(
            listing.workspace_path(name), listing.workspace_path(edge.based_on)
        )
        if behind is None:
            state = click.style("?", fg="bright_black")
        elif behind == 0:
            state = click.style("up to date", fg="green")
        else:
            state = click.style(f"{behind} behind", fg="yellow")
        user_output(f"{label}  {state}")

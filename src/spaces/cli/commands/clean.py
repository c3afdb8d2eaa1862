"""Remove stale workspaces that have no uncommitted changes."""

from datetime import UTC, datetime

import click

from spaces.cli.commands.remove import (
    CHILDREN_OPTION_HINT,
    _delete_workspace,
    _prompt_child_policy,
)
from spaces.cli.core import require_project
from spaces.cli.output import user_output
from spaces.core.cleanup import StaleWorkspace, identify_stale_workspaces, removal_order
from spaces.core.context import SpacesContext
from spaces.core.errors import UserError
from spaces.core.removal import ChildPolicy


def _format_choice(workspace: StaleWorkspace) -> str:
    name_part = click.style(workspace.name, fg="cyan", bold=True)
    branch_part = click.style(f"[{workspace.branch}]", fg="yellow")
    age_part = click.style(
        f"{workspace.days_since_commit} days since last commit", fg="bright_black"
    )
    return f"{name_part} {branch_part} {age_part}"


@click.command("clean")
@click.option("-f", "--force", is_flag=True, help="Remove every stale workspace without asking.")
@click.option("--keep-branch", is_flag=True, help="Keep the branches of removed workspaces.")
@click.option(
    "--children",
    "children_policy",
    type=click.Choice([p.value for p in ChildPolicy]),
    help="What to do with workspaces stacked on a removed one.",
)
@click.pass_obj
def clean_cmd(
    ctx: SpacesContext,
    force: bool,
    keep_branch: bool,
    children_policy: str | None,
) -> None:
    """Remove stale workspaces that have no uncommitted changes.

    A workspace is stale when its last commit is older than the stale_days
    setting. The stale workspaces are offered for selection, all selected by
    default; with --force all of them are removed. Each removal works like
    `spaces remove`.
    """
    project = require_project(ctx)
    listing = ctx.listing(project)
    names = listing.list_workspace_names()
    if not names:
        ctx.feedback.info("No workspaces found")
        return

    stale_days = ctx.global_config.stale_days
    stale = identify_stale_workspaces(listing, ctx.git, names, stale_days, datetime.now(UTC))
    if not stale:
        ctx.feedback.success("✓ No stale workspaces found")
        return

    options = [_format_choice(w) for w in stale]
    if force:
        user_output(f"Removing {len(stale)} stale workspace(s):")
        for option in options:
            user_output(f"  {option}")
        selected = stale
    else:
        indices = ctx.selector.select_many(
            options,
            f"Stale workspaces (no commits for {stale_days} days, no uncommitted changes):",
        )
        if not indices:
            ctx.feedback.info("No workspaces selected")
            return
        selected = [stale[i] for i in indices]

    current_session = ctx.sessions.current_session_name()
    by_name: dict[str, StaleWorkspace] = {}
    for workspace in selected:
        if workspace.name == current_session:
            ctx.feedback.warning(f"⚠ Skipping {workspace.name}: you are inside its session")
            continue
        by_name[workspace.name] = workspace

    graph = ctx.stack_graph(project)
    if force and children_policy is None:
        blocked = [
            name
            for name in by_name
            if any(child not in by_name for child in graph.get_children(name))
        ]
        if blocked:
            raise UserError(
                f"Stale workspaces have stacked workspaces: {', '.join(blocked)}.\n\n"
                + CHILDREN_OPTION_HINT
            )

    removed = 0
    for name in removal_order(graph, by_name):
        workspace = by_name[name]
        children = graph.get_children(name)
        policy: ChildPolicy | None = None
        if children:
            if children_policy is not None:
                policy = ChildPolicy(children_policy)
            else:
                policy = _prompt_child_policy(name, children)
            if policy is ChildPolicy.CANCEL:
                ctx.feedback.info(f"Keeping {name}")
                continue

        _delete_workspace(
            ctx,
            project,
            name,
            workspace.path,
            branch=workspace.branch,
            children=children,
            policy=policy,
            keep_branch=keep_branch,
        )
        removed += 1

    ctx.feedback.info(f"Cleaned {removed} of {len(selected)} stale workspace(s)")

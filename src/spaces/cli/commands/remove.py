"""Remove a workspace, deciding first what happens to its stack children."""

import logging
from pathlib import Path

import click
from rich.console import Console

from spaces.cli.core import require_project, require_workspaces
from spaces.cli.output import format_cascade_summary, user_output
from spaces.core.context import SpacesContext
from spaces.core.errors import UserError
from spaces.core.project import ProjectContext
from spaces.core.removal import ChildPolicy, orphan_children, removal_rebase_target
from spaces.core.resolver import Cancelled

logger = logging.getLogger(__name__)

CHILDREN_OPTION_HINT = "Choose what happens to them with --children cancel|rebase|orphan"


def _prompt_child_policy(name: str, children: list[str]) -> ChildPolicy:
    user_output(
        f"Workspace {click.style(name, fg='cyan', bold=True)} has stacked workspaces: "
        + ", ".join(click.style(c, fg="cyan") for c in children)
    )
    user_output("  cancel  keep everything")
    user_output("  rebase  move them onto this workspace's parent, then remove")
    user_output("  orphan  remove and leave them as independent workspaces")
    choice = click.prompt(
        "What should happen to them?",
        type=click.Choice([p.value for p in ChildPolicy]),
        default=ChildPolicy.CANCEL.value,
        err=True,
    )
    return ChildPolicy(choice)


def _apply_child_policy(
    ctx: SpacesContext,
    project: ProjectContext,
    name: str,
    children: list[str],
    policy: ChildPolicy,
) -> None:
    graph = ctx.stack_graph(project)

    if policy is ChildPolicy.ORPHAN:
        orphan_children(graph, children)
        ctx.feedback.info(f"Orphaned {len(children)} workspace(s); each is now a stack root")
        return

    base_branch = (
        ctx.project_configs.load(project.name).base_branch
        or ctx.global_config.default_base_branch
    )
    target = removal_rebase_target(graph, ctx.git, project, name, base_branch)
    ctx.feedback.info(f"Rebasing {len(children)} workspace(s) onto {target.describe()}...")
    results = ctx.orchestrator(project).cascade_rebase(children, target)
    Console(stderr=True).print(format_cascade_summary(results, target.describe()))


def _delete_workspace(
    ctx: SpacesContext,
    project: ProjectContext,
    name: str,
    path: Path,
    *,
    branch: str | None,
    children: list[str],
    policy: ChildPolicy | None,
    keep_branch: bool,
) -> None:
    """Settle the children, then kill the session, remove the worktree and its branch.

    ``branch`` is None when the workspace's status could not be read; no branch
    is deleted then.
    """
    if policy is not None:
        _apply_child_policy(ctx, project, name, children, policy)

    if ctx.sessions.session_exists(name):
        ctx.sessions.kill_session(name)
        logger.debug("Killed session %s", name)

    ctx.git.remove_worktree(project.base_dir, path, force=True)
    ctx.stack_graph(project).remove_edge(name)

    if not keep_branch:
        if branch is None:
            ctx.feedback.warning("⚠ Branch unknown; not deleting any branch")
        else:
            try:
                ctx.git.delete_branch(project.base_dir, branch, force=True)
            except RuntimeError as e:
                ctx.feedback.warning(f"⚠ Could not delete branch {branch}: {e}")

    ctx.feedback.success(f"✓ Removed workspace {name}")


@click.command("remove")
@click.argument("query")
@click.option("-f", "--force", is_flag=True, help="Do not ask for confirmation.")
@click.option("--keep-branch", is_flag=True, help="Keep the workspace's branch.")
@click.option(
    "--children",
    "children_policy",
    type=click.Choice([p.value for p in ChildPolicy]),
    help="What to do with workspaces stacked on this one.",
)
@click.pass_obj
def remove_cmd(
    ctx: SpacesContext,
    query: str,
    force: bool,
    keep_branch: bool,
    children_policy: str | None,
) -> None:
    """Remove the workspace matching QUERY.

    Kills its session, removes the worktree and deletes its branch. Workspaces
    stacked on it are rebased onto its parent, orphaned, or the removal is
    cancelled (see --children).
    """
    project = require_project(ctx)
    names = require_workspaces(ctx, project)

    result = ctx.resolver(project).resolve(query, names, force=False)
    if isinstance(result, Cancelled):
        ctx.feedback.info("Cancelled")
        return
    name = result.name
    if result.fuzzy:
        ctx.feedback.info(
            f"Matched {click.style(query, fg='yellow')} → {click.style(name, fg='cyan')}"
        )

    if ctx.sessions.current_session_name() == name:
        raise UserError(
            f'Cannot remove workspace "{name}" from inside its own session.\n\n'
            "Switch to another workspace first:\n  spaces switch OTHER"
        )

    children = ctx.stack_graph(project).get_children(name)
    policy: ChildPolicy | None = None
    if children:
        if children_policy is not None:
            policy = ChildPolicy(children_policy)
        elif force:
            raise UserError(
                f'Workspace "{name}" has stacked workspaces ({", ".join(children)}).\n\n'
                + CHILDREN_OPTION_HINT
            )
        else:
            policy = _prompt_child_policy(name, children)

        if policy is ChildPolicy.CANCEL:
            ctx.feedback.info("Cancelled")
            return

    status = ctx.git.get_status(result.path)
    if status is None:
        ctx.feedback.warning(f"⚠ Could not read git status of {name}")
    elif status.uncommitted_changes > 0:
        ctx.feedback.warning(
            f"⚠ {name} has {status.uncommitted_changes} uncommitted change(s) that will be lost"
        )

    if not force:
        if not click.confirm(f"Remove workspace {name}?", default=False, err=True):
            ctx.feedback.info("Cancelled")
            return

    _delete_workspace(
        ctx,
        project,
        name,
        result.path,
        branch=status.branch if status is not None else None,
        children=children,
        policy=policy,
        keep_branch=keep_branch,
    )

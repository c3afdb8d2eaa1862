import click

from spaces.cli.core import require_project, workspace_containing
from spaces.cli.output import user_output
from spaces.core.context import SpacesContext
from spaces.core.errors import NotStackedError, UserError
from spaces.core.rebase import RebaseConflict, RebasePreconditionFailure


@click.command("rebase")
@click.argument("name", required=False)
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation prompt.")
@click.pass_obj
def rebase_stack(ctx: SpacesContext, name: str | None, yes: bool) -> None:
    """Rebase a stacked workspace onto the current tip of its parent.

    NAME defaults to the workspace containing the current directory. On
    conflicts the rebase is left in progress for you to resolve.
    """
    project = require_project(ctx)
    listing = ctx.listing(project)

    if name is None:
        name = workspace_containing(project, ctx.cwd)
        if name is None:
            raise UserError("Not inside a workspace. Pass the workspace NAME to rebase.")

    live = listing.list_workspace_names()
    if name not in live:
        raise UserError(f'Workspace "{name}" not found')

    graph = ctx.stack_graph(project)
    parent = graph.get_parent(name)
    if parent is None:
        raise NotStackedError(name)
    if parent.workspace_name not in live:
        raise UserError(
            f'Parent workspace "{parent.workspace_name}" of "{name}" no longer exists; '
            "there is nothing to rebase onto."
        )

    parent_path = listing.workspace_path(parent.workspace_name)
    parent_branch = ctx.git.get_current_branch(parent_path) or parent.branch

    user_output(
        f"Rebasing {click.style(name, fg='cyan', bold=True)} onto "
        f"{click.style(parent.workspace_name, fg='cyan')} "
        f"[{click.style(parent_branch, fg='yellow')}]"
    )
    if not yes:
        if not click.confirm("Continue?", default=False, err=True):
            user_output(click.style("⭕ Aborted", fg="yellow"))
            return

    workspace_path = listing.workspace_path(name)
    outcome = ctx.orchestrator(project).rebase_onto(workspace_path, parent_branch, parent_path)

    if isinstance(outcome, RebasePreconditionFailure):
        raise UserError(f"Cannot rebase {name}: {outcome.reason}")

    if isinstance(outcome, RebaseConflict):
        user_output(click.style(f"⚠ {outcome.describe()}", fg="yellow"))
        user_output("")
        user_output(f"Resolve the conflicts in {workspace_path}, then run:")
        user_output("  git rebase --continue")
        user_output("Or give up with:")
        user_output("  git rebase --abort")
        raise SystemExit(1)

    graph.set_edge(name, parent.workspace_name, parent_branch)
    user_output(click.style(f"✓ Rebased {name} onto {parent_branch}", fg="green"))
    user_output("If the branch was already pushed, update it with: git push --force-with-lease")

"""Create a workspace, optionally stacked on another workspace."""

import re

import click

from spaces.cli.core import require_project
from spaces.cli.ensure import Ensure
from spaces.cli.output import machine_output
from spaces.core.context import SpacesContext
from spaces.core.errors import CircularDependencyError, UserError, WorkspaceExistsError

WORKSPACE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def is_valid_workspace_name(name: str) -> bool:
    """Workspace names become directory and session names."""
    return bool(WORKSPACE_NAME_PATTERN.match(name)) and len(name) <= 100


@click.command("add")
@click.argument("name")
@click.option("--branch", help="Branch name (default: the workspace name).")
@click.option(
    "--from",
    "from_branch",
    help="Start the new branch here instead of origin/<base branch>.",
)
@click.option(
    "--stack-on",
    "parent",
    help="Base the new branch on this workspace's branch and track it as the stack parent.",
)
@click.option("--no-session", is_flag=True, help="Print the path instead of opening a session.")
@click.pass_obj
def add_cmd(
    ctx: SpacesContext,
    name: str,
    branch: str | None,
    from_branch: str | None,
    parent: str | None,
    no_session: bool,
) -> None:
    """Create workspace NAME as a new worktree of the current project.

    Examples:
      spaces add fix-login
      spaces add auth-ui --stack-on auth-api
    """
    project = require_project(ctx)
    Ensure.invariant(
        is_valid_workspace_name(name),
        f'Invalid workspace name "{name}". Use letters, digits, ".", "_" and "-".',
    )
    if parent is not None and from_branch is not None:
        raise UserError("--stack-on and --from cannot be combined")

    listing = ctx.listing(project)
    workspace_path = listing.workspace_path(name)
    if ctx.git.path_exists(workspace_path):
        raise WorkspaceExistsError(name)

    branch_name = branch or name
    config = ctx.project_configs.load(project.name)
    graph = ctx.stack_graph(project)

    parent_branch: str | None = None
    if parent is not None:
        live = listing.list_workspace_names()
        if parent not in live:
            raise UserError(
                f'Parent workspace "{parent}" not found. Available: {", ".join(live) or "none"}'
            )
        if graph.detect_circular_dependency(parent, name):
            raise CircularDependencyError(parent=parent, child=name)
        parent_branch = Ensure.not_none(
            ctx.git.get_current_branch(listing.workspace_path(parent)),
            f'Parent workspace "{parent}" has no branch checked out (detached HEAD?)',
        )
        start_point = parent_branch
    else:
        base_branch = config.base_branch or ctx.global_config.default_base_branch
        start_point = from_branch or f"origin/{base_branch}"

    create_branch = not ctx.git.local_branch_exists(project.base_dir, branch_name)
    if create_branch:
        ctx.feedback.info(f"Creating branch {branch_name} from {start_point}...")
    else:
        ctx.feedback.info(f"Using existing branch {branch_name}...")

    ctx.git.add_worktree(
        project.base_dir,
        workspace_path,
        branch=branch_name,
        ref=start_point if create_branch else None,
        create_branch=create_branch,
    )

    if parent is not None and parent_branch is not None:
        graph.set_edge(name, parent, parent_branch)
        ctx.feedback.success(f"✓ Created workspace {name}, stacked on {parent} ({parent_branch})")
    else:
        ctx.feedback.success(f"✓ Created workspace {name}")

    if no_session or not ctx.sessions.supports_sessions:
        machine_output(str(workspace_path))
        return

    ctx.sessions.create_or_attach(name, workspace_path)

import click

from spaces.cli.core import require_project, workspace_containing
from spaces.cli.output import user_output
from spaces.core.context import SpacesContext
from spaces.core.stack.render import format_stack_tree


@click.command("tree")
@click.pass_obj
def stack_tree(ctx: SpacesContext) -> None:
    """Show every workspace as a tree of stacks.

    Workspaces without a stack parent are roots. The workspace containing the
    current directory is highlighted.
    """
    project = require_project(ctx)
    roots = ctx.stack_graph(project).build_tree()
    if not roots:
        user_output(f'No workspaces in project "{project.name}"')
        return

    user_output(format_stack_tree(roots, current=workspace_containing(project, ctx.cwd)))

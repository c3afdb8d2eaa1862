"""Commands for stacked workspaces."""

import click

from spaces.cli.commands.stack.rebase_cmd import rebase_stack
from spaces.cli.commands.stack.status_cmd import stack_status
from spaces.cli.commands.stack.tree_cmd import stack_tree


@click.group("stack")
def stack_group() -> None:
    """Inspect and maintain workspaces stacked on other workspaces."""
    pass


# Register subcommands
stack_group.add_command(stack_tree, name="tree")
stack_group.add_command(rebase_stack, name="rebase")
stack_group.add_command(stack_status, name="status")

import logging
import os

import click

from spaces.cli.commands.add import add_cmd
from spaces.cli.commands.clean import clean_cmd
from spaces.cli.commands.init import init_cmd
from spaces.cli.commands.list_cmd import list_cmd
from spaces.cli.commands.project import project_group
from spaces.cli.commands.remove import remove_cmd
from spaces.cli.commands.stack import stack_group
from spaces.cli.commands.switch import switch_cmd
from spaces.cli.output import user_output
from spaces.core.context import create_context
from spaces.core.errors import SYSTEM_ERROR_EXIT_CODE, SpacesError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "SPACES_DEBUG"


class SpacesGroup(click.Group):
    """Report known failures as a red ``Error:`` line instead of a traceback."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except SpacesError as e:
            user_output(click.style("Error: ", fg="red") + e.message)
            raise SystemExit(e.exit_code) from e
        except RuntimeError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(SYSTEM_ERROR_EXIT_CODE) from e


def configure_logging(debug: bool) -> None:
    if debug or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(cls=SpacesGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="spaces")
@click.option("--debug", is_flag=True, help="Log diagnostics to stderr.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.pass_context
def cli(ctx: click.Context, debug: bool, quiet: bool) -> None:
    """Manage one git worktree and terminal session per branch."""
    configure_logging(debug)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(quiet=quiet)


# Register all commands
cli.add_command(add_cmd)
cli.add_command(clean_cmd)
cli.add_command(init_cmd)
cli.add_command(list_cmd)
cli.add_command(list_cmd, name="ls")
cli.add_command(project_group)
cli.add_command(remove_cmd)
cli.add_command(remove_cmd, name="rm")
cli.add_command(stack_group)
cli.add_command(switch_cmd)


def main() -> None:
    """CLI entry point used by the `spaces` console script."""
    cli()

"""Write the global configuration."""

from dataclasses import replace
from pathlib import Path

import click

from spaces.cli.output import user_output
from spaces.core.context import SpacesContext
from spaces.core.global_config import MULTIPLEXERS


@click.command("init")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding all projects (default: ~/spaces).",
)
@click.option("--multiplexer", type=click.Choice(MULTIPLEXERS), help="Session backend.")
@click.option("--base-branch", help="Default base branch for new projects.")
@click.option("--stale-days", type=click.IntRange(min=1), help="Days before a workspace is stale.")
@click.pass_obj
def init_cmd(
    ctx: SpacesContext,
    root: Path | None,
    multiplexer: str | None,
    base_branch: str | None,
    stale_days: int | None,
) -> None:
    """Create or update ~/.spaces/config.toml.

    Options not given keep their current (or default) value.
    """
    config = ctx.global_config
    if root is not None:
        config = replace(config, spaces_root=root.expanduser().resolve())
    if multiplexer is not None:
        config = replace(config, multiplexer=multiplexer)
    if base_branch is not None:
        config = replace(config, default_base_branch=base_branch)
    if stale_days is not None:
        config = replace(config, stale_days=stale_days)

    ctx.global_config_ops.save(config)
    config.spaces_root.mkdir(parents=True, exist_ok=True)

    user_output(click.style("✓", fg="green") + f" Wrote {ctx.global_config_ops.path()}")
    user_output(f"  spaces root:  {config.spaces_root}")
    user_output(f"  multiplexer:  {config.multiplexer}")
    user_output(f"  base branch:  {config.default_base_branch}")
    user_output(f"  stale after:  {config.stale_days} days")

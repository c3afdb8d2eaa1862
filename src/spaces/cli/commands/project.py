"""Project selection commands."""

from dataclasses import replace

import click

from spaces.cli.output import machine_output, user_output
from spaces.core.context import SpacesContext
from spaces.core.errors import ProjectNotFoundError, UserError
from spaces.core.project import CURRENT_PROJECT_ENV_VAR, NoProjectSentinel


@click.group("project")
def project_group() -> None:
    """List and select projects."""


@project_group.command("list")
@click.pass_obj
def list_projects(ctx: SpacesContext) -> None:
    """List all projects, marking the current one."""
    names = ctx.project_configs.list_projects()
    if not names:
        user_output("No projects found")
        return

    current = None if isinstance(ctx.project, NoProjectSentinel) else ctx.project.name
    for name in names:
        config = ctx.project_configs.load(name)
        marker = "*" if name == current else " "
        label = click.style(name, fg="cyan", bold=name == current)
        machine_output(f"{marker} {label}  {config.repository}")


@project_group.command("use")
@click.argument("name")
@click.pass_obj
def use_project(ctx: SpacesContext, name: str) -> None:
    """Make NAME the current project."""
    if not ctx.project_configs.exists(name):
        known = ctx.project_configs.list_projects()
        if known:
            raise UserError(f'Project "{name}" not found. Known projects: {", ".join(known)}')
        raise ProjectNotFoundError(name)

    ctx.global_config_ops.save(replace(ctx.global_config, current_project=name))
    ctx.feedback.success(f"✓ Switched to project: {name}")
    ctx.feedback.info(
        f"\nTo select it for this shell only:\n  export {CURRENT_PROJECT_ENV_VAR}={name}"
    )

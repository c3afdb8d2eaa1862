"""Shared helpers for commands that operate on the current project."""

from pathlib import Path

from spaces.core.context import SpacesContext
from spaces.core.errors import NoProjectError, UserError
from spaces.core.project import NoProjectSentinel, ProjectContext


def require_project(ctx: SpacesContext) -> ProjectContext:
    """Return the current project or raise NoProjectError."""
    if isinstance(ctx.project, NoProjectSentinel):
        raise NoProjectError()
    return ctx.project


def require_workspaces(ctx: SpacesContext, project: ProjectContext) -> list[str]:
    """Live workspace names of ``project``; raises if there are none."""
    names = ctx.listing(project).list_workspace_names()
    if not names:
        raise UserError(
            f'No workspaces found in project "{project.name}"\n\n'
            "Create a workspace first:\n  spaces add NAME"
        )
    return names


def workspace_containing(project: ProjectContext, path: Path) -> str | None:
    """Name of the workspace directory ``path`` lies in, if any."""
    try:
        relative = path.resolve().relative_to(project.workspaces_dir.resolve())
    except ValueError:
        return None
    if not relative.parts:
        return None
    return relative.parts[0]

"""Project discovery.

A project groups the workspaces of one repository:

    <spaces_root>/<project>/
        .config.json
        base/          main clone
        workspaces/    one worktree per workspace
"""

from dataclasses import dataclass
from pathlib import Path

from spaces.core.global_config import GlobalConfig
from spaces.core.project_config import ProjectConfigStore

CURRENT_PROJECT_ENV_VAR = "SPACES_CURRENT_PROJECT"


@dataclass(frozen=True)
class ProjectContext:
    """Paths of one project."""

    name: str
    project_dir: Path
    base_dir: Path
    workspaces_dir: Path


@dataclass(frozen=True)
class NoProjectSentinel:
    """Sentinel value indicating no project is selected or the selection is stale."""

    message: str = "No project selected"


def project_context_for(spaces_root: Path, name: str) -> ProjectContext:
    project_dir = spaces_root / name
    return ProjectContext(
        name=name,
        project_dir=project_dir,
        base_dir=project_dir / "base",
        workspaces_dir=project_dir / "workspaces",
    )


def discover_project(
    global_config: GlobalConfig,
    project_configs: ProjectConfigStore,
    env_project: str | None,
) -> ProjectContext | NoProjectSentinel:
    """Resolve the current project.

    The SPACES_CURRENT_PROJECT environment variable takes precedence over the
    ``current_project`` global setting.
    """
    name = env_project or global_config.current_project
    if not name:
        return NoProjectSentinel()

    if not project_configs.exists(name):
        return NoProjectSentinel(message=f'Current project "{name}" no longer exists')

    return project_context_for(global_config.spaces_root, name)

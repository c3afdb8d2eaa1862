"""Helpers for building a project layout on disk plus a matching test context."""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from spaces.core.context import SpacesContext
from spaces.core.git.abc import Git
from spaces.core.global_config import GlobalConfig
from spaces.core.project import ProjectContext, project_context_for
from spaces.core.project_config import InMemoryProjectConfigStore, create_project_config
from spaces.core.selector import WorkspaceSelector
from spaces.core.sessions import SessionManager
from spaces.core.stack.types import StackEdge
from spaces.core.workspace_types import WorkspaceStatus

PROJECT_NAME = "proj"


def clean_status(branch: str, **overrides: object) -> WorkspaceStatus:
    """A clean, up-to-date status on ``branch``; keyword arguments override fields."""
    fields: dict[str, object] = {
        "branch": branch,
        "ahead": 0,
        "behind": 0,
        "uncommitted_changes": 0,
        "last_commit": f"Work on {branch}",
        "last_commit_date": datetime.now(UTC),
    }
    fields.update(overrides)
    return WorkspaceStatus(**fields)  # type: ignore[arg-type]


@dataclass(frozen=True)
class SimulatedSpacesEnv:
    """A spaces root holding a single project under ``tmp_path``."""

    spaces_root: Path
    project: ProjectContext

    def create_workspace(self, name: str) -> Path:
        """Create a non-empty workspace directory, as a real worktree would be."""
        path = self.workspace_path(name)
        path.mkdir(parents=True, exist_ok=True)
        (path / ".git").write_text(f"gitdir: {self.project.base_dir}/.git/worktrees/{name}\n")
        return path

    def workspace_path(self, name: str) -> Path:
        return self.project.workspaces_dir / name

    def build_context(
        self,
        *,
        git: Git | None = None,
        sessions: SessionManager | None = None,
        selector: WorkspaceSelector | None = None,
        edges: dict[str, StackEdge] | None = None,
        base_branch: str = "main",
        stale_days: int = 30,
        cwd: Path | None = None,
    ) -> SpacesContext:
        config = create_project_config(
            PROJECT_NAME, "git@example.com:org/proj.git", base_branch
        ).with_stacks(edges or {})
        return SpacesContext.for_test(
            git=git,
            sessions=sessions,
            selector=selector,
            global_config=GlobalConfig(
                spaces_root=self.spaces_root,
                current_project=PROJECT_NAME,
                default_base_branch=base_branch,
                stale_days=stale_days,
                multiplexer="tmux",
            ),
            project_configs=InMemoryProjectConfigStore([config]),
            project=self.project,
            cwd=cwd or self.spaces_root,
        )


def simulated_spaces_env(tmp_path: Path) -> SimulatedSpacesEnv:
    spaces_root = tmp_path / "spaces"
    project = project_context_for(spaces_root, PROJECT_NAME)
    project.base_dir.mkdir(parents=True)
    project.workspaces_dir.mkdir(parents=True)
    return SimulatedSpacesEnv(spaces_root=spaces_root, project=project)

"""Application context with dependency injection."""

import os
from dataclasses import dataclass
from pathlib import Path

from spaces.core.git.abc import Git
from spaces.core.git.real import RealGit
from spaces.core.global_config import (
    FilesystemGlobalConfigOps,
    GlobalConfig,
    GlobalConfigOps,
    InMemoryGlobalConfigOps,
)
from spaces.core.project import (
    CURRENT_PROJECT_ENV_VAR,
    NoProjectSentinel,
    ProjectContext,
    discover_project,
)
from spaces.core.project_config import (
    FilesystemProjectConfigStore,
    InMemoryProjectConfigStore,
    ProjectConfigStore,
)
from spaces.core.rebase import RebaseOrchestrator
from spaces.core.resolver import WorkspaceResolver
from spaces.core.selector import PromptWorkspaceSelector, WorkspaceSelector
from spaces.core.sessions import SessionManager, create_session_manager
from spaces.core.stack.graph import StackGraph
from spaces.core.stack.store import ProjectConfigStackStore, StackStore
from spaces.core.user_feedback import InteractiveFeedback, SuppressedFeedback, UserFeedback
from spaces.core.workspaces import DirectoryWorkspaceListing, WorkspaceListing


@dataclass(frozen=True)
class SpacesContext:
    """Immutable context holding all dependencies for spaces operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    sessions: SessionManager
    selector: WorkspaceSelector
    feedback: UserFeedback
    global_config_ops: GlobalConfigOps
    global_config: GlobalConfig
    project_configs: ProjectConfigStore
    stack_store: StackStore
    project: ProjectContext | NoProjectSentinel
    cwd: Path  # Current working directory at CLI invocation

    def listing(self, project: ProjectContext) -> WorkspaceListing:
        return DirectoryWorkspaceListing(project.workspaces_dir)

    def stack_graph(self, project: ProjectContext) -> StackGraph:
        return StackGraph(self.stack_store, project.name, self.listing(project), self.git)

    def resolver(self, project: ProjectContext) -> WorkspaceResolver:
        return WorkspaceResolver(self.listing(project), self.git, self.sessions, self.selector)

    def orchestrator(self, project: ProjectContext) -> RebaseOrchestrator:
        return RebaseOrchestrator(self.git, self.stack_graph(project))

    @staticmethod
    def for_test(
        git: Git | None = None,
        sessions: SessionManager | None = None,
        selector: WorkspaceSelector | None = None,
        feedback: UserFeedback | None = None,
        global_config_ops: GlobalConfigOps | None = None,
        global_config: GlobalConfig | None = None,
        project_configs: ProjectConfigStore | None = None,
        stack_store: StackStore | None = None,
        project: ProjectContext | NoProjectSentinel | None = None,
        cwd: Path | None = None,
    ) -> "SpacesContext":
        """Create test context with optional pre-configured integration classes.

        Unspecified integrations default to empty fakes. When ``stack_store`` is
        omitted, edges live in ``project_configs`` just as in production.

        Example:
            >>> ctx = SpacesContext.for_test(git=FakeGit(statuses={...}), project=project)
        """
        from tests.fakes.git import FakeGit
        from tests.fakes.selector import FakeWorkspaceSelector
        from tests.fakes.sessions import FakeSessionManager

        if global_config is None:
            global_config = GlobalConfig(
                spaces_root=Path("/test/spaces"),
                current_project=None,
                default_base_branch="main",
                stale_days=30,
                multiplexer="tmux",
            )
        if project_configs is None:
            project_configs = InMemoryProjectConfigStore()

        return SpacesContext(
            git=git or FakeGit(),
            sessions=sessions or FakeSessionManager(),
            selector=selector or FakeWorkspaceSelector(),
            feedback=feedback or InteractiveFeedback(),
            global_config_ops=global_config_ops or InMemoryGlobalConfigOps(global_config),
            global_config=global_config,
            project_configs=project_configs,
            stack_store=stack_store or ProjectConfigStackStore(project_configs),
            project=project or NoProjectSentinel(),
            cwd=cwd or Path("/test/default/cwd"),
        )


def create_context(*, quiet: bool = False) -> SpacesContext:
    """Create production context with real implementations.

    Called at CLI entry point to create the context for the entire
    command execution.
    """
    cwd = Path.cwd()

    global_config_ops = FilesystemGlobalConfigOps()
    global_config = global_config_ops.load()

    project_configs = FilesystemProjectConfigStore(global_config.spaces_root)
    project = discover_project(
        global_config, project_configs, os.environ.get(CURRENT_PROJECT_ENV_VAR)
    )

    feedback: UserFeedback = SuppressedFeedback() if quiet else InteractiveFeedback()

    return SpacesContext(
        git=RealGit(),
        sessions=create_session_manager(global_config.multiplexer),
        selector=PromptWorkspaceSelector(),
        feedback=feedback,
        global_config_ops=global_config_ops,
        global_config=global_config,
        project_configs=project_configs,
        stack_store=ProjectConfigStackStore(project_configs),
        project=project,
        cwd=cwd,
    )

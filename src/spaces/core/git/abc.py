"""High-level git operations interface.

Architecture:
- Git: Abstract base class defining the interface
- RealGit: Production implementation using subprocess (spaces.core.git.real)
- FakeGit: In-memory implementation for tests (tests/fakes/git.py)
"""

from abc import ABC, abstractmethod
from pathlib import Path

from spaces.core.workspace_types import WorkspaceStatus


class Git(ABC):
    """Abstract interface for git operations.

    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def get_status(self, workspace_path: Path) -> WorkspaceStatus | None:
        """Snapshot branch, ahead/behind, uncommitted count and last commit.

        Returns:
            None if the path does not exist or is not a valid working tree
        """
        ...

    @abstractmethod
    def get_current_branch(self, cwd: Path) -> str | None:
        """Get the currently checked-out branch, or None on detached HEAD."""
        ...

    @abstractmethod
    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        """Check whether refs/heads/<branch> exists."""
        ...

    @abstractmethod
    def add_worktree(
        self,
        repo_root: Path,
        path: Path,
        *,
        branch: str,
        ref: str | None,
        create_branch: bool,
    ) -> None:
        """Add a new git worktree.

        Args:
            repo_root: Path to the git repository root
            path: Path where the worktree should be created
            branch: Branch to check out in the worktree
            ref: Start point for a newly created branch (None = HEAD)
            create_branch: True to create ``branch`` at ``ref``, False to check out
                an existing branch
        """
        ...

    @abstractmethod
    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        """Remove a worktree.

        Args:
            repo_root: Path to the git repository root
            path: Path to the worktree to remove
            force: True to remove even with uncommitted changes
        """
        ...

    @abstractmethod
    def delete_branch(self, repo_root: Path, branch: str, *, force: bool) -> None:
        """Delete a local branch (``-D`` when force, ``-d`` otherwise)."""
        ...

    @abstractmethod
    def fetch_ref(self, workspace_path: Path, source_path: Path, branch: str) -> str:
        """Fetch ``branch`` from the repository at ``source_path`` into a scratch ref.

        The scratch ref lives in the workspace's repository and pins the exact
        commit fetched, so a following rebase is not affected by concurrent
        changes to ``source_path``.

        Returns:
            The scratch ref name, suitable as a rebase target

        Raises:
            RuntimeError: If the fetch fails
        """
        ...

    @abstractmethod
    def rebase(self, workspace_path: Path, onto_ref: str) -> bool:
        """Rebase the workspace's current branch onto ``onto_ref``.

        On conflict the rebase is NOT aborted: the working tree is left paused
        for manual resolution.

        Returns:
            True on success, False if the rebase stopped on conflicts
        """
        ...

    @abstractmethod
    def count_commits_behind(self, child_path: Path, parent_path: Path) -> int | None:
        """Count commits on the parent's HEAD that the child's branch lacks.

        Returns:
            0 when the child already contains the parent's HEAD, None when either
            side cannot be inspected
        """
        ...

    @abstractmethod
    def path_exists(self, path: Path) -> bool:
        """Check if a path exists on the filesystem.

        Lets tests use sentinel paths without creating real directories.
        """
        ...

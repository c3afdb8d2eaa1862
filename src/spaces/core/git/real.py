"""Production Git implementation using subprocess."""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

from spaces.core.git.abc import Git
from spaces.core.subprocess import run_subprocess_with_context
from spaces.core.workspace_types import WorkspaceStatus

logger = logging.getLogger(__name__)

# Fetched parent tips land under this namespace inside the workspace's repo.
SCRATCH_REF_PREFIX = "refs/remotes/parent"


def _git_query(cwd: Path, *args: str) -> str | None:
    """Run a read-only git command, returning stripped stdout or None on failure."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        logger.debug("git %s failed in %s: %s", " ".join(args), cwd, result.stderr.strip())
        return None
    return result.stdout.strip()


class RealGit(Git):
    """Production implementation using subprocess.

    All git operations execute actual git commands via subprocess.
    """

    def get_status(self, workspace_path: Path) -> WorkspaceStatus | None:
        if not workspace_path.exists():
            return None

        branch = _git_query(workspace_path, "rev-parse", "--abbrev-ref", "HEAD")
        porcelain = _git_query(workspace_path, "status", "--porcelain")
        if branch is None or porcelain is None:
            return None

        uncommitted = len([line for line in porcelain.splitlines() if line.strip()])

        last_commit = "No commits"
        last_commit_date: datetime | None = None
        log_line = _git_query(workspace_path, "log", "-1", "--pretty=format:%s|%aI")
        if log_line:
            message, _, date_str = log_line.rpartition("|")
            last_commit = message or last_commit
            if date_str:
                last_commit_date = datetime.fromisoformat(date_str)

        # Branches without an upstream have no ahead/behind
        ahead, behind = 0, 0
        counts = _git_query(
            workspace_path, "rev-list", "--left-right", "--count", f"HEAD...origin/{branch}"
        )
        if counts:
            parts = counts.split()
            if len(parts) == 2 and all(part.isdigit() for part in parts):
                ahead, behind = int(parts[0]), int(parts[1])

        return WorkspaceStatus(
            branch=branch,
            ahead=ahead,
            behind=behind,
            uncommitted_changes=uncommitted,
            last_commit=last_commit,
            last_commit_date=last_commit_date,
        )

    def get_current_branch(self, cwd: Path) -> str | None:
        branch = _git_query(cwd, "rev-parse", "--abbrev-ref", "HEAD")
        if branch is None or branch == "HEAD":
            return None
        return branch

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        result = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=repo_root,
            capture_output=True,
            check=False,
        )
        return result.returncode == 0

    def add_worktree(
        self,
        repo_root: Path,
        path: Path,
        *,
        branch: str,
        ref: str | None,
        create_branch: bool,
    ) -> None:
        if create_branch:
            cmd = ["git", "worktree", "add", "-b", branch, str(path), ref or "HEAD"]
            context = f"add worktree with new branch '{branch}' at {path}"
        else:
            cmd = ["git", "worktree", "add", str(path), branch]
            context = f"add worktree for branch '{branch}' at {path}"

        run_subprocess_with_context(cmd, operation_context=context, cwd=repo_root)

    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        cmd = ["git", "worktree", "remove"]
        if force:
            cmd.append("--force")
        cmd.append(str(path))
        run_subprocess_with_context(
            cmd,
            operation_context=f"remove worktree at {path}",
            cwd=repo_root,
        )

        run_subprocess_with_context(
            ["git", "worktree", "prune"],
            operation_context="prune worktree metadata",
            cwd=repo_root,
        )

    def delete_branch(self, repo_root: Path, branch: str, *, force: bool) -> None:
        flag = "-D" if force else "-d"
        run_subprocess_with_context(
            ["git", "branch", flag, branch],
            operation_context=f"delete branch '{branch}'",
            cwd=repo_root,
        )

    def fetch_ref(self, workspace_path: Path, source_path: Path, branch: str) -> str:
        scratch_ref = f"{SCRATCH_REF_PREFIX}/{branch}"
        # Forced refspec: the parent may have been rebased since the last fetch
        run_subprocess_with_context(
            ["git", "fetch", str(source_path), f"+{branch}:{scratch_ref}"],
            operation_context=f"fetch branch '{branch}' from {source_path}",
            cwd=workspace_path,
        )
        return scratch_ref

    def rebase(self, workspace_path: Path, onto_ref: str) -> bool:
        result = subprocess.run(
            ["git", "rebase", onto_ref],
            cwd=workspace_path,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode == 0:
            return True

        if self._rebase_in_progress(workspace_path):
            logger.debug("Rebase of %s onto %s stopped on conflicts", workspace_path, onto_ref)
            return False

        raise RuntimeError(
            f"Failed to rebase {workspace_path} onto {onto_ref}"
            f"\nExit code: {result.returncode}"
            f"\nstderr: {result.stderr.strip()}"
        )

    def _rebase_in_progress(self, workspace_path: Path) -> bool:
        for marker in ("rebase-merge", "rebase-apply"):
            git_path = _git_query(workspace_path, "rev-parse", "--git-path", marker)
            if git_path is None:
                continue
            marker_path = Path(git_path)
            if not marker_path.is_absolute():
                marker_path = workspace_path / marker_path
            if marker_path.exists():
                return True
        return False

    def count_commits_behind(self, child_path: Path, parent_path: Path) -> int | None:
        parent_head = _git_query(parent_path, "rev-parse", "HEAD")
        if parent_head is None:
            return None

        merge_base = _git_query(child_path, "merge-base", "HEAD", parent_head)
        if merge_base is None:
            return None

        if merge_base == parent_head:
            return 0

        count = _git_query(child_path, "rev-list", "--count", f"{merge_base}..{parent_head}")
        if count is None or not count.isdigit():
            return None
        return int(count)

    def path_exists(self, path: Path) -> bool:
        return path.exists()

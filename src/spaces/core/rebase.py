"""Rebasing stacked workspaces onto a new base.

``rebase_onto`` moves one workspace; ``cascade_rebase`` moves every child of
a changed or removed ancestor, one at a time, and reports each child's
outcome. A failing child never stops the cascade.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from spaces.core.git.abc import Git
from spaces.core.stack.graph import StackGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RebaseSuccess:
    def describe(self) -> str:
        return "rebased"


@dataclass(frozen=True)
class RebaseConflict:
    """The rebase stopped on conflicts and was left in progress."""

    onto_ref: str

    def describe(self) -> str:
        return f"conflicts while rebasing onto {self.onto_ref} (rebase left in progress)"


@dataclass(frozen=True)
class RebasePreconditionFailure:
    """Nothing was attempted because the workspace was not ready."""

    reason: str

    def describe(self) -> str:
        return self.reason


@dataclass(frozen=True)
class RebaseError:
    """The fetch or rebase command itself failed."""

    message: str

    def describe(self) -> str:
        return self.message


RebaseOutcome = RebaseSuccess | RebaseConflict | RebasePreconditionFailure | RebaseError


@dataclass(frozen=True)
class RebaseTarget:
    """Where children move to.

    ``parent_name`` is None when the new base is the project's base branch
    rather than another workspace; children rebased onto it become roots.
    """

    parent_name: str | None
    branch: str
    source_path: Path

    def describe(self) -> str:
        if self.parent_name is None:
            return self.branch
        return f"{self.parent_name} ({self.branch})"


@dataclass(frozen=True)
class ChildRebaseResult:
    workspace: str
    outcome: RebaseOutcome

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, RebaseSuccess)


class RebaseOrchestrator:
    """Sequences rebases and keeps the stack graph in step with them."""

    def __init__(self, git: Git, graph: StackGraph) -> None:
        self.git = git
        self.graph = graph

    def rebase_onto(
        self, workspace_path: Path, new_base_branch: str, new_base_source_path: Path
    ) -> RebaseSuccess | RebaseConflict | RebasePreconditionFailure:
        """Rebase the branch checked out at ``workspace_path`` onto another branch.

        The target tip is fetched from ``new_base_source_path`` into a scratch
        ref first, pinning the exact commit. Conflicts are not aborted.

        Raises:
            RuntimeError: If the fetch or rebase command fails outright
        """
        status = self.git.get_status(workspace_path)
        if status is None:
            return RebasePreconditionFailure(reason=f"{workspace_path} is not a valid working tree")
        if status.uncommitted_changes > 0:
            return RebasePreconditionFailure(
                reason=(
                    f"{status.uncommitted_changes} uncommitted change(s); "
                    "commit or stash them before rebasing"
                )
            )

        onto_ref = self.git.fetch_ref(workspace_path, new_base_source_path, new_base_branch)
        logger.debug("Rebasing %s onto %s", workspace_path, onto_ref)

        if self.git.rebase(workspace_path, onto_ref):
            return RebaseSuccess()
        return RebaseConflict(onto_ref=onto_ref)

    def cascade_rebase(
        self, children: list[str], new_base: RebaseTarget
    ) -> list[ChildRebaseResult]:
        """Rebase each child onto ``new_base``, in the order given.

        A successful child is re-pointed at ``new_base`` in the stack graph
        (or becomes a root when the new base is the project's base branch).
        A failed child keeps its old edge. Returns one result per child.
        """
        results: list[ChildRebaseResult] = []
        for child in children:
            child_path = self.graph.listing.workspace_path(child)
            try:
                outcome: RebaseOutcome = self.rebase_onto(
                    child_path, new_base.branch, new_base.source_path
                )
            except RuntimeError as e:
                outcome = RebaseError(message=str(e))

            if isinstance(outcome, RebaseSuccess):
                if new_base.parent_name is None:
                    self.graph.remove_edge(child)
                else:
                    self.graph.set_edge(child, new_base.parent_name, new_base.branch)
            else:
                logger.debug("Cascade rebase of %s failed: %s", child, outcome.describe())

            results.append(ChildRebaseResult(workspace=child, outcome=outcome))

        return results

"""What happens to stack children when their parent workspace is removed."""

from enum import Enum

from spaces.core.git.abc import Git
from spaces.core.project import ProjectContext
from spaces.core.rebase import RebaseTarget
from spaces.core.stack.graph import StackGraph


class ChildPolicy(Enum):
    CANCEL = "cancel"  # keep everything, remove nothing
    REBASE = "rebase"  # move children to the removed workspace's own parent
    ORPHAN = "orphan"  # drop the children's edges; each becomes a root


def removal_rebase_target(
    graph: StackGraph,
    git: Git,
    project: ProjectContext,
    removed: str,
    project_base_branch: str,
) -> RebaseTarget:
    """Where the children of ``removed`` go under ChildPolicy.REBASE.

    The removed workspace's parent if it had one (at the parent's live branch,
    falling back to the branch recorded on the edge), otherwise the project's
    base branch in the base clone.
    """
    parent = graph.get_parent(removed)
    if parent is None:
        return RebaseTarget(
            parent_name=None, branch=project_base_branch, source_path=project.base_dir
        )

    parent_path = graph.listing.workspace_path(parent.workspace_name)
    live_branch = git.get_current_branch(parent_path)
    return RebaseTarget(
        parent_name=parent.workspace_name,
        branch=live_branch or parent.branch,
        source_path=parent_path,
    )


def orphan_children(graph: StackGraph, children: list[str]) -> None:
    for child in children:
        graph.remove_edge(child)

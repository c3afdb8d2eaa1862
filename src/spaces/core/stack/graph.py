"""In-memory view over one project's stack edges.

Edges point from a child workspace to the parent workspace whose branch it is
based on. The mapping must describe a forest; ``detect_circular_dependency``
is the guard, run before creating a new stacking relationship.
"""

import logging

from spaces.core.git.abc import Git
from spaces.core.stack.store import StackStore
from spaces.core.stack.types import StackEdge, StackParent, StackTreeNode
from spaces.core.workspaces import WorkspaceListing

logger = logging.getLogger(__name__)


class StackGraph:
    """Edge mutation, lookup, cycle detection and tree reconstruction.

    Every operation reads the store afresh, so two graphs over the same store
    see each other's writes.
    """

    def __init__(
        self, store: StackStore, project: str, listing: WorkspaceListing, git: Git
    ) -> None:
        self.store = store
        self.project = project
        self.listing = listing
        self.git = git

    def edges(self) -> dict[str, StackEdge]:
        return self.store.load_edges(self.project)

    def set_edge(self, child: str, parent: str, parent_branch: str) -> None:
        """Insert or overwrite the edge for ``child``. Does not check for cycles."""
        edges = self.edges()
        edges[child] = StackEdge(based_on=parent, base_branch=parent_branch)
        self.store.save_edges(self.project, edges)
        logger.debug("Stack edge %s -> %s (%s)", child, parent, parent_branch)

    def remove_edge(self, child: str) -> None:
        """Delete the edge for ``child``. Removing a missing edge is a no-op."""
        edges = self.edges()
        if child not in edges:
            return
        del edges[child]
        self.store.save_edges(self.project, edges)
        logger.debug("Removed stack edge of %s", child)

    def get_parent(self, child: str) -> StackParent | None:
        edge = self.edges().get(child)
        if edge is None:
            return None
        return StackParent(workspace_name=edge.based_on, branch=edge.base_branch)

    def get_children(self, parent: str) -> list[str]:
        return _children_of(self.edges(), parent)

    def detect_circular_dependency(self, candidate_parent: str, proposed_child: str) -> bool:
        """Would stacking ``proposed_child`` on ``candidate_parent`` create a cycle?

        Walks upward from ``candidate_parent``. Returns True as soon as the walk
        revisits a workspace or reaches ``proposed_child``; False once it reaches
        a root.

        Example:
            With edges {B: A, C: B}:
            >>> graph.detect_circular_dependency("C", "A")
            True
            >>> graph.detect_circular_dependency("A", "C")
            False
        """
        edges = self.edges()
        visited: set[str] = set()
        current: str | None = candidate_parent

        while current:
            if current in visited or current == proposed_child:
                return True
            visited.add(current)

            edge = edges.get(current)
            current = edge.based_on if edge is not None else None

        return False

    def build_tree(self) -> list[StackTreeNode]:
        """Reconstruct the stack forest over the workspaces that exist on disk.

        Roots are existing workspaces without an edge, in listing order. A
        workspace whose status cannot be read, or that would close a cycle on
        its own path from the root, is dropped from that branch of the tree.
        Each recursive branch gets its own copy of the visited set, so a
        workspace reachable through two paths appears under both.
        """
        names = self.listing.list_workspace_names()
        branches: dict[str, str] = {}
        for name in names:
            status = self.git.get_status(self.listing.workspace_path(name))
            if status is not None:
                branches[name] = status.branch

        edges = self.edges()

        def build_node(name: str, depth: int, visited: set[str]) -> StackTreeNode | None:
            if name in visited:
                logger.debug("Cycle through %s while building stack tree", name)
                return None

            branch = branches.get(name)
            if branch is None:
                return None

            visited.add(name)
            children: list[StackTreeNode] = []
            for child in _children_of(edges, name):
                node = build_node(child, depth + 1, set(visited))
                if node is not None:
                    children.append(node)

            return StackTreeNode(workspace_name=name, branch=branch, depth=depth, children=children)

        roots: list[StackTreeNode] = []
        for name in names:
            if name in edges:
                continue
            node = build_node(name, 0, set())
            if node is not None:
                roots.append(node)

        return roots


def _children_of(edges: dict[str, StackEdge], parent: str) -> list[str]:
    return [child for child, edge in edges.items() if edge.based_on == parent]

"""Persistence of the stack edge mapping.

The mapping is keyed by child workspace name. A workspace without an entry is
a stack root. The graph never touches configuration files directly; it goes
through a ``StackStore`` so tests can substitute the in-memory store.
"""

from abc import ABC, abstractmethod

from spaces.core.project_config import ProjectConfigStore
from spaces.core.stack.types import StackEdge


class StackStore(ABC):
    """Interface for loading and saving one project's stack edges."""

    @abstractmethod
    def load_edges(self, project: str) -> dict[str, StackEdge]:
        """Load the child -> edge mapping. Returns a fresh dict the caller may mutate."""
        pass

    @abstractmethod
    def save_edges(self, project: str, edges: dict[str, StackEdge]) -> None:
        """Replace the stored mapping."""
        pass


class ProjectConfigStackStore(StackStore):
    """Edges stored under ``stacks`` in the project's .config.json."""

    def __init__(self, project_configs: ProjectConfigStore) -> None:
        self.project_configs = project_configs

    def load_edges(self, project: str) -> dict[str, StackEdge]:
        return dict(self.project_configs.load(project).stacks)

    def save_edges(self, project: str, edges: dict[str, StackEdge]) -> None:
        config = self.project_configs.load(project)
        self.project_configs.save(config.with_stacks(edges))


class InMemoryStackStore(StackStore):
    """In-memory stack edges for testing."""

    def __init__(self, edges: dict[str, dict[str, StackEdge]] | None = None) -> None:
        self._edges = {project: dict(mapping) for project, mapping in (edges or {}).items()}
        self.save_count = 0

    def load_edges(self, project: str) -> dict[str, StackEdge]:
        return dict(self._edges.get(project, {}))

    def save_edges(self, project: str, edges: dict[str, StackEdge]) -> None:
        self._edges[project] = dict(edges)
        self.save_count += 1

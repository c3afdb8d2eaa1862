"""Listing of the live workspaces in a project."""

from abc import ABC, abstractmethod
from pathlib import Path


class WorkspaceListing(ABC):
    """Which workspaces currently exist, and where."""

    @abstractmethod
    def list_workspace_names(self) -> list[str]:
        """Names of existing workspaces, sorted."""
        ...

    @abstractmethod
    def workspace_path(self, name: str) -> Path:
        """Directory of workspace ``name`` (whether or not it exists)."""
        ...


class DirectoryWorkspaceListing(WorkspaceListing):
    """Workspaces are the non-empty subdirectories of ``workspaces_dir``."""

    def __init__(self, workspaces_dir: Path) -> None:
        self.workspaces_dir = workspaces_dir

    def list_workspace_names(self) -> list[str]:
        if not self.workspaces_dir.is_dir():
            return []

        names = []
        for entry in self.workspaces_dir.iterdir():
            if entry.is_dir() and any(entry.iterdir()):
                names.append(entry.name)
        return sorted(names)

    def workspace_path(self, name: str) -> Path:
        return self.workspaces_dir / name

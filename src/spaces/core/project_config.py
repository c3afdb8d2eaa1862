"""Per-project configuration stored as JSON.

Each project lives in ``<spaces_root>/<project>/`` with its settings in
``.config.json``. The stack edge mapping is a nested object under ``stacks``.
Keys this module does not know about are carried through unchanged.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from spaces.core.errors import ConfigError, ProjectNotFoundError
from spaces.core.stack.types import StackEdge

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".config.json"

_KNOWN_KEYS = frozenset(
    {"name", "repository", "baseBranch", "llmAssistant", "stacks", "createdAt", "lastAccessed"}
)


@dataclass(frozen=True)
class ProjectConfig:
    name: str
    repository: str
    base_branch: str
    created_at: str
    last_accessed: str
    llm_assistant: str | None = None
    stacks: dict[str, StackEdge] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def with_stacks(self, stacks: dict[str, StackEdge]) -> "ProjectConfig":
        return replace(self, stacks=dict(stacks))


def create_project_config(
    name: str, repository: str, base_branch: str, *, now: datetime | None = None
) -> ProjectConfig:
    timestamp = (now or datetime.now(UTC)).isoformat()
    return ProjectConfig(
        name=name,
        repository=repository,
        base_branch=base_branch,
        created_at=timestamp,
        last_accessed=timestamp,
    )


def parse_project_config(data: dict[str, Any], source: str) -> ProjectConfig:
    """Build a ProjectConfig from decoded JSON.

    Raises:
        ConfigError: If required keys are missing or stacks are malformed
    """
    missing = [key for key in ("name", "repository", "baseBranch") if key not in data]
    if missing:
        raise ConfigError(f"Project config {source} is missing: {', '.join(missing)}")

    stacks: dict[str, StackEdge] = {}
    raw_stacks = data.get("stacks") or {}
    if not isinstance(raw_stacks, dict):
        raise ConfigError(f"'stacks' must be an object in {source}")
    for child, edge in raw_stacks.items():
        if not isinstance(edge, dict) or "basedOn" not in edge or "baseBranch" not in edge:
            raise ConfigError(f"Malformed stack entry for '{child}' in {source}")
        stacks[child] = StackEdge(based_on=edge["basedOn"], base_branch=edge["baseBranch"])

    return ProjectConfig(
        name=data["name"],
        repository=data["repository"],
        base_branch=data["baseBranch"],
        created_at=data.get("createdAt", ""),
        last_accessed=data.get("lastAccessed", ""),
        llm_assistant=data.get("llmAssistant"),
        stacks=stacks,
        extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
    )


def serialize_project_config(config: ProjectConfig) -> dict[str, Any]:
    data: dict[str, Any] = dict(config.extra)
    data.update(
        {
            "name": config.name,
            "repository": config.repository,
            "baseBranch": config.base_branch,
            "createdAt": config.created_at,
            "lastAccessed": config.last_accessed,
        }
    )
    if config.llm_assistant is not None:
        data["llmAssistant"] = config.llm_assistant
    if config.stacks:
        data["stacks"] = {
            child: {"basedOn": edge.based_on, "baseBranch": edge.base_branch}
            for child, edge in config.stacks.items()
        }
    return data


class ProjectConfigStore(ABC):
    """Abstract interface for reading and writing project configs."""

    @abstractmethod
    def list_projects(self) -> list[str]:
        """Names of all projects, sorted."""
        ...

    @abstractmethod
    def exists(self, project: str) -> bool:
        ...

    @abstractmethod
    def load(self, project: str) -> ProjectConfig:
        """Load a project's config.

        Raises:
            ProjectNotFoundError: If the project has no config
            ConfigError: If the config cannot be parsed
        """
        ...

    @abstractmethod
    def save(self, config: ProjectConfig) -> None:
        ...


class FilesystemProjectConfigStore(ProjectConfigStore):
    """Project configs under ``spaces_root``."""

    def __init__(self, spaces_root: Path) -> None:
        self.spaces_root = spaces_root

    def config_path(self, project: str) -> Path:
        return self.spaces_root / project / CONFIG_FILE_NAME

    def list_projects(self) -> list[str]:
        if not self.spaces_root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.spaces_root.iterdir()
            if entry.is_dir() and (entry / CONFIG_FILE_NAME).exists()
        )

    def exists(self, project: str) -> bool:
        return self.config_path(project).exists()

    def load(self, project: str) -> ProjectConfig:
        path = self.config_path(project)
        if not path.exists():
            raise ProjectNotFoundError(project)

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f'Failed to read project config for "{project}": {e}') from e

        if not isinstance(data, dict):
            raise ConfigError(f'Project config for "{project}" must be a JSON object')
        return parse_project_config(data, str(path))

    def save(self, config: ProjectConfig) -> None:
        path = self.config_path(config.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Writing project config %s", path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(serialize_project_config(config), f, indent=2)
            f.write("\n")


class InMemoryProjectConfigStore(ProjectConfigStore):
    """Test implementation holding configs in a dict."""

    def __init__(self, configs: list[ProjectConfig] | None = None) -> None:
        self._configs = {config.name: config for config in configs or []}

    def list_projects(self) -> list[str]:
        return sorted(self._configs)

    def exists(self, project: str) -> bool:
        return project in self._configs

    def load(self, project: str) -> ProjectConfig:
        if project not in self._configs:
            raise ProjectNotFoundError(project)
        return self._configs[project]

    def save(self, config: ProjectConfig) -> None:
        self._configs[config.name] = config

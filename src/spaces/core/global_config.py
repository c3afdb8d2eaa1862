"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.spaces/config.toml.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from spaces.core.errors import ConfigError

DEFAULT_BASE_BRANCH = "main"
DEFAULT_STALE_DAYS = 30
DEFAULT_MULTIPLEXER = "tmux"
MULTIPLEXERS = ("tmux", "none")


def default_spaces_root() -> Path:
    return Path.home() / "spaces"


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in SpacesContext.
    """

    spaces_root: Path
    current_project: str | None
    default_base_branch: str
    stale_days: int
    multiplexer: str

    @staticmethod
    def defaults() -> "GlobalConfig":
        return GlobalConfig(
            spaces_root=default_spaces_root(),
            current_project=None,
            default_base_branch=DEFAULT_BASE_BRANCH,
            stale_days=DEFAULT_STALE_DAYS,
            multiplexer=DEFAULT_MULTIPLEXER,
        )


def parse_global_config(data: dict, source: Path) -> GlobalConfig:
    """Build a GlobalConfig from parsed TOML, filling in defaults.

    Raises:
        ConfigError: If a field has the wrong type or an unknown multiplexer
    """
    root = data.get("spaces_root")
    if root is not None and not isinstance(root, str):
        raise ConfigError(f"'spaces_root' must be a string in {source}")

    stale_days = data.get("stale_days", DEFAULT_STALE_DAYS)
    if not isinstance(stale_days, int) or isinstance(stale_days, bool):
        raise ConfigError(f"'stale_days' must be an integer in {source}")

    multiplexer = data.get("multiplexer", DEFAULT_MULTIPLEXER)
    if multiplexer not in MULTIPLEXERS:
        raise ConfigError(
            f"Unknown multiplexer '{multiplexer}' in {source} (expected one of: "
            + ", ".join(MULTIPLEXERS)
            + ")"
        )

    return GlobalConfig(
        spaces_root=Path(root).expanduser() if root else default_spaces_root(),
        current_project=data.get("current_project") or None,
        default_base_branch=str(data.get("default_base_branch", DEFAULT_BASE_BRANCH)),
        stale_days=stale_days,
        multiplexer=multiplexer,
    )


def serialize_global_config(config: GlobalConfig) -> dict:
    data: dict = {
        "spaces_root": str(config.spaces_root),
        "default_base_branch": config.default_base_branch,
        "stale_days": config.stale_days,
        "multiplexer": config.multiplexer,
    }
    # TOML has no null
    if config.current_project is not None:
        data["current_project"] = config.current_project
    return data


class GlobalConfigOps(ABC):
    """Abstract interface for global config operations.

    Provides dependency injection for global config access, enabling
    in-memory implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config, returning defaults when none has been saved.

        Raises:
            ConfigError: If the stored config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: GlobalConfig) -> None:
        """Persist global config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path to the global config file (for error messages and debugging)."""
        ...


class FilesystemGlobalConfigOps(GlobalConfigOps):
    """Production implementation that reads/writes ~/.spaces/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        config_path = self.path()
        if not config_path.exists():
            return GlobalConfig.defaults()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to read global config {config_path}: {e}") from e

        return parse_global_config(data, config_path)

    def save(self, config: GlobalConfig) -> None:
        config_path = self.path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "wb") as f:
            tomli_w.dump(serialize_global_config(config), f)

    def path(self) -> Path:
        if self._config_path is not None:
            return self._config_path
        return Path.home() / ".spaces" / "config.toml"


class InMemoryGlobalConfigOps(GlobalConfigOps):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        """Initialize in-memory config ops.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            return GlobalConfig.defaults()
        return self._config

    def save(self, config: GlobalConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/spaces/config.toml")

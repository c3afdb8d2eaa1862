"""Terminal-multiplexer session operations.

Each workspace may own a session named after it. ``SessionManager`` is the
seam; ``TmuxSessionManager`` drives tmux and ``NoSessionManager`` is the
plain-shell backend that never has sessions.
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from spaces.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)


def _exact(name: str) -> str:
    """Target a session by exact name. A bare ``-t NAME`` also matches prefixes."""
    return f"={name}"


class SessionManager(ABC):
    """Abstract interface for workspace sessions."""

    display_name: str = "session"
    supports_sessions: bool = True

    @abstractmethod
    def session_exists(self, name: str) -> bool:
        """Check whether a session with this name is running."""
        ...

    @abstractmethod
    def create_or_attach(self, name: str, working_directory: Path) -> None:
        """Attach to session ``name``, creating it in ``working_directory`` if needed."""
        ...

    @abstractmethod
    def kill_session(self, name: str) -> None:
        """Terminate session ``name``."""
        ...

    @abstractmethod
    def current_session_name(self) -> str | None:
        """Name of the session this process runs inside, if any."""
        ...


class TmuxSessionManager(SessionManager):
    """Sessions backed by tmux."""

    display_name = "tmux"

    def session_exists(self, name: str) -> bool:
        try:
            result = subprocess.run(
                ["tmux", "has-session", "-t", _exact(name)],
                capture_output=True,
                check=False,
            )
        except FileNotFoundError:
            logger.debug("tmux not installed; treating session %s as absent", name)
            return False
        return result.returncode == 0

    def create_or_attach(self, name: str, working_directory: Path) -> None:
        if not self.session_exists(name):
            run_subprocess_with_context(
                ["tmux", "new-session", "-d", "-s", name, "-c", str(working_directory)],
                operation_context=f"create tmux session '{name}'",
            )

        if os.environ.get("TMUX"):
            run_subprocess_with_context(
                ["tmux", "switch-client", "-t", _exact(name)],
                operation_context=f"switch to tmux session '{name}'",
            )
            return

        # Interactive attach: inherit the terminal
        run_subprocess_with_context(
            ["tmux", "attach-session", "-t", _exact(name)],
            operation_context=f"attach to tmux session '{name}'",
            capture_output=False,
        )

    def kill_session(self, name: str) -> None:
        run_subprocess_with_context(
            ["tmux", "kill-session", "-t", _exact(name)],
            operation_context=f"kill tmux session '{name}'",
        )

    def current_session_name(self) -> str | None:
        if not os.environ.get("TMUX"):
            return None
        result = subprocess.run(
            ["tmux", "display-message", "-p", "#S"],
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None


class NoSessionManager(SessionManager):
    """Plain-shell backend: workspaces are entered with ``cd``."""

    display_name = "shell"
    supports_sessions = False

    def session_exists(self, name: str) -> bool:
        return False

    def create_or_attach(self, name: str, working_directory: Path) -> None:
        raise RuntimeError("The shell backend cannot attach to sessions")

    def kill_session(self, name: str) -> None:
        pass

    def current_session_name(self) -> str | None:
        return None


def create_session_manager(multiplexer: str) -> SessionManager:
    """Build the session backend named in global config ("tmux" or "none")."""
    if multiplexer == "tmux":
        return TmuxSessionManager()
    if multiplexer == "none":
        return NoSessionManager()
    raise ValueError(f"Unknown multiplexer '{multiplexer}' (expected 'tmux' or 'none')")

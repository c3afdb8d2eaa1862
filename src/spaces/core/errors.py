"""Error types raised by the spaces core.

Two families surface to the CLI:

- ``UserError``: the input was wrong (unknown workspace, circular stack, dirty
  working tree). Messages carry enough context for the user to self-correct.
- ``SystemFailure``: something outside the user's control failed (unreadable
  config, broken repository). Surfaced, never retried.

Subprocess failures from the git and tmux integrations surface as
``RuntimeError`` (see ``spaces.core.subprocess``) and are treated as system
errors by the CLI.
"""

from collections.abc import Iterable

USER_ERROR_EXIT_CODE = 1
SYSTEM_ERROR_EXIT_CODE = 2


class SpacesError(Exception):
    """Base class for errors the CLI reports without a traceback."""

    exit_code = USER_ERROR_EXIT_CODE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserError(SpacesError):
    """Invalid input or state the user can fix."""

    exit_code = USER_ERROR_EXIT_CODE


class SystemFailure(SpacesError):
    """Failure unrelated to user input."""

    exit_code = SYSTEM_ERROR_EXIT_CODE


class WorkspaceNotFoundError(UserError):
    """No workspace matched a query, exactly or approximately."""

    def __init__(self, query: str, available: Iterable[str]) -> None:
        self.query = query
        self.available = sorted(available)
        if self.available:
            listing = "\n".join(f"  - {name}" for name in self.available)
            message = f'No workspace matching "{query}".\n\nAvailable workspaces:\n{listing}'
        else:
            message = f'No workspace matching "{query}". This project has no workspaces yet.'
        super().__init__(message)


class WorkspaceExistsError(UserError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Workspace "{name}" already exists.\n\nTo switch to it:\n  spaces switch {name}'
        )


class CircularDependencyError(UserError):
    """Stacking ``child`` on ``parent`` would make a workspace its own ancestor."""

    def __init__(self, parent: str, child: str) -> None:
        self.parent = parent
        self.child = child
        super().__init__(
            f'Cannot stack "{child}" on "{parent}": "{child}" is already '
            f'"{parent}" or one of its ancestors.'
        )


class NotStackedError(UserError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Workspace "{name}" is not a stacked workspace. It has no parent to rebase onto.'
        )


class NoProjectError(UserError):
    def __init__(self) -> None:
        super().__init__(
            "No project selected.\n\n"
            "Select an existing project:\n  spaces project use NAME\n\n"
            "Or list known projects:\n  spaces project list"
        )


class ProjectNotFoundError(UserError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Project "{name}" not found')


class ConfigError(SystemFailure):
    """A configuration file exists but cannot be read or written."""

"""Git operations subpackage.

Abstractions over the git commands the workspace core needs, with a
subprocess-backed production implementation. Tests use the in-memory fake in
tests/fakes/git.py.
"""

from spaces.core.git.abc import Git
from spaces.core.git.real import RealGit

__all__ = ["Git", "RealGit"]

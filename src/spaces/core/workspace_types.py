"""Data types for workspace status, fuzzy matching and ranking."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class WorkspaceStatus:
    """Version-control snapshot of a single workspace."""

    branch: str
    ahead: int
    behind: int
    uncommitted_changes: int
    last_commit: str
    last_commit_date: datetime | None = None


@dataclass(frozen=True)
class WorkspaceCandidate:
    """A live workspace considered when resolving a name.

    Built fresh for every resolution; never cached or persisted.
    """

    name: str
    path: Path
    branch: str
    ahead: int
    behind: int
    uncommitted_changes: int
    last_commit: str
    has_active_session: bool


@dataclass(frozen=True)
class FuzzyMatch:
    """A candidate whose name contains the query as a subsequence."""

    candidate: WorkspaceCandidate
    score: int
    matched_indices: tuple[int, ...]


@dataclass(frozen=True)
class RankedWorkspace:
    """A fuzzy match re-weighted by context. Ordered by ``final_score``."""

    candidate: WorkspaceCandidate
    match_score: int
    final_score: int
    matched_indices: tuple[int, ...]

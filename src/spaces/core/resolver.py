"""Turn a user-typed workspace name into a workspace.

Resolution order:

1. An exact name always wins, without looking at anything else.
2. Otherwise every live workspace becomes a candidate (status and session
   state are queried for all of them) and the query is fuzzy-matched.
3. No match: WorkspaceNotFoundError listing every live name.
4. One match, or ``force``: the top-ranked match is chosen and flagged as a
   substitution so the caller can tell the user.
5. Several matches: the ranked list goes back to the caller for interactive
   selection. Aborting the selection is ``Cancelled``, not an error.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from spaces.core.errors import WorkspaceNotFoundError
from spaces.core.fuzzy import match_all
from spaces.core.git.abc import Git
from spaces.core.ranking import rank, rank_candidates
from spaces.core.selector import WorkspaceSelector
from spaces.core.sessions import SessionManager
from spaces.core.workspace_types import RankedWorkspace, WorkspaceCandidate
from spaces.core.workspaces import WorkspaceListing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedWorkspace:
    """The workspace a query refers to.

    ``fuzzy`` is True when the name differs from what the user typed.
    """

    name: str
    path: Path
    fuzzy: bool = False


@dataclass(frozen=True)
class AmbiguousChoice:
    query: str
    ranked: list[RankedWorkspace]


@dataclass(frozen=True)
class Cancelled:
    """The user aborted an interactive selection. Callers should do nothing."""


def format_candidate(candidate: WorkspaceCandidate) -> str:
    """One selection line: ``name  [branch +A -B]  status  (active)``."""
    if candidate.uncommitted_changes > 0:
        status = f"{candidate.uncommitted_changes} uncommitted"
    else:
        status = "clean"

    line = (
        f"{candidate.name}  [{candidate.branch} +{candidate.ahead} -{candidate.behind}]  {status}"
    )
    if candidate.has_active_session:
        line += "  (active)"
    return line


class WorkspaceResolver:
    def __init__(
        self,
        listing: WorkspaceListing,
        git: Git,
        sessions: SessionManager,
        selector: WorkspaceSelector,
    ) -> None:
        self.listing = listing
        self.git = git
        self.sessions = sessions
        self.selector = selector

    def build_candidates(self, names: Iterable[str]) -> list[WorkspaceCandidate]:
        """Snapshot every named workspace, one git and one session query each."""
        candidates: list[WorkspaceCandidate] = []
        for name in names:
            path = self.listing.workspace_path(name)
            status = self.git.get_status(path)
            if status is None:
                logger.debug("No git status for workspace %s", name)
            candidates.append(
                WorkspaceCandidate(
                    name=name,
                    path=path,
                    branch=status.branch if status else "unknown",
                    ahead=status.ahead if status else 0,
                    behind=status.behind if status else 0,
                    uncommitted_changes=status.uncommitted_changes if status else 0,
                    last_commit=status.last_commit if status else "",
                    has_active_session=self.sessions.session_exists(name),
                )
            )
        return candidates

    def resolve_query(
        self, query: str, live_names: Iterable[str], *, force: bool
    ) -> ResolvedWorkspace | AmbiguousChoice:
        """Resolve without prompting.

        Raises:
            WorkspaceNotFoundError: If nothing matches, exactly or approximately
        """
        names = list(live_names)
        if query in names:
            return ResolvedWorkspace(name=query, path=self.listing.workspace_path(query))

        candidates = self.build_candidates(names)
        matches = match_all(query, candidates)
        logger.debug(
            "Fuzzy matches for %r: %s", query, [(m.candidate.name, m.score) for m in matches]
        )
        if not matches:
            raise WorkspaceNotFoundError(query, names)

        ranked = rank(matches)
        if len(ranked) == 1 or force:
            top = ranked[0].candidate
            return ResolvedWorkspace(name=top.name, path=top.path, fuzzy=True)

        return AmbiguousChoice(query=query, ranked=ranked)

    def choose(self, choice: AmbiguousChoice) -> ResolvedWorkspace | Cancelled:
        options = [format_candidate(r.candidate) for r in choice.ranked]
        index = self.selector.select(options, f'Multiple workspaces match "{choice.query}":')
        if index is None:
            return Cancelled()
        picked = choice.ranked[index].candidate
        return ResolvedWorkspace(name=picked.name, path=picked.path, fuzzy=True)

    def resolve(
        self, query: str, live_names: Iterable[str], *, force: bool
    ) -> ResolvedWorkspace | Cancelled:
        """Resolve ``query``, prompting when several workspaces match.

        Raises:
            WorkspaceNotFoundError: If nothing matches
        """
        result = self.resolve_query(query, live_names, force=force)
        if isinstance(result, AmbiguousChoice):
            return self.choose(result)
        return result

    def choose_from_all(
        self, live_names: Iterable[str], message: str
    ) -> ResolvedWorkspace | Cancelled:
        """Offer every live workspace for selection (no query typed).

        Active sessions come first, then short names, as in ``rank``.
        """
        candidates = rank_candidates(self.build_candidates(live_names))
        index = self.selector.select([format_candidate(c) for c in candidates], message)
        if index is None:
            return Cancelled()
        picked = candidates[index]
        return ResolvedWorkspace(name=picked.name, path=picked.path)

"""Contextual re-weighting of fuzzy matches."""

from collections.abc import Iterable

from spaces.core.workspace_types import FuzzyMatch, RankedWorkspace, WorkspaceCandidate

SHORT_NAME_MAX_LENGTH = 15
SHORT_NAME_BONUS = 5
ACTIVE_SESSION_BONUS = 10


def context_bonus(candidate: WorkspaceCandidate) -> int:
    """Boost for short names and workspaces with a live session."""
    bonus = 0
    if len(candidate.name) <= SHORT_NAME_MAX_LENGTH:
        bonus += SHORT_NAME_BONUS
    if candidate.has_active_session:
        bonus += ACTIVE_SESSION_BONUS
    return bonus


def rank(matches: Iterable[FuzzyMatch]) -> list[RankedWorkspace]:
    """Order matches by match score plus context bonuses.

    The text match itself is not re-scored. Ties keep input order.
    """
    ranked = [
        RankedWorkspace(
            candidate=fuzzy_match.candidate,
            match_score=fuzzy_match.score,
            final_score=fuzzy_match.score + context_bonus(fuzzy_match.candidate),
            matched_indices=fuzzy_match.matched_indices,
        )
        for fuzzy_match in matches
    ]

    return sorted(ranked, key=lambda r: r.final_score, reverse=True)


def rank_candidates(candidates: Iterable[WorkspaceCandidate]) -> list[WorkspaceCandidate]:
    """Order candidates by context bonus alone, for selection without a query.

    Ties keep input order.
    """
    return sorted(candidates, key=context_bonus, reverse=True)

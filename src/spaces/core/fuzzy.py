"""Approximate matching of a typed query against workspace names.

A query matches a name when its characters appear in the name, in order,
ignoring case. The score rewards matches that start the name, run together,
sit on word boundaries and agree in case, and penalises gaps.
"""

from collections.abc import Iterable

from spaces.core.workspace_types import FuzzyMatch, WorkspaceCandidate

BASE_SCORE = 50
START_BONUS = 15
CONSECUTIVE_BONUS = 10
WORD_BOUNDARY_BONUS = 5
EXACT_CASE_BONUS = 2

# Matches scoring below this are discarded by match_all().
MIN_MATCH_SCORE = 30

WORD_SEPARATORS = frozenset("-_/")


def match(query: str, candidate: str) -> tuple[int, tuple[int, ...]]:
    """Score ``query`` against ``candidate``.

    Each query character is located at its next case-insensitive occurrence
    after the previous match. If any character is missing the match fails.

    Args:
        query: Text typed by the user
        candidate: Workspace name to match against

    Returns:
        (score, matched_indices). A failed match returns (0, ()). The score is
        not clamped and can be negative for long, gappy matches.

    Example:
        >>> match("abc", "abc")
        (96, (0, 1, 2))
    """
    if not query or not candidate:
        return 0, ()

    # Lower one character at a time. "İ".lower() is two code points, so a
    # lowered copy of the whole name would not line up with the original.
    indices: list[int] = []
    start = 0
    for char in query:
        wanted = char.lower()
        found = next(
            (j for j in range(start, len(candidate)) if candidate[j].lower() == wanted),
            -1,
        )
        if found == -1:
            return 0, ()
        indices.append(found)
        start = found + 1

    score = BASE_SCORE
    if indices[0] == 0:
        score += START_BONUS

    for i, index in enumerate(indices):
        if i > 0 and index == indices[i - 1] + 1:
            score += CONSECUTIVE_BONUS

        if index == 0 or candidate[index - 1] in WORD_SEPARATORS:
            score += WORD_BOUNDARY_BONUS

        if query[i] == candidate[index]:
            score += EXACT_CASE_BONUS

        if i > 0:
            score -= index - indices[i - 1] - 1

    return score, tuple(indices)


def match_all(query: str, candidates: Iterable[WorkspaceCandidate]) -> list[FuzzyMatch]:
    """Match ``query`` against every candidate name.

    Returns matches scoring at least MIN_MATCH_SCORE, best first. Equal scores
    keep the order in which candidates were supplied.
    """
    matches: list[FuzzyMatch] = []
    for candidate in candidates:
        score, indices = match(query, candidate.name)
        if score >= MIN_MATCH_SCORE:
            matches.append(FuzzyMatch(candidate=candidate, score=score, matched_indices=indices))

    # sorted() is stable: ties stay in input order
    return sorted(matches, key=lambda m: m.score, reverse=True)

"""
Match Selection for an event.

Responsibilities:
- Score every unordered attendee pair exactly once.
- Emit both directed records from that single computation.
- Rank, tie-break and truncate each attendee's candidates.

Non-Responsibilities:
- No persistence.
- No explanation text.
- No mutual or one-to-one pairing: A may list B while B does not list A.

Invariant:
Equal scores are ordered by matched_with_id, never by input order.
"""

from typing import Dict, List, Sequence

from .models import MatchableProfile, MatchScore
from .scoring import calculate_match_score

DEFAULT_MATCHES_PER_ATTENDEE = 5


def _ranking_key(match: MatchScore):
    return (-match.score, match.matched_with_id)


def score_all_pairs(profiles: Sequence[MatchableProfile]) -> List[MatchScore]:
    """Directed records for every pair, two per unordered pair."""
    directed: List[MatchScore] = []
    for i in range(len(profiles)):
        for j in range(i + 1, len(profiles)):
            forward = calculate_match_score(profiles[i], profiles[j])
            directed.append(forward)
            directed.append(forward.reversed())
    return directed


def group_matches_by_attendee(matches: Sequence[MatchScore]) -> Dict[str, List[MatchScore]]:
    grouped: Dict[str, List[MatchScore]] = {}
    for match in matches:
        grouped.setdefault(match.attendee_id, []).append(match)
    return grouped


def select_top_matches(candidates: Sequence[MatchScore], limit: int) -> List[MatchScore]:
    """
    Sort one attendee's candidates and keep the best ``limit``.

    Higher score first; equal scores fall back to ascending matched_with_id.
    Positions are 1-based over the truncated list.
    """
    ranked = sorted(candidates, key=_ranking_key)[:limit]
    return [match.with_position(index + 1) for index, match in enumerate(ranked)]


def generate_event_matches(
    profiles: Sequence[MatchableProfile],
    matches_per_attendee: int = DEFAULT_MATCHES_PER_ATTENDEE,
) -> List[MatchScore]:
    """
    Compute the ranked top-N matches for every attendee of an event.

    Args:
        profiles: All matchable attendee profiles for the event
        matches_per_attendee: Event-level cap on matches per attendee

    Returns:
        Flat list of positioned MatchScore records, grouped by attendee.
        Empty when fewer than two profiles are given.

    Raises:
        ValueError: If matches_per_attendee is not a positive integer
    """
    if isinstance(matches_per_attendee, bool) or not isinstance(matches_per_attendee, int):
        raise ValueError(f"matches_per_attendee must be an int, got {matches_per_attendee!r}")
    if matches_per_attendee < 1:
        raise ValueError(f"matches_per_attendee must be >= 1, got {matches_per_attendee}")

    if len(profiles) < 2:
        return []

    directed = score_all_pairs(profiles)
    by_attendee = group_matches_by_attendee(directed)

    selected: List[MatchScore] = []
    for candidates in by_attendee.values():
        selected.extend(select_top_matches(candidates, matches_per_attendee))
    return selected

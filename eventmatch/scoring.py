"""
Scoring Logic for attendee compatibility (v1, rule based).

Final score =
    seeking <-> offering  x 0.40
  + expertise overlap     x 0.25
  + experience fit        x 0.20
  + topic overlap         x 0.15

Invariant:
score(A, B) == score(B, A) for every pair of profiles.
"""

import math
from typing import Optional

from .models import EXPERIENCE_LEVELS, MatchableProfile, MatchScore, MatchScoreComponents
from .similarity import fuzzy_jaccard_similarity

WEIGHTS = {
    "seeking_offering": 0.40,
    "expertise": 0.25,
    "experience": 0.20,
    "topics": 0.15,
}

NEUTRAL_EXPERIENCE = 0.5

# Ladder distance -> compatibility. Adjacent levels get a mentorship bonus.
EXPERIENCE_BY_DISTANCE = {
    0: 0.6,
    1: 0.8,
    2: 0.5,
}
LARGE_GAP_EXPERIENCE = 0.4


def seeking_offering_score(a: MatchableProfile, b: MatchableProfile) -> float:
    """Average of A-seeks-what-B-offers and B-seeks-what-A-offers."""
    a_seeks_b = fuzzy_jaccard_similarity(a.seeking_keywords, b.offering_keywords)
    b_seeks_a = fuzzy_jaccard_similarity(b.seeking_keywords, a.offering_keywords)
    return (a_seeks_b + b_seeks_a) / 2


def experience_compatibility(a_level: Optional[str], b_level: Optional[str]) -> float:
    if not a_level or not b_level:
        return NEUTRAL_EXPERIENCE
    if a_level not in EXPERIENCE_LEVELS or b_level not in EXPERIENCE_LEVELS:
        return NEUTRAL_EXPERIENCE

    distance = abs(EXPERIENCE_LEVELS.index(a_level) - EXPERIENCE_LEVELS.index(b_level))
    return EXPERIENCE_BY_DISTANCE.get(distance, LARGE_GAP_EXPERIENCE)


def calculate_components(a: MatchableProfile, b: MatchableProfile) -> MatchScoreComponents:
    return MatchScoreComponents(
        seeking_offering=seeking_offering_score(a, b),
        expertise=fuzzy_jaccard_similarity(a.expertise, b.expertise),
        experience=experience_compatibility(a.experience_level, b.experience_level),
        topics=fuzzy_jaccard_similarity(a.topics_of_interest, b.topics_of_interest),
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def weighted_score(components: MatchScoreComponents) -> int:
    """Combine components into an integer 0-100 score."""
    total = sum(
        getattr(components, name) * weight for name, weight in WEIGHTS.items()
    )
    return max(0, min(100, _round_half_up(total * 100)))


def calculate_match_score(a: MatchableProfile, b: MatchableProfile) -> MatchScore:
    """
    Score one pair of profiles.

    Args:
        a: Attendee whose perspective the record takes
        b: Candidate match

    Returns:
        MatchScore from ``a`` to ``b`` with no position assigned
    """
    components = calculate_components(a, b)
    return MatchScore(
        attendee_id=a.id,
        matched_with_id=b.id,
        score=weighted_score(components),
        components=components,
    )

"""
Human-readable explanations for selected matches.

Reasons and conversation starters are checked in a fixed priority order
with fixed thresholds. Order is never re-ranked by component magnitude.
"""

from typing import Dict, List, Sequence

from .models import ExplainedMatch, MatchableProfile, MatchScore
from .similarity import normalize_term

MAX_REASONS = 3
MAX_STARTERS = 3

SEEKING_OFFERING_THRESHOLD = 0.3
EXPERTISE_THRESHOLD = 0.3
EXPERIENCE_THRESHOLD = 0.8
TOPICS_THRESHOLD = 0.3

FALLBACK_REASON = "Complementary professional backgrounds"
FALLBACK_STARTERS = [
    "What brought you to this event?",
    "What's the most interesting project you're working on?",
]

LEVEL_LABELS = {
    "early": "early-career",
    "mid": "mid-career",
    "senior": "senior",
    "executive": "executive",
    "founder": "founder",
}


def _overlaps(a: str, b: str) -> bool:
    na, nb = normalize_term(a), normalize_term(b)
    return na in nb or nb in na


def shared_terms(mine: Sequence[str], theirs: Sequence[str]) -> List[str]:
    """Terms of ``mine`` that substring-overlap any of ``theirs`` (either way)."""
    return [t for t in mine if any(_overlaps(t, other) for other in theirs)]


def generate_why_match_reasons(
    match: MatchScore,
    attendee: MatchableProfile,
    matched_with: MatchableProfile,
) -> List[str]:
    """
    Up to three reasons why ``matched_with`` was suggested to ``attendee``.

    Checked in order: seeking/offering, expertise, experience, topics.
    Same-level pairs score 0.6 on experience, below the 0.8 gate, so only
    adjacent levels currently yield an experience reason.
    """
    components = match.components
    reasons: List[str] = []

    if components.seeking_offering > SEEKING_OFFERING_THRESHOLD:
        seeking = ", ".join(attendee.seeking_keywords[:2])
        offering = ", ".join(matched_with.offering_keywords[:2])
        if seeking and offering:
            reasons.append(f"You're looking for {seeking} - they can help with {offering}")

    if components.expertise > EXPERTISE_THRESHOLD:
        shared = shared_terms(attendee.expertise, matched_with.expertise)
        if shared:
            reasons.append(f"Shared expertise in {' and '.join(shared[:2])}")

    if components.experience >= EXPERIENCE_THRESHOLD:
        a_level = attendee.experience_level
        b_level = matched_with.experience_level
        if a_level and b_level:
            a_label = LEVEL_LABELS.get(a_level, a_level)
            b_label = LEVEL_LABELS.get(b_level, b_level)
            if a_level == b_level:
                reasons.append(f"Both at {a_label} stage - great peer connection")
            else:
                reasons.append(f"{b_label} perspective can complement your {a_label} experience")

    if components.topics > TOPICS_THRESHOLD:
        shared = shared_terms(attendee.topics_of_interest, matched_with.topics_of_interest)
        if shared:
            reasons.append(f"Both interested in {' and '.join(shared[:2])}")

    if not reasons:
        reasons.append(FALLBACK_REASON)

    return reasons[:MAX_REASONS]


def generate_conversation_starters(
    attendee: MatchableProfile,
    matched_with: MatchableProfile,
) -> List[str]:
    starters: List[str] = []

    if matched_with.expertise:
        starters.append(f"Ask about their experience in {matched_with.expertise[0]}")

    if matched_with.seeking_keywords:
        starters.append(
            f"They're looking for help with {matched_with.seeking_keywords[0]}"
            " - maybe you can connect them?"
        )

    if matched_with.offering_keywords and attendee.seeking_keywords:
        starters.append(f"Ask how they got into {matched_with.offering_keywords[0]}")

    # One-directional: their topic must contain ours.
    shared_topics = [
        t for t in attendee.topics_of_interest
        if any(normalize_term(t) in normalize_term(m) for m in matched_with.topics_of_interest)
    ]
    if shared_topics:
        starters.append(f"Bond over your shared interest in {shared_topics[0]}")

    if not starters:
        starters.extend(FALLBACK_STARTERS)

    return starters[:MAX_STARTERS]


def explain_matches(
    matches: Sequence[MatchScore],
    profiles: Sequence[MatchableProfile],
) -> List[ExplainedMatch]:
    """
    Attach reasons and conversation starters to every selected match.

    Raises:
        KeyError: If a match references an id missing from ``profiles``
    """
    by_id: Dict[str, MatchableProfile] = {p.id: p for p in profiles}
    explained = []
    for match in matches:
        attendee = by_id[match.attendee_id]
        matched_with = by_id[match.matched_with_id]
        explained.append(
            ExplainedMatch(
                match=match,
                why_match=generate_why_match_reasons(match, attendee, matched_with),
                conversation_starters=generate_conversation_starters(attendee, matched_with),
            )
        )
    return explained

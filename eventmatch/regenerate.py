"""
Match regeneration for one event.

A run loads nothing itself: it takes the event's full attendee batch,
computes the ranked matches once, explains them, and stores the result as a
single atomic replace of the event's pending matches. Reviewed matches are
kept. Either the whole new set is written or nothing changes.
"""

from pathlib import Path
from typing import Any, Dict, Sequence

from .database import get_session, init_database
from .explain import explain_matches
from .logger import get_logger
from .models import MatchableProfile
from .selector import generate_event_matches
from .storage import replace_event_matches


class MatchGenerationError(Exception):
    """Raised when a regeneration run aborts without writing results."""
    pass


class InsufficientAttendeesError(MatchGenerationError):
    """Raised when fewer than two attendees are available to match."""
    pass


def regenerate_event_matches(
    event_id: str,
    profiles: Sequence[MatchableProfile],
    matches_per_attendee: int,
    db_path: Path,
) -> Dict[str, Any]:
    """
    Recompute and store all matches for an event.

    Args:
        event_id: Event whose matches are replaced
        profiles: Every matchable attendee profile of the event
        matches_per_attendee: Event-level cap on matches per attendee
        db_path: Path to SQLite database file

    Returns:
        Summary dict with event_id, attendees, generated, matches_per_attendee

    Raises:
        InsufficientAttendeesError: If fewer than two profiles are given;
            storage is not touched
        MatchGenerationError: If scoring or persistence fails; the previous
            result set is left untouched
    """
    logger = get_logger()
    logger.record_run_attempt()

    if len(profiles) < 2:
        logger.record_run_failure(InsufficientAttendeesError.__name__)
        logger.warning("Not enough attendees to match", event_id=event_id, attendees=len(profiles))
        raise InsufficientAttendeesError(
            f"Need at least 2 attendees to generate matches for event {event_id}, got {len(profiles)}"
        )

    try:
        matches = generate_event_matches(profiles, matches_per_attendee)
        explained = explain_matches(matches, profiles)
    except Exception as e:
        logger.record_run_failure(type(e).__name__)
        logger.error(f"Match computation failed: {e}", event_id=event_id, attendees=len(profiles))
        raise MatchGenerationError(f"Match computation failed for event {event_id}: {e}") from e

    session = None
    try:
        init_database(db_path)
        session = get_session(db_path)
        generated = replace_event_matches(session, event_id, explained)
    except Exception as e:
        logger.record_run_failure(type(e).__name__)
        logger.error(f"Storing matches failed: {e}", event_id=event_id, matches=len(explained))
        raise MatchGenerationError(f"Storing matches failed for event {event_id}: {e}") from e
    finally:
        if session is not None:
            session.close()

    n = len(profiles)
    pairs_scored = n * (n - 1) // 2
    logger.record_run_success(pairs_scored=pairs_scored, matches_generated=generated)
    logger.info(
        f"Generated {generated} matches for {n} attendees",
        event_id=event_id,
        matches_per_attendee=matches_per_attendee,
        pairs_scored=pairs_scored,
    )

    return {
        "event_id": event_id,
        "attendees": n,
        "generated": generated,
        "matches_per_attendee": matches_per_attendee,
    }

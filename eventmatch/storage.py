import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .database import STATUS_PENDING, EventMatch
from .models import ExplainedMatch


def _first_key(data: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if data.get(k) is not None:
            return data[k]
    return None


def load_profiles(path: Path) -> Dict[str, Any]:
    """
    Read an attendee batch from JSON.

    Accepts either a bare list of profile objects or an object with
    ``attendees`` and optional ``eventId`` / ``matchesPerAttendee``.

    Raises:
        ValueError: If the file does not hold one of those shapes
    """
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        return {"event_id": None, "matches_per_attendee": None, "attendees": data}
    if isinstance(data, dict) and isinstance(data.get("attendees"), list):
        return {
            "event_id": _first_key(data, "eventId", "event_id"),
            "matches_per_attendee": _first_key(data, "matchesPerAttendee", "matches_per_attendee"),
            "attendees": data["attendees"],
        }
    raise ValueError(f"{path}: expected a list of profiles or an object with 'attendees'")


def to_row(event_id: str, explained: ExplainedMatch) -> EventMatch:
    match = explained.match
    components = match.components
    return EventMatch(
        event_id=event_id,
        attendee_id=match.attendee_id,
        matched_with_id=match.matched_with_id,
        position=match.position,
        score=match.score,
        seeking_offering=components.seeking_offering,
        expertise=components.expertise,
        experience=components.experience,
        topics=components.topics,
        why_match=list(explained.why_match),
        conversation_starters=list(explained.conversation_starters),
    )


def replace_event_matches(session, event_id: str, explained: Sequence[ExplainedMatch]) -> int:
    """
    Swap an event's pending matches for a freshly generated set.

    Only rows still ``pending`` are deleted; reviewed rows (approved,
    rejected, ...) belong to the review workflow and are kept. New pairs
    that already have a reviewed row are skipped. Everything happens in a
    single transaction. On failure the transaction is rolled back and the
    error re-raised, leaving the previous set intact.

    Returns:
        Number of records written
    """
    try:
        pending = session.query(EventMatch).filter(
            EventMatch.event_id == event_id,
            EventMatch.status == STATUS_PENDING,
        )
        pending.delete(synchronize_session="fetch")

        reviewed = {
            (attendee_id, matched_with_id)
            for attendee_id, matched_with_id in session.query(
                EventMatch.attendee_id, EventMatch.matched_with_id
            ).filter(EventMatch.event_id == event_id)
        }
        rows = [
            to_row(event_id, e) for e in explained
            if (e.match.attendee_id, e.match.matched_with_id) not in reviewed
        ]
        session.add_all(rows)
        session.commit()
    except Exception:
        session.rollback()
        raise
    return len(rows)


def list_event_matches(session, event_id: str, attendee_id: Optional[str] = None) -> List[EventMatch]:
    query = session.query(EventMatch).filter(EventMatch.event_id == event_id)
    if attendee_id:
        query = query.filter(EventMatch.attendee_id == attendee_id)
    return query.order_by(EventMatch.attendee_id, EventMatch.position).all()


def count_by_status(session, event_id: str) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for (status,) in session.query(EventMatch.status).filter(EventMatch.event_id == event_id):
        counts[status] = counts.get(status, 0) + 1
    return counts

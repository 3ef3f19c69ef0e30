"""
Tests for a full regeneration run: compute, explain, replace.
"""

import pytest

from eventmatch import regenerate as regenerate_module
from eventmatch.database import EventMatch, get_session
from eventmatch.models import MatchableProfile
from eventmatch.regenerate import (
    InsufficientAttendeesError,
    MatchGenerationError,
    regenerate_event_matches,
)
from eventmatch.storage import list_event_matches


def _stored(db_path, event_id="evt-1"):
    session = get_session(db_path)
    try:
        return [(r.attendee_id, r.matched_with_id, r.position) for r in list_event_matches(session, event_id)]
    finally:
        session.close()


def _statuses(db_path, event_id="evt-1"):
    session = get_session(db_path)
    try:
        return [r.status for r in list_event_matches(session, event_id)]
    finally:
        session.close()


class TestRegenerateEventMatches:

    def test_summary_and_rows(self, tmp_path, three_profiles):
        db_path = tmp_path / "data" / "matches.db"
        summary = regenerate_event_matches("evt-1", three_profiles, 5, db_path)

        assert summary == {
            "event_id": "evt-1",
            "attendees": 3,
            "generated": 6,
            "matches_per_attendee": 5,
        }
        assert len(_stored(db_path)) == 6

    def test_rerun_replaces(self, tmp_path, three_profiles):
        db_path = tmp_path / "matches.db"
        regenerate_event_matches("evt-1", three_profiles, 2, db_path)
        regenerate_event_matches("evt-1", three_profiles[:2], 2, db_path)

        assert sorted(_stored(db_path)) == [
            ("att-founder", "att-investor", 1),
            ("att-investor", "att-founder", 1),
        ]

    def test_too_few_attendees_leaves_storage_alone(self, tmp_path, three_profiles, quiet_logger):
        db_path = tmp_path / "matches.db"
        regenerate_event_matches("evt-1", three_profiles, 2, db_path)
        session = get_session(db_path)
        row = session.query(EventMatch).filter_by(attendee_id="att-founder", position=1).one()
        row.status = "approved"
        session.commit()
        session.close()
        before = _stored(db_path)

        with pytest.raises(InsufficientAttendeesError):
            regenerate_event_matches("evt-1", three_profiles[:1], 2, db_path)

        assert _stored(db_path) == before
        assert _statuses(db_path).count("approved") == 1
        assert quiet_logger.get_metrics()["errors_by_type"] == {"InsufficientAttendeesError": 1}

    def test_rerun_keeps_reviewed_matches(self, tmp_path, three_profiles):
        db_path = tmp_path / "matches.db"
        regenerate_event_matches("evt-1", three_profiles, 2, db_path)
        session = get_session(db_path)
        row = session.query(EventMatch).filter_by(attendee_id="att-engineer", position=2).one()
        row.status = "rejected"
        session.commit()
        session.close()

        summary = regenerate_event_matches("evt-1", three_profiles, 2, db_path)

        assert summary["generated"] == 5
        assert len(_stored(db_path)) == 6
        assert sorted(_statuses(db_path)) == ["pending"] * 5 + ["rejected"]

    def test_metrics_recorded(self, tmp_path, three_profiles, quiet_logger):
        regenerate_event_matches("evt-1", three_profiles, 1, tmp_path / "matches.db")

        metrics = quiet_logger.get_metrics()
        assert metrics["runs_attempted"] == 1
        assert metrics["runs_successful"] == 1
        assert metrics["pairs_scored"] == 3
        assert metrics["matches_generated"] == 3


class TestRegenerateFailures:
    """A failed run raises and leaves stored matches as they were."""

    def test_compute_failure(self, tmp_path, three_profiles, quiet_logger):
        db_path = tmp_path / "matches.db"
        regenerate_event_matches("evt-1", three_profiles, 2, db_path)
        before = _stored(db_path)

        with pytest.raises(MatchGenerationError) as exc_info:
            regenerate_event_matches("evt-1", three_profiles, 0, db_path)

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert _stored(db_path) == before
        assert quiet_logger.get_metrics()["errors_by_type"] == {"ValueError": 1}

    def test_storage_failure(self, tmp_path, three_profiles, quiet_logger, monkeypatch):
        db_path = tmp_path / "matches.db"
        regenerate_event_matches("evt-1", three_profiles, 2, db_path)
        before = _stored(db_path)

        def explode(session, event_id, explained):
            raise RuntimeError("disk full")

        monkeypatch.setattr(regenerate_module, "replace_event_matches", explode)

        with pytest.raises(MatchGenerationError, match="disk full"):
            regenerate_event_matches("evt-1", three_profiles, 2, db_path)

        assert _stored(db_path) == before
        metrics = quiet_logger.get_metrics()
        assert metrics["runs_failed"] == 1
        assert metrics["runs_successful"] == 1

    def test_failure_is_logged(self, tmp_path, quiet_logger):
        profiles = [MatchableProfile(id="a"), MatchableProfile(id="b")]
        with pytest.raises(MatchGenerationError):
            regenerate_event_matches("evt-9", profiles, -3, tmp_path / "matches.db")

        log_files = list((tmp_path / "logs").glob("*.log"))
        assert len(log_files) == 1
        assert "Match computation failed" in log_files[0].read_text()

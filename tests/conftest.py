"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
from pathlib import Path
from typing import Any, Dict, List

from eventmatch.logger import get_logger, reset_logger
from eventmatch.models import MatchableProfile


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with console output off."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def founder_profile() -> MatchableProfile:
    return MatchableProfile(
        id="att-founder",
        seeking_keywords=["fundraising", "hiring"],
        offering_keywords=["product"],
        expertise=["saas", "product management"],
        topics_of_interest=["ai", "climate"],
        experience_level="founder",
    )


@pytest.fixture
def investor_profile() -> MatchableProfile:
    return MatchableProfile(
        id="att-investor",
        seeking_keywords=["product feedback"],
        offering_keywords=["fundraising advice"],
        expertise=["venture capital", "saas"],
        topics_of_interest=["climate tech"],
        experience_level="executive",
    )


@pytest.fixture
def engineer_profile() -> MatchableProfile:
    return MatchableProfile(
        id="att-engineer",
        seeking_keywords=["mentorship"],
        offering_keywords=["python", "hiring"],
        expertise=["python", "machine learning"],
        topics_of_interest=["ai"],
        experience_level="mid",
    )


@pytest.fixture
def three_profiles(founder_profile, investor_profile, engineer_profile) -> List[MatchableProfile]:
    return [founder_profile, investor_profile, engineer_profile]


@pytest.fixture
def attendee_records() -> List[Dict[str, Any]]:
    """Attendee JSON records as exported by the profile extraction step."""
    return [
        {
            "id": "a1",
            "seekingKeywords": ["fundraising", "hiring"],
            "offeringKeywords": ["product"],
            "expertise": ["saas"],
            "topicsOfInterest": ["ai"],
            "experienceLevel": "founder",
            "createdAt": "2024-05-01T10:00:00Z",
        },
        {
            "id": "a2",
            "seekingKeywords": ["product feedback"],
            "offeringKeywords": ["fundraising advice"],
            "expertise": ["venture capital"],
            "topicsOfInterest": ["ai", "climate"],
            "experienceLevel": "executive",
        },
        {
            "id": "a3",
            "seekingKeywords": ["mentorship"],
            "offeringKeywords": ["python"],
            "expertise": ["python", "saas"],
            "topicsOfInterest": ["climate"],
            "experienceLevel": "mid",
        },
    ]


@pytest.fixture
def attendees_file(tmp_path, attendee_records) -> Path:
    """Attendee batch file in the event export shape."""
    path = tmp_path / "attendees.json"
    path.write_text(json.dumps({
        "eventId": "evt-1",
        "matchesPerAttendee": 2,
        "attendees": attendee_records,
    }))
    return path

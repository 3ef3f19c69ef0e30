"""
In-memory data types shared by the matching engine.

Profiles are read-only inputs owned by the caller. Match records are
produced by a generation run and never mutated afterwards.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional

EXPERIENCE_LEVELS = ["early", "mid", "senior", "executive", "founder"]


@dataclass(frozen=True)
class MatchableProfile:
    """Structured attendee profile as produced by upstream extraction."""

    id: str
    seeking_keywords: List[str] = field(default_factory=list)
    offering_keywords: List[str] = field(default_factory=list)
    expertise: List[str] = field(default_factory=list)
    topics_of_interest: List[str] = field(default_factory=list)
    experience_level: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class MatchScoreComponents:
    seeking_offering: float
    expertise: float
    experience: float
    topics: float

    def as_dict(self) -> dict:
        return {
            "seeking_offering": self.seeking_offering,
            "expertise": self.expertise,
            "experience": self.experience,
            "topics": self.topics,
        }


@dataclass(frozen=True)
class MatchScore:
    """Directed compatibility edge from ``attendee_id`` to ``matched_with_id``."""

    attendee_id: str
    matched_with_id: str
    score: int
    components: MatchScoreComponents
    position: Optional[int] = None

    def with_position(self, position: int) -> "MatchScore":
        return replace(self, position=position)

    def reversed(self) -> "MatchScore":
        """Same numbers, seen from the other attendee."""
        return replace(
            self,
            attendee_id=self.matched_with_id,
            matched_with_id=self.attendee_id,
        )


@dataclass(frozen=True)
class ExplainedMatch:
    """A selected match together with its reasons and conversation starters."""

    match: MatchScore
    why_match: List[str]
    conversation_starters: List[str]

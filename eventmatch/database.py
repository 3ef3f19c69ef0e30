"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for generated match storage.
"""

from datetime import datetime
from pathlib import Path

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, UniqueConstraint, create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

STATUS_PENDING = "pending"


class EventMatch(Base):
    """One directed, ranked match suggestion within an event."""

    __tablename__ = "event_matches"
    __table_args__ = (
        UniqueConstraint("event_id", "attendee_id", "matched_with_id", name="uq_event_match_pair"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String, nullable=False, index=True)
    attendee_id = Column(String, nullable=False)
    matched_with_id = Column(String, nullable=False)
    position = Column(Integer, nullable=False)
    score = Column(Integer, nullable=False)
    seeking_offering = Column(Float, nullable=False)
    expertise = Column(Float, nullable=False)
    experience = Column(Float, nullable=False)
    topics = Column(Float, nullable=False)
    why_match = Column(JSON, nullable=False, default=list)
    conversation_starters = Column(JSON, nullable=False, default=list)
    # Owned by the downstream review workflow (pending/approved/rejected)
    status = Column(String, nullable=False, default=STATUS_PENDING)
    created_at = Column(DateTime, nullable=False, default=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()

"""
Database Table Definitions.

This module defines the SQL schema using SQLModel.
We use the 'DBModel' suffix to distinguish these persistence models
from the Pydantic state models (AttemptRecord, UserBadge).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, Index, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from ...state.models import utcnow

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite for local dev and tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class LabAttemptDBModel(SQLModel, table=True):
    """
    Persistence model for lab attempts.
    Maps 1-to-1 with the 'lab_attempts' table.
    """

    __tablename__ = "lab_attempts"
    __table_args__ = (
        # At most one live (uncompleted) attempt per participant and lab
        Index(
            "uq_lab_attempts_live",
            "participant_id",
            "exercise_id",
            unique=True,
            postgresql_where=text("completed_at IS NULL"),
            sqlite_where=text("completed_at IS NULL"),
        ),
    )

    attempt_id: UUID = Field(default_factory=uuid4, primary_key=True)
    participant_id: str = Field(index=True)
    exercise_id: str = Field(index=True)

    started_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    score: Optional[int] = None

    # Notebook entries are append-only and always read together with the attempt.
    notebook_entries: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSONType, nullable=False)
    )

    updated_at: datetime = Field(default_factory=utcnow)


class LabDBModel(SQLModel, table=True):
    """
    Persistence model for the lab catalog.
    Maps 1-to-1 with the 'labs' table.
    """

    __tablename__ = "labs"

    lab_id: str = Field(primary_key=True)
    title: str

    # Store the entire VirtualLab definition (metadata + engine config) as JSON.
    lab_data: Dict[str, Any] = Field(sa_column=Column(JSONType, nullable=False))

    version: int = Field(default=1)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class UserBadgeDBModel(SQLModel, table=True):
    """
    Persistence model for earned badges.
    Maps 1-to-1 with the 'user_badges' table.
    """

    __tablename__ = "user_badges"

    participant_id: str = Field(primary_key=True)
    badge_id: str = Field(primary_key=True)
    date_earned: datetime = Field(default_factory=utcnow)

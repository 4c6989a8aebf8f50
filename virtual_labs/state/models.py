"""
State Layer - Runtime Data Models

This module defines the runtime records of a lab session: the attempt a
participant is working on (with its notebook), and the controller's own
bookkeeping (current step, elapsed ticks, completion flag).
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotebookEntry(BaseModel):
    """
    A single free-text observation. Never changed once created.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime
    text: str
    context_tag: Optional[str] = None


class AttemptRecord(BaseModel):
    """
    One participant's run through one lab, keyed by (participant_id, exercise_id).

    completed_at and score are set together, once, by the completion event.
    """
    participant_id: str
    exercise_id: str
    started_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    score: Optional[int] = Field(default=None, ge=0, le=100)
    notebook_entries: List[NotebookEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_completion(self) -> "AttemptRecord":
        if (self.completed_at is None) != (self.score is None):
            raise ValueError("completed_at and score must be set together")
        if self.completed_at is not None and self.completed_at < self.started_at:
            raise ValueError("completed_at cannot precede started_at")
        return self

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def key(self) -> tuple:
        return (self.participant_id, self.exercise_id)


class SessionState(BaseModel):
    """
    Controller-internal bookkeeping. Not persisted.
    """
    current_step_id: str
    elapsed_ticks: int = 0
    is_completed: bool = False


class CompletionSummary(BaseModel):
    """
    What the participant sees when a lab is finished.
    """
    score: int
    passing_score: int
    passed: bool
    elapsed_ticks: int
    notes_count: int

    @property
    def minutes(self) -> int:
        return self.elapsed_ticks // 60

    @property
    def seconds(self) -> int:
        return self.elapsed_ticks % 60

    def format_elapsed(self) -> str:
        return f"{self.minutes:02d}:{self.seconds:02d}"


class SessionSnapshot(BaseModel):
    """
    Read-only view handed to scenes and to the API layer.
    """
    exercise_id: str
    participant_id: str
    current_step_id: str
    step_index: int
    total_steps: int
    elapsed_ticks: int
    is_completed: bool
    attempt: AttemptRecord


class UserBadge(BaseModel):
    badge_id: str
    date_earned: datetime = Field(default_factory=utcnow)

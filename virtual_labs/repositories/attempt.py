import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

# Domain & Infra Imports
from ..state.models import AttemptRecord, NotebookEntry, utcnow
from ..infrastructure.database.tables import LabAttemptDBModel
from ..infrastructure.database.connection import engine as default_engine

logger = logging.getLogger(__name__)

AttemptKey = Tuple[str, str]


class AttemptRepository(ABC):
    """
    Defines how the session engine persists lab attempts.
    Every attempt is keyed by (participant_id, exercise_id); an implementation
    must keep at most one live (uncompleted) attempt per key.
    """

    @abstractmethod
    def initialize_attempt(self, participant_id: str, exercise_id: str) -> AttemptRecord:
        """Returns the live attempt for the key, creating it if absent."""
        pass

    @abstractmethod
    def save_notebook_entry(self, participant_id: str, exercise_id: str, entry: NotebookEntry):
        """
        Appends an entry to the live attempt.
        Raises ValueError if there is no live attempt.
        """
        pass

    @abstractmethod
    def complete_attempt(self, participant_id: str, exercise_id: str, score: int):
        """
        Marks the live attempt completed with the given score.
        Raises ValueError if there is no live attempt.
        """
        pass

    @abstractmethod
    def list_attempts(self, participant_id: str) -> List[AttemptRecord]:
        """Returns every attempt of a participant, oldest first."""
        pass


class InMemoryAttemptRepository(AttemptRepository):
    """
    Uses in-memory dictionary for attempt storage for testing/dev purposes.
    """

    def __init__(self):
        self._store: Dict[AttemptKey, List[AttemptRecord]] = {}

    def _live(self, participant_id: str, exercise_id: str) -> Optional[AttemptRecord]:
        for attempt in self._store.get((participant_id, exercise_id), []):
            if not attempt.is_completed:
                return attempt
        return None

    def _require_live(self, participant_id: str, exercise_id: str) -> AttemptRecord:
        attempt = self._live(participant_id, exercise_id)
        if attempt is None:
            raise ValueError(f"No live attempt for {participant_id}/{exercise_id}.")
        return attempt

    def initialize_attempt(self, participant_id: str, exercise_id: str) -> AttemptRecord:
        attempt = self._live(participant_id, exercise_id)
        if attempt is None:
            attempt = AttemptRecord(participant_id=participant_id, exercise_id=exercise_id)
            self._store.setdefault(attempt.key, []).append(attempt)
            logger.info(f"Created attempt {participant_id}/{exercise_id}")
        else:
            logger.info(f"Resuming live attempt {participant_id}/{exercise_id}")
        return attempt.model_copy(deep=True)

    def save_notebook_entry(self, participant_id: str, exercise_id: str, entry: NotebookEntry):
        self._require_live(participant_id, exercise_id).notebook_entries.append(entry)

    def complete_attempt(self, participant_id: str, exercise_id: str, score: int):
        attempt = self._require_live(participant_id, exercise_id)
        attempt.completed_at = max(utcnow(), attempt.started_at)
        attempt.score = score

    def list_attempts(self, participant_id: str) -> List[AttemptRecord]:
        attempts = [
            attempt
            for (owner, _), history in self._store.items()
            if owner == participant_id
            for attempt in history
        ]
        attempts.sort(key=lambda a: a.started_at)
        return [a.model_copy(deep=True) for a in attempts]


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAttemptRepository(AttemptRepository):
    """
    SQL storage for attempts (JSONB notebook on PostgreSQL).
    The partial unique index on lab_attempts enforces one live attempt per key.
    """

    def __init__(self, engine: Engine = default_engine):
        self.engine = engine

    @staticmethod
    def _live_statement(participant_id: str, exercise_id: str):
        return select(LabAttemptDBModel).where(
            LabAttemptDBModel.participant_id == participant_id,
            LabAttemptDBModel.exercise_id == exercise_id,
            LabAttemptDBModel.completed_at.is_(None),
        )

    @staticmethod
    def _to_record(row: LabAttemptDBModel) -> AttemptRecord:
        # Deserialize JSON back into Pydantic State Model
        return AttemptRecord(
            participant_id=row.participant_id,
            exercise_id=row.exercise_id,
            started_at=_as_utc(row.started_at),
            completed_at=_as_utc(row.completed_at),
            score=row.score,
            notebook_entries=[NotebookEntry(**e) for e in row.notebook_entries],
        )

    def initialize_attempt(self, participant_id: str, exercise_id: str) -> AttemptRecord:
        with Session(self.engine) as db:
            existing = db.exec(self._live_statement(participant_id, exercise_id)).first()
            if existing:
                logger.info(f"Resuming live attempt {participant_id}/{exercise_id}")
                return self._to_record(existing)

            record = AttemptRecord(participant_id=participant_id, exercise_id=exercise_id)
            db_model = LabAttemptDBModel(
                participant_id=participant_id,
                exercise_id=exercise_id,
                started_at=record.started_at,
                notebook_entries=[],
            )
            db.add(db_model)
            db.commit()
            logger.info(f"Created attempt {participant_id}/{exercise_id}")
            return record

    def save_notebook_entry(self, participant_id: str, exercise_id: str, entry: NotebookEntry):
        with Session(self.engine) as db:
            result = db.exec(self._live_statement(participant_id, exercise_id)).first()
            if not result:
                raise ValueError(f"No live attempt for {participant_id}/{exercise_id}.")

            # Reassign the list so SQLAlchemy sees the JSON column change
            result.notebook_entries = result.notebook_entries + [entry.model_dump(mode="json")]
            result.updated_at = utcnow()
            db.add(result)
            db.commit()

    def complete_attempt(self, participant_id: str, exercise_id: str, score: int):
        with Session(self.engine) as db:
            result = db.exec(self._live_statement(participant_id, exercise_id)).first()
            if not result:
                raise ValueError(f"No live attempt for {participant_id}/{exercise_id}.")

            now = utcnow()
            result.completed_at = max(now, _as_utc(result.started_at))
            result.score = score
            result.updated_at = now
            db.add(result)
            db.commit()

    def list_attempts(self, participant_id: str) -> List[AttemptRecord]:
        with Session(self.engine) as db:
            statement = (
                select(LabAttemptDBModel)
                .where(LabAttemptDBModel.participant_id == participant_id)
                .order_by(LabAttemptDBModel.started_at)
            )
            return [self._to_record(row) for row in db.exec(statement).all()]

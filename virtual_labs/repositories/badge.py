from abc import ABC, abstractmethod
from datetime import timezone
from typing import Dict, List

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ..state.models import UserBadge
from ..infrastructure.database.tables import UserBadgeDBModel
from ..infrastructure.database.connection import engine as default_engine


class BadgeRepository(ABC):
    """
    Defines how earned badges are stored.
    """

    @abstractmethod
    def get_badges(self, participant_id: str) -> List[UserBadge]:
        """Returns the badges a participant has earned, in award order."""
        pass

    @abstractmethod
    def award(self, participant_id: str, badge_id: str) -> UserBadge:
        """Records a badge. Awarding an already-earned badge returns the existing record."""
        pass


class InMemoryBadgeRepository(BadgeRepository):
    """
    Uses in-memory dictionary for badge storage for testing/dev purposes.
    """

    def __init__(self):
        self._store: Dict[str, List[UserBadge]] = {}

    def get_badges(self, participant_id: str) -> List[UserBadge]:
        return list(self._store.get(participant_id, []))

    def award(self, participant_id: str, badge_id: str) -> UserBadge:
        badges = self._store.setdefault(participant_id, [])
        for badge in badges:
            if badge.badge_id == badge_id:
                return badge
        badge = UserBadge(badge_id=badge_id)
        badges.append(badge)
        return badge


class SQLBadgeRepository(BadgeRepository):
    """
    Reads and writes the 'user_badges' table.
    """

    def __init__(self, engine: Engine = default_engine):
        self.engine = engine

    @staticmethod
    def _to_badge(row: UserBadgeDBModel) -> UserBadge:
        earned = row.date_earned
        if earned.tzinfo is None:
            earned = earned.replace(tzinfo=timezone.utc)
        return UserBadge(badge_id=row.badge_id, date_earned=earned)

    def get_badges(self, participant_id: str) -> List[UserBadge]:
        with Session(self.engine) as db:
            statement = (
                select(UserBadgeDBModel)
                .where(UserBadgeDBModel.participant_id == participant_id)
                .order_by(UserBadgeDBModel.date_earned)
            )
            return [self._to_badge(row) for row in db.exec(statement).all()]

    def award(self, participant_id: str, badge_id: str) -> UserBadge:
        with Session(self.engine) as db:
            existing = db.get(UserBadgeDBModel, (participant_id, badge_id))
            if existing:
                return self._to_badge(existing)

            row = UserBadgeDBModel(participant_id=participant_id, badge_id=badge_id)
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_badge(row)

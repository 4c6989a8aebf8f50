"""
Achievement Evaluator Interface.

Defines the contract for the component that looks at a participant's
history after a completed lab and awards recognitions. The session engine
calls trigger_check() fire-and-forget; its result never affects the session.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..domain.models import Badge
from ..repositories.attempt import AttemptRepository
from ..repositories.badge import BadgeRepository
from ..data.badges import LAB_BADGES

logger = logging.getLogger(__name__)


class AchievementEvaluator(ABC):
    @abstractmethod
    async def trigger_check(self, participant_id: str) -> List[Badge]:
        """
        Evaluates the participant's history and returns the badges newly
        earned by this check (empty if none).
        """
        pass


class LabAchievementEvaluator(AchievementEvaluator):
    """
    Awards lab badges based on how many distinct labs the participant
    has completed.
    """

    def __init__(
        self,
        attempt_repository: AttemptRepository,
        badge_repository: BadgeRepository,
        badges: Optional[Sequence[Badge]] = None,
    ):
        self.attempt_repo = attempt_repository
        self.badge_repo = badge_repository
        self.badges = list(LAB_BADGES if badges is None else badges)

    async def trigger_check(self, participant_id: str) -> List[Badge]:
        # Repository calls block, so they run in worker threads.
        earned = await asyncio.to_thread(self.badge_repo.get_badges, participant_id)
        history = await asyncio.to_thread(self.attempt_repo.list_attempts, participant_id)

        earned_ids = {b.badge_id for b in earned}
        completed_labs = {attempt.exercise_id for attempt in history if attempt.is_completed}

        new_badges = []
        for badge in self.badges:
            # Skip if already earned
            if badge.id in earned_ids:
                continue
            if len(completed_labs) >= badge.labs_required:
                await asyncio.to_thread(self.badge_repo.award, participant_id, badge.id)
                earned_ids.add(badge.id)
                new_badges.append(badge)
                logger.info(f"Participant {participant_id} earned badge '{badge.id}'")

        return new_badges

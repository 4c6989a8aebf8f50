"""
Lab Session Service - Application Orchestration Layer

This service is the entry point for all lab session operations. It resolves
labs from the catalog, mounts a SessionController per session, and keeps the
live controllers until the participant exits.
"""

import logging
import uuid
from typing import Callable, Dict, List, Optional

from ..domain.models import VirtualLab
from ..execution.controller import SessionController
from ..execution.dispatch import Dispatcher
from ..execution.timer import Ticker
from ..repositories.attempt import AttemptRepository
from ..repositories.catalog import LabCatalog
from ..state.models import AttemptRecord, CompletionSummary, NotebookEntry, SessionSnapshot
from .achievements import AchievementEvaluator
from .exceptions import LabNotFoundError, SessionNotFoundError

logger = logging.getLogger(__name__)


class LabSessionService:
    def __init__(
        self,
        catalog: LabCatalog,
        attempt_repository: AttemptRepository,
        evaluator: AchievementEvaluator,
        dispatcher: Dispatcher,
        ticker_factory: Callable[[], Ticker],
    ):
        self.catalog = catalog
        self.attempt_repo = attempt_repository
        self.evaluator = evaluator
        self.dispatcher = dispatcher
        self.ticker_factory = ticker_factory
        self._sessions: Dict[str, SessionController] = {}

    # --- Catalog ---

    def list_labs(self) -> List[VirtualLab]:
        return self.catalog.list_labs()

    def get_lab(self, lab_id: str) -> VirtualLab:
        lab = self.catalog.get_lab(lab_id)
        if lab is None:
            raise LabNotFoundError(f"Lab '{lab_id}' not found.")
        return lab

    def list_attempts(self, participant_id: str) -> List[AttemptRecord]:
        return self.attempt_repo.list_attempts(participant_id)

    # --- Sessions ---

    def start_session(self, participant_id: str, lab_id: str) -> str:
        """Mounts a controller on the lab and returns the new session id."""
        lab = self.get_lab(lab_id)
        if lab.config is None:
            raise LabNotFoundError(f"Lab '{lab_id}' is not available yet.")
        self._forget_completed(participant_id)

        controller = SessionController(
            repository=self.attempt_repo,
            evaluator=self.evaluator,
            dispatcher=self.dispatcher,
            ticker=self.ticker_factory(),
        )
        controller.initialize(
            participant_id,
            lab.id,
            steps=lab.config.steps,
            passing_score=lab.config.passing_score,
            show_timer=lab.config.show_timer,
            navigation=lab.config.navigation,
        )

        session_id = str(uuid.uuid4())
        self._sessions[session_id] = controller
        logger.info(f"Session {session_id} mounted on '{lab.id}' for {participant_id}")
        return session_id

    def get_controller(self, session_id: str) -> SessionController:
        controller = self._sessions.get(session_id)
        if controller is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return controller

    def get_session(self, session_id: str) -> SessionSnapshot:
        return self.get_controller(session_id).snapshot()

    def set_step(self, session_id: str, step_id: str) -> SessionSnapshot:
        controller = self.get_controller(session_id)
        controller.set_step(step_id)
        return controller.snapshot()

    def add_note(
        self, session_id: str, text: str, context_tag: Optional[str] = None
    ) -> NotebookEntry:
        controller = self.get_controller(session_id)
        if context_tag is None:
            return controller.log_observation(text)
        return controller.add_note(text, context_tag)

    def complete(self, session_id: str, score: int) -> CompletionSummary:
        return self.get_controller(session_id).complete_lab(score)

    def end_session(self, session_id: str) -> bool:
        """Exits and forgets a session. Returns False if it was not live."""
        controller = self._sessions.pop(session_id, None)
        if controller is None:
            return False
        controller.exit()
        return True

    def shutdown(self) -> None:
        """Stops every live session's timer (application shutdown)."""
        for session_id in list(self._sessions):
            self.end_session(session_id)

    def _forget_completed(self, participant_id: str) -> None:
        """
        Drops the participant's completed sessions. They stay readable until
        the participant starts another lab.
        """
        for session_id, controller in list(self._sessions.items()):
            if controller.is_completed and controller.participant_id == participant_id:
                self.end_session(session_id)

"""
Controller - Lab Session Orchestration Layer

The SessionController is the state machine every virtual lab runs on. It is
generic over lab content: the scene supplies the steps and decides what
happens in each one, and only ever talks to the controller through the
operations below.
-----------------------------------------------

States:
    ACTIVE      initial; step changes and notes happen here
    COMPLETED   terminal; reached once through complete_lab()

While ACTIVE the controller owns:
1. The step cursor (StepSequencer), moved with set_step().
2. The elapsed-time counter (Ticker), frozen on completion.
3. The in-memory mirror of the AttemptRecord, extended by add_note().

Persistence writes and the achievement check are dispatched fire-and-forget.
Their failures reach the ErrorReporter and never the scene.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from ..domain.models import NavigationPolicy, StepConfig
from ..state.models import (
    AttemptRecord,
    CompletionSummary,
    NotebookEntry,
    SessionSnapshot,
    SessionState,
)
from ..repositories.attempt import AttemptRepository
from ..services.achievements import AchievementEvaluator
from .dispatch import Dispatcher
from .exceptions import AlreadyCompletedError, SessionNotActiveError
from .notebook import NotebookLog
from .scoring import ScoringGate
from .sequencer import StepSequencer
from .timer import Ticker

logger = logging.getLogger(__name__)

DEFAULT_NOTEBOOK_CONTEXT = "General observation"


class LabStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class SessionController:
    def __init__(
        self,
        repository: AttemptRepository,
        evaluator: AchievementEvaluator,
        dispatcher: Dispatcher,
        ticker: Ticker,
    ):
        self.repository = repository
        self.evaluator = evaluator
        self.dispatcher = dispatcher
        self.ticker = ticker

        self._sequencer: Optional[StepSequencer] = None
        self._notebook: Optional[NotebookLog] = None
        self._gate: Optional[ScoringGate] = None
        self._attempt: Optional[AttemptRecord] = None
        self._state: Optional[SessionState] = None
        self._summary: Optional[CompletionSummary] = None
        self._notebook_context: Optional[str] = None

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def initialize(
        self,
        participant_id: str,
        exercise_id: str,
        steps: Sequence[StepConfig],
        passing_score: int,
        show_timer: bool = True,
        navigation: NavigationPolicy = "free",
    ) -> SessionSnapshot:
        """
        Opens (or resumes) the attempt, starts the timer and puts the cursor
        on the first step.
        """
        if self._state is not None:
            raise SessionNotActiveError("Session controller is already initialized.")

        self._sequencer = StepSequencer(steps, navigation=navigation)
        self._gate = ScoringGate(self.repository, self.dispatcher, passing_score)
        self._attempt = self._gate.initialize(participant_id, exercise_id)
        self._notebook = NotebookLog(
            entries=self._attempt.notebook_entries,
            on_append=self._persist_entry,
        )
        self._state = SessionState(current_step_id=self._sequencer.first_step_id)

        if show_timer:
            self.ticker.start()

        logger.info(
            f"Lab session started: {participant_id}/{exercise_id} "
            f"({len(self._sequencer)} steps, pass mark {passing_score})"
        )
        return self.snapshot()

    def exit(self) -> None:
        """
        Tears down the timer. Valid in any state; persisted data is untouched.
        """
        self.ticker.stop()
        if self._state is not None and not self._state.is_completed:
            self._state.elapsed_ticks = self.ticker.elapsed_ticks
        logger.debug("Lab session exited")

    # ==========================================================================
    # Scene Operations
    # ==========================================================================

    def set_step(self, step_id: str) -> None:
        state = self._require_active()
        if step_id == state.current_step_id:
            return

        self._sequencer.check_transition(state.current_step_id, step_id)
        logger.info(f"Step changed: {state.current_step_id} -> {step_id}")
        state.current_step_id = step_id

    def next_step(self) -> None:
        """Moves one step forward. No-op on the last step."""
        index = self.step_index
        if index < len(self._sequencer) - 1:
            self.set_step(self._sequencer.step_at(index + 1).id)

    def previous_step(self) -> None:
        """Moves one step back. No-op on the first step."""
        index = self.step_index
        if index > 0:
            self.set_step(self._sequencer.step_at(index - 1).id)

    def add_note(self, text: str, context_tag: Optional[str] = None) -> NotebookEntry:
        self._require_active()
        entry = self._notebook.append(text, context_tag)
        self._attempt.notebook_entries.append(entry)
        if context_tag:
            self._notebook_context = context_tag
        return entry

    def log_observation(self, text: str) -> NotebookEntry:
        """Adds a note tagged with the current notebook context."""
        return self.add_note(text, self.notebook_context)

    def snapshot_observation(self, context: str) -> NotebookEntry:
        """Captures what the participant is looking at as a tagged note."""
        return self.add_note(f"Observed: {context}", context)

    def complete_lab(self, score: int) -> CompletionSummary:
        """
        Freezes the timer, records the final score and moves to COMPLETED.

        Raises:
            AlreadyCompletedError: if the lab was already completed.
            InvalidScoreError: if score is not an integer in [0, 100].
        """
        state = self._require_initialized()
        if state.is_completed:
            raise AlreadyCompletedError("Lab is already completed.")

        # A rejected score leaves the session active and the timer running.
        passed = self._gate.complete(self._attempt, score)

        state.elapsed_ticks = self.ticker.freeze()
        state.is_completed = True

        self._summary = CompletionSummary(
            score=score,
            passing_score=self._gate.passing_score,
            passed=passed,
            elapsed_ticks=state.elapsed_ticks,
            notes_count=len(self._attempt.notebook_entries),
        )

        self.dispatcher.submit(
            "achievements.trigger_check",
            self.evaluator.trigger_check,
            self._attempt.participant_id,
        )
        return self._summary

    # ==========================================================================
    # Read-only Views
    # ==========================================================================

    @property
    def status(self) -> LabStatus:
        if self._state is not None and self._state.is_completed:
            return LabStatus.COMPLETED
        return LabStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status == LabStatus.COMPLETED

    @property
    def participant_id(self) -> str:
        self._require_initialized()
        return self._attempt.participant_id

    @property
    def current_step_id(self) -> str:
        return self._require_initialized().current_step_id

    @property
    def step_index(self) -> int:
        return self._sequencer.index_of(self.current_step_id)

    @property
    def current_step(self) -> StepConfig:
        return self._sequencer.step_at(self.step_index)

    @property
    def steps(self) -> List[StepConfig]:
        self._require_initialized()
        return self._sequencer.steps

    @property
    def elapsed_ticks(self) -> int:
        state = self._require_initialized()
        if state.is_completed:
            return state.elapsed_ticks
        return self.ticker.elapsed_ticks

    @property
    def notebook_context(self) -> str:
        return self._notebook_context or DEFAULT_NOTEBOOK_CONTEXT

    @property
    def notebook_entries(self) -> List[NotebookEntry]:
        self._require_initialized()
        return list(self._notebook.entries())

    @property
    def attempt(self) -> AttemptRecord:
        """A copy of the in-memory attempt; changes to it go nowhere."""
        self._require_initialized()
        return self._attempt.model_copy(deep=True)

    @property
    def summary(self) -> Optional[CompletionSummary]:
        return self._summary

    def snapshot(self) -> SessionSnapshot:
        self._require_initialized()
        return SessionSnapshot(
            exercise_id=self._attempt.exercise_id,
            participant_id=self._attempt.participant_id,
            current_step_id=self.current_step_id,
            step_index=self.step_index,
            total_steps=len(self._sequencer),
            elapsed_ticks=self.elapsed_ticks,
            is_completed=self.is_completed,
            attempt=self.attempt,
        )

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _require_initialized(self) -> SessionState:
        if self._state is None:
            raise SessionNotActiveError("Session controller is not initialized.")
        return self._state

    def _require_active(self) -> SessionState:
        state = self._require_initialized()
        if state.is_completed:
            raise SessionNotActiveError("Lab is already completed.")
        return state

    def _persist_entry(self, entry: NotebookEntry) -> None:
        self.dispatcher.submit(
            "attempts.save_notebook_entry",
            self.repository.save_notebook_entry,
            self._attempt.participant_id,
            self._attempt.exercise_id,
            entry,
        )

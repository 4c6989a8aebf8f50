"""
Scoring Gate

Owns the attempt lifecycle at the persistence boundary: opening (or
resuming) the live attempt for a participant and lab, and recording the
single completion event with its pass/fail outcome.
"""

import logging

from ..repositories.attempt import AttemptRepository
from ..state.models import AttemptRecord, utcnow
from .dispatch import Dispatcher
from .exceptions import AlreadyCompletedError, InvalidScoreError

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


def validate_score(score: int) -> int:
    """
    Out-of-range and non-integer scores are rejected, never clamped.
    """
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreError(f"Score must be an integer, got {score!r}.")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidScoreError(
            f"Score must be within [{MIN_SCORE}, {MAX_SCORE}], got {score}."
        )
    return score


def percentage_score(correct: int, total: int) -> int:
    """Share of correct answers as a whole percentage, rounded half up."""
    if total <= 0:
        raise ValueError("total must be positive")
    if not 0 <= correct <= total:
        raise ValueError(f"correct must be within [0, {total}], got {correct}")
    return (correct * 200 + total) // (2 * total)


class ScoringGate:
    def __init__(
        self,
        repository: AttemptRepository,
        dispatcher: Dispatcher,
        passing_score: int,
    ):
        self.repository = repository
        self.dispatcher = dispatcher
        self.passing_score = validate_score(passing_score)

    def initialize(self, participant_id: str, exercise_id: str) -> AttemptRecord:
        """
        Opens the live attempt for (participant_id, exercise_id), resuming it
        if one already exists.

        The returned record is a private copy: the caller's mirror and the
        store never share list objects.
        """
        try:
            record = self.repository.initialize_attempt(participant_id, exercise_id)
        except Exception as e:
            # The lab must still open; the attempt lives in memory only.
            self.dispatcher.reporter.report("attempts.initialize_attempt", e)
            record = AttemptRecord(participant_id=participant_id, exercise_id=exercise_id)

        return record.model_copy(deep=True)

    def passed(self, score: int) -> bool:
        return score >= self.passing_score

    def complete(self, record: AttemptRecord, score: int) -> bool:
        """
        Sets completed_at and score on the record, persists the result, and
        returns whether the score passes.

        Raises:
            InvalidScoreError: if score is not an integer in [0, 100].
            AlreadyCompletedError: if the record already has a final score.
        """
        if record.is_completed:
            raise AlreadyCompletedError(
                f"Attempt for '{record.exercise_id}' is already completed."
            )
        score = validate_score(score)

        completed_at = utcnow()
        if completed_at < record.started_at:
            completed_at = record.started_at

        record.completed_at = completed_at
        record.score = score

        self.dispatcher.submit(
            "attempts.complete_attempt",
            self.repository.complete_attempt,
            record.participant_id,
            record.exercise_id,
            score,
        )

        passed = self.passed(score)
        logger.info(
            f"Attempt {record.participant_id}/{record.exercise_id} scored {score} "
            f"({'pass' if passed else 'fail'}, threshold {self.passing_score})"
        )
        return passed

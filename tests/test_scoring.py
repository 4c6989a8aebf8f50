import pytest

from virtual_labs.execution.exceptions import AlreadyCompletedError, InvalidScoreError
from virtual_labs.execution.scoring import ScoringGate, percentage_score, validate_score


@pytest.fixture
def gate(attempts, dispatcher):
    return ScoringGate(attempts, dispatcher, passing_score=70)


def test_pass_fail_boundary(gate):
    assert gate.passed(70) is True
    assert gate.passed(69) is False


@pytest.mark.parametrize("score", [0, 1, 50, 99, 100])
def test_valid_scores_are_accepted(score):
    assert validate_score(score) == score


@pytest.mark.parametrize("score", [-1, 101, 1000, 70.0, "70", None, True])
def test_invalid_scores_are_rejected(score):
    with pytest.raises(InvalidScoreError):
        validate_score(score)


def test_passing_score_itself_must_be_in_range(attempts, dispatcher):
    with pytest.raises(InvalidScoreError):
        ScoringGate(attempts, dispatcher, passing_score=120)


def test_initialize_is_idempotent_per_key(gate, attempts):
    first = gate.initialize("s1", "lab-a")
    second = gate.initialize("s1", "lab-a")

    assert first.started_at == second.started_at
    assert len(attempts.list_attempts("s1")) == 1


def test_initialize_returns_a_private_copy(gate, attempts):
    record = gate.initialize("s1", "lab-a")
    record.notebook_entries.append(None)

    assert attempts.list_attempts("s1")[0].notebook_entries == []


def test_complete_sets_score_and_timestamp_together(gate, attempts):
    record = gate.initialize("s1", "lab-a")

    passed = gate.complete(record, 85)

    assert passed is True
    assert record.score == 85
    assert record.completed_at is not None
    assert record.completed_at >= record.started_at
    stored = attempts.list_attempts("s1")[0]
    assert stored.score == 85
    assert stored.is_completed


def test_complete_twice_is_rejected(gate):
    record = gate.initialize("s1", "lab-a")
    gate.complete(record, 40)

    with pytest.raises(AlreadyCompletedError):
        gate.complete(record, 90)
    assert record.score == 40


def test_rejected_score_leaves_record_untouched(gate):
    record = gate.initialize("s1", "lab-a")

    with pytest.raises(InvalidScoreError):
        gate.complete(record, 101)
    assert record.score is None
    assert record.completed_at is None


def test_store_failure_on_initialize_is_reported(dispatcher, reporter):
    class BrokenStore:
        def initialize_attempt(self, participant_id, exercise_id):
            raise ConnectionError("database unavailable")

    gate = ScoringGate(BrokenStore(), dispatcher, passing_score=70)
    record = gate.initialize("s1", "lab-a")

    assert record.participant_id == "s1"
    assert record.exercise_id == "lab-a"
    assert [f.operation for f in reporter.failures] == ["attempts.initialize_attempt"]


def test_percentage_score_rounds_half_up():
    assert percentage_score(2, 3) == 67
    assert percentage_score(1, 8) == 13
    assert percentage_score(3, 3) == 100
    assert percentage_score(0, 5) == 0


def test_percentage_score_rejects_bad_totals():
    with pytest.raises(ValueError):
        percentage_score(1, 0)
    with pytest.raises(ValueError):
        percentage_score(4, 3)

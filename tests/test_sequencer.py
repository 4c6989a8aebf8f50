import pytest

from virtual_labs.domain.models import StepConfig
from virtual_labs.execution.exceptions import StepTransitionNotAllowedError, UnknownStepError
from virtual_labs.execution.sequencer import StepSequencer


def _steps(*ids):
    return [StepConfig(id=i, label=i.title(), description="") for i in ids]


def test_index_of_follows_configured_order():
    sequencer = StepSequencer(_steps("intro", "work", "conclude"))

    assert sequencer.index_of("intro") == 0
    assert sequencer.index_of("conclude") == 2
    assert sequencer.first_step_id == "intro"
    assert len(sequencer) == 3


def test_unknown_step_raises():
    sequencer = StepSequencer(_steps("intro", "work"))

    with pytest.raises(UnknownStepError):
        sequencer.index_of("missing")


def test_rejects_empty_and_duplicate_steps():
    with pytest.raises(ValueError):
        StepSequencer([])
    with pytest.raises(ValueError):
        StepSequencer(_steps("intro", "intro"))


def test_free_navigation_allows_any_jump():
    sequencer = StepSequencer(_steps("a", "b", "c", "d"))

    assert sequencer.check_transition("a", "d") == 3
    assert sequencer.check_transition("d", "a") == 0


def test_forward_only_blocks_going_back():
    sequencer = StepSequencer(_steps("a", "b", "c"), navigation="forward_only")

    assert sequencer.check_transition("a", "c") == 2
    with pytest.raises(StepTransitionNotAllowedError):
        sequencer.check_transition("c", "b")


def test_no_skip_allows_next_and_back_only():
    sequencer = StepSequencer(_steps("a", "b", "c"), navigation="no_skip")

    assert sequencer.check_transition("a", "b") == 1
    assert sequencer.check_transition("c", "a") == 0
    with pytest.raises(StepTransitionNotAllowedError):
        sequencer.check_transition("a", "c")


def test_check_transition_validates_both_ids():
    sequencer = StepSequencer(_steps("a", "b"))

    with pytest.raises(UnknownStepError):
        sequencer.check_transition("a", "z")

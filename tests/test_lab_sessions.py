import pytest

from virtual_labs.data.hardcoded_labs import HARDCODED_LABS
from virtual_labs.domain.models import VirtualLab
from virtual_labs.execution.exceptions import UnknownStepError
from virtual_labs.execution.timer import ManualTicker
from virtual_labs.repositories.catalog import StaticLabCatalog
from virtual_labs.services.exceptions import LabNotFoundError, SessionNotFoundError
from virtual_labs.services.lab_sessions import LabSessionService


@pytest.fixture
def tickers():
    return []


@pytest.fixture
def service(attempts, evaluator, dispatcher, tickers):
    coming_soon = VirtualLab(
        id="lab-coming-soon",
        title="Coming Soon",
        topic_id="misc",
        description="Not playable yet.",
        difficulty=1,
        estimated_time=5,
        icon_name="atom",
    )
    catalog = StaticLabCatalog(labs={**HARDCODED_LABS, coming_soon.id: coming_soon})

    def make_ticker():
        ticker = ManualTicker()
        tickers.append(ticker)
        return ticker

    return LabSessionService(
        catalog=catalog,
        attempt_repository=attempts,
        evaluator=evaluator,
        dispatcher=dispatcher,
        ticker_factory=make_ticker,
    )


def test_start_session_uses_lab_config(service):
    session_id = service.start_session("s1", "lab-stoichiometry")
    snapshot = service.get_session(session_id)

    assert snapshot.exercise_id == "lab-stoichiometry"
    assert snapshot.current_step_id == "intro"
    assert snapshot.total_steps == 5


def test_unknown_or_unplayable_lab(service):
    with pytest.raises(LabNotFoundError):
        service.start_session("s1", "lab-missing")
    with pytest.raises(LabNotFoundError):
        service.start_session("s1", "lab-coming-soon")


def test_unknown_session(service):
    with pytest.raises(SessionNotFoundError):
        service.get_session("nope")
    assert service.end_session("nope") is False


def test_session_flow(service, attempts, tickers):
    session_id = service.start_session("s1", "lab-osmosis")

    service.set_step(session_id, "observe")
    service.add_note(session_id, "cells plasmolysed", "hypertonic, 400x")
    untagged = service.add_note(session_id, "membrane pulled away")
    tickers[0].advance(61)
    summary = service.complete(session_id, 72)

    assert untagged.context_tag == "hypertonic, 400x"
    assert summary.passed is True
    assert summary.notes_count == 2
    assert summary.format_elapsed() == "01:01"
    assert [a.score for a in service.list_attempts("s1")] == [72]


def test_contract_errors_pass_through(service):
    session_id = service.start_session("s1", "lab-osmosis")
    with pytest.raises(UnknownStepError):
        service.set_step(session_id, "balance")


def test_end_session_stops_timer(service, tickers):
    session_id = service.start_session("s1", "lab-osmosis")

    assert service.end_session(session_id) is True
    assert not tickers[0].is_running
    with pytest.raises(SessionNotFoundError):
        service.get_session(session_id)


def test_shutdown_ends_everything(service, tickers):
    service.start_session("s1", "lab-osmosis")
    service.start_session("s2", "lab-enzyme-temp")

    service.shutdown()

    assert all(not t.is_running for t in tickers)


def test_completed_sessions_are_dropped_on_next_start(service, tickers):
    first = service.start_session("s1", "lab-osmosis")
    other = service.start_session("s2", "lab-osmosis")
    service.complete(first, 80)
    service.complete(other, 80)

    assert service.get_session(first).is_completed

    service.start_session("s1", "lab-enzyme-temp")

    with pytest.raises(SessionNotFoundError):
        service.get_session(first)
    assert service.get_session(other).is_completed

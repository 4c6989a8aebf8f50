import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from virtual_labs.domain.models import StepConfig
from virtual_labs.execution.controller import SessionController
from virtual_labs.execution.dispatch import InlineDispatcher
from virtual_labs.execution.timer import ManualTicker
from virtual_labs.infrastructure.database.connection import init_db
from virtual_labs.repositories.attempt import InMemoryAttemptRepository
from virtual_labs.repositories.badge import InMemoryBadgeRepository
from virtual_labs.services.achievements import LabAchievementEvaluator
from virtual_labs.services.error_reporting import LoggingErrorReporter


@pytest.fixture
def steps():
    return [
        StepConfig(id="intro", label="Introduction", description="Read the theory."),
        StepConfig(id="work", label="Experiment", description="Run the experiment."),
        StepConfig(id="conclude", label="Conclude", description="Answer the questions."),
    ]


@pytest.fixture
def reporter():
    return LoggingErrorReporter()


@pytest.fixture
def attempts():
    return InMemoryAttemptRepository()


@pytest.fixture
def badges():
    return InMemoryBadgeRepository()


@pytest.fixture
def evaluator(attempts, badges):
    return LabAchievementEvaluator(attempt_repository=attempts, badge_repository=badges)


@pytest.fixture
def dispatcher(reporter):
    return InlineDispatcher(reporter)


@pytest.fixture
def ticker():
    return ManualTicker()


@pytest.fixture
def controller(attempts, evaluator, dispatcher, ticker):
    return SessionController(
        repository=attempts,
        evaluator=evaluator,
        dispatcher=dispatcher,
        ticker=ticker,
    )


@pytest.fixture
def started(controller, steps):
    controller.initialize("student-1", "lab-test", steps, passing_score=70)
    return controller


@pytest.fixture
def sql_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return engine

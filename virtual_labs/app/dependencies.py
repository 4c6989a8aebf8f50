"""
Dependency Injection Wiring (Composition Root).

This module acts as the central "container" for the application's services.
It is responsible for:
1. Instantiating the core Singleton services (Repositories, Dispatcher, Evaluator).
2. Wiring them together (e.g., injecting the Repositories into the LabSessionService).
3. Managing the lifecycle of these objects using @lru_cache to ensure
   they are created only once per application process.

STORAGE_BACKEND picks the in-memory or SQL repositories. Tests replace
get_lab_session_service through app.dependency_overrides.
"""


from functools import lru_cache

from ..config import settings
from ..repositories.attempt import AttemptRepository, InMemoryAttemptRepository, SQLAttemptRepository
from ..repositories.badge import BadgeRepository, InMemoryBadgeRepository, SQLBadgeRepository
from ..repositories.catalog import LabCatalog, StaticLabCatalog, SQLLabCatalog
from ..execution.dispatch import AsyncioDispatcher, Dispatcher
from ..execution.timer import AsyncioTicker
from ..services.achievements import AchievementEvaluator, LabAchievementEvaluator
from ..services.error_reporting import ErrorReporter, LoggingErrorReporter
from ..services.lab_sessions import LabSessionService

from ..infrastructure.database.connection import init_db


# Storage (created once, on first use)
@lru_cache()
def use_sql_storage() -> bool:
    if settings.STORAGE_BACKEND == "sql":
        init_db()
        return True
    return False

# Error Reporter (Singleton)
@lru_cache()
def get_error_reporter() -> ErrorReporter:
    return LoggingErrorReporter()

# Lab Catalog (Singleton)
@lru_cache()
def get_lab_catalog() -> LabCatalog:
    if use_sql_storage():
        return SQLLabCatalog()
    return StaticLabCatalog()

# Attempt Repository (Singleton)
# Note: In-memory storage must be a singleton so data persists across requests!
@lru_cache()
def get_attempt_repository() -> AttemptRepository:
    if use_sql_storage():
        return SQLAttemptRepository()
    return InMemoryAttemptRepository()

# Badge Repository (Singleton)
@lru_cache()
def get_badge_repository() -> BadgeRepository:
    if use_sql_storage():
        return SQLBadgeRepository()
    return InMemoryBadgeRepository()

# Dispatcher (Singleton)
@lru_cache()
def get_dispatcher() -> Dispatcher:
    return AsyncioDispatcher(get_error_reporter())

# Achievement Evaluator (Singleton)
@lru_cache()
def get_achievement_evaluator() -> AchievementEvaluator:
    return LabAchievementEvaluator(
        attempt_repository=get_attempt_repository(),
        badge_repository=get_badge_repository(),
    )

# The Lab Session Service (Singleton Service)
# Live controllers are held here, so it must be a singleton too.
@lru_cache()
def get_lab_session_service() -> LabSessionService:
    """
    Injects all necessary components into the LabSessionService.
    The app lifespan resolves it too, to stop live sessions on shutdown.
    """
    return LabSessionService(
        catalog=get_lab_catalog(),
        attempt_repository=get_attempt_repository(),
        evaluator=get_achievement_evaluator(),
        dispatcher=get_dispatcher(),
        ticker_factory=lambda: AsyncioTicker(settings.TICK_INTERVAL_SECONDS)
    )

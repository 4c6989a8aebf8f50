"""
Error Reporting Side Channel.

Failures of external collaborators (persistence writes, achievement checks)
must never interrupt a participant's lab. Instead of being swallowed they
are handed to an ErrorReporter, which makes them observable without letting
them block the session.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ..state.models import utcnow

logger = logging.getLogger(__name__)


@dataclass
class FailureReport:
    """
    A single collaborator failure.

    Attributes:
        operation: Name of the dispatched job (e.g., "attempts.save_notebook_entry").
        error: The exception the collaborator raised.
        occurred_at: When the failure was reported.
    """
    operation: str
    error: BaseException
    occurred_at: datetime = field(default_factory=utcnow)


class ErrorReporter(ABC):
    @abstractmethod
    def report(self, operation: str, error: BaseException) -> None:
        """Records a collaborator failure. Must not raise."""
        pass


class LoggingErrorReporter(ErrorReporter):
    """
    Logs every failure and keeps the reports in memory for inspection.
    """

    def __init__(self, max_reports: int = 500):
        self.max_reports = max_reports
        self.failures: List[FailureReport] = []

    def report(self, operation: str, error: BaseException) -> None:
        logger.error(f"Background operation '{operation}' failed: {error!r}")
        self.failures.append(FailureReport(operation=operation, error=error))
        # Keep only the most recent reports
        if len(self.failures) > self.max_reports:
            del self.failures[: len(self.failures) - self.max_reports]

    def clear(self) -> None:
        self.failures.clear()

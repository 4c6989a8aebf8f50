"""
State Layer - Runtime Data Models

Defines the runtime records that track a participant's lab session:
the attempt with its notebook, and the controller's session state.
"""

from virtual_labs.state.models import (
    AttemptRecord,
    CompletionSummary,
    NotebookEntry,
    SessionSnapshot,
    SessionState,
    UserBadge,
)

__all__ = [
    "AttemptRecord",
    "CompletionSummary",
    "NotebookEntry",
    "SessionSnapshot",
    "SessionState",
    "UserBadge",
]

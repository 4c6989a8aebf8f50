"""
Virtual Labs

A session engine for multi-step guided lab exercises: step sequencing,
elapsed time, notebook observations, pass/fail scoring and hand-off to
progress tracking, plus the conservation check used by the
equation-balancing labs.
"""

from virtual_labs.domain import (
    Badge,
    EquationChallenge,
    EquationSide,
    ExerciseConfig,
    Molecule,
    StepConfig,
    Term,
    VirtualLab,
)
from virtual_labs.state import (
    AttemptRecord,
    CompletionSummary,
    NotebookEntry,
    SessionSnapshot,
    SessionState,
)
from virtual_labs.execution import (
    LabStatus,
    NotebookLog,
    ScoringGate,
    SessionController,
    StepSequencer,
)
from virtual_labs.validation import count_units, is_balanced

__all__ = [
    # Domain Layer
    "Badge",
    "EquationChallenge",
    "EquationSide",
    "ExerciseConfig",
    "Molecule",
    "StepConfig",
    "Term",
    "VirtualLab",
    # State Layer
    "AttemptRecord",
    "CompletionSummary",
    "NotebookEntry",
    "SessionSnapshot",
    "SessionState",
    # Execution Layer
    "LabStatus",
    "NotebookLog",
    "ScoringGate",
    "SessionController",
    "StepSequencer",
    # Validation
    "count_units",
    "is_balanced",
]

"""
Session Engine Exceptions

Contract violations raised synchronously by the session engine and the
conservation check. They signal misuse by the calling scene and are never
retried.
"""


class LabEngineError(Exception):
    """Base class for every contract violation raised by the engine."""
    pass


class UnknownStepError(LabEngineError):
    """Raised when a step id is not part of the lab's configured steps."""
    pass


class StepTransitionNotAllowedError(LabEngineError):
    """Raised when the lab's navigation policy forbids the requested jump."""
    pass


class EmptyObservationError(LabEngineError):
    """Raised when a notebook entry is empty or whitespace-only."""
    pass


class InvalidScoreError(LabEngineError):
    """Raised when a final score is not an integer within [0, 100]."""
    pass


class InvalidCoefficientError(LabEngineError):
    """Raised when an equation coefficient is not a positive integer."""
    pass


class SessionNotActiveError(LabEngineError):
    """Raised when an operation needs an active session and there is none."""
    pass


class AlreadyCompletedError(SessionNotActiveError):
    """Raised when a lab that already has a final score is completed again."""
    pass

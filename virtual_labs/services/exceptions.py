"""
Service Layer Exceptions

Custom exceptions for the LabSessionService and related orchestration logic.
"""


class LabNotFoundError(Exception):
    """Raised when a lab id is not in the catalog or has no engine config."""
    pass


class SessionNotFoundError(Exception):
    """Raised when a session id does not refer to a live lab session."""
    pass

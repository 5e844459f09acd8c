"""
Authentication session exceptions.
"""

from douanier.domain.exceptions.base import DouanierException


class SessionError(DouanierException):
    """Base exception for session lifecycle errors."""


class SessionNotFoundError(SessionError):
    """Raised when a session id is unknown (never created, swept or logged out)."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            "Session not found or expired",
            code="SESSION_NOT_FOUND",
        )


class SessionExpiredError(SessionError):
    """Raised when a session existed but its payment window has closed."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(
            "Session expired. Please start a new authentication request.",
            code="SESSION_EXPIRED",
        )


class VerificationFailedError(SessionError):
    """
    Raised when a submitted payment proof does not match the session.

    The session stays pending, so the caller may retry with another proof.
    """

    def __init__(self, session_id: str, reason: str):
        self.session_id = session_id
        self.reason = reason
        super().__init__(reason, code="VERIFICATION_FAILED")

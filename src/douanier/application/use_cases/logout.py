"""
Logout use case.
"""

from typing import Optional

from douanier.application.dto.auth_dto import LogoutResult
from douanier.application.services.session_store import SessionStore
from douanier.domain.exceptions import ValidationError


class Logout:
    """Invalidate a session, pending or verified. Always succeeds."""

    def __init__(self, session_store: SessionStore):
        """Initialize use case with dependencies."""
        self._session_store = session_store

    async def execute(self, session_id: Optional[str]) -> LogoutResult:
        """
        Invalidate session.

        Raises:
            ValidationError: Missing session id
        """
        if not session_id:
            raise ValidationError(
                field="sessionId",
                reason="Session ID is required",
            )

        await self._session_store.invalidate(session_id)
        return LogoutResult()

"""
Sweep expired sessions use case.

Bounds memory growth from abandoned requests. Correctness does not
depend on it: reads already expire requests lazily.
"""

from douanier.application.services.session_store import SessionStore
from douanier.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class SweepExpiredSessions:
    """Remove every pending request past its expiry."""

    def __init__(self, session_store: SessionStore):
        """Initialize use case with dependencies."""
        self._session_store = session_store

    async def execute(self) -> int:
        """
        Run one sweep.

        Returns:
            Number of expired requests removed
        """
        removed = await self._session_store.sweep()
        logger.info(f"Cleaned up {removed} expired sessions")
        return removed

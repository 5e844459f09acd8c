"""
Periodic background sweep of expired sessions.
"""

import asyncio
from typing import Optional

from douanier.application.use_cases.sweep_expired_sessions import (
    SweepExpiredSessions,
)
from douanier.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class SessionSweeper:
    """
    Runs SweepExpiredSessions at a fixed interval.

    Owned by the application lifespan: start() on startup, stop() on
    shutdown. A failing sweep is logged and the loop keeps going.
    """

    def __init__(self, use_case: SweepExpiredSessions, interval: float = 300):
        """
        Initialize sweeper.

        Args:
            use_case: Sweep use case to run
            interval: Seconds between sweeps
        """
        self._use_case = use_case
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Whether the background loop is active."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.is_running:
            return

        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(f"Session sweeper started (interval: {self.interval}s)")

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session sweeper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self._use_case.execute()
            except Exception:
                logger.exception("Session sweep failed")

"""
Circuit breaker guarding Solana RPC calls.
"""

import asyncio
import time
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from douanier.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests
    HALF_OPEN = "half_open"  # Probing for recovery


_STATE_GAUGE_VALUES = {
    CircuitState.CLOSED: 0,
    CircuitState.OPEN: 1,
    CircuitState.HALF_OPEN: 2,
}


class CircuitBreakerError(Exception):
    """Raised when circuit is open."""


class CircuitBreaker:
    """
    Circuit breaker for ledger RPC calls.

    Counts consecutive failures and rejects calls once the threshold is
    reached. After recovery_timeout one probe call is let through; its
    outcome closes or reopens the circuit.
    """

    def __init__(
        self,
        name: str = "solana_rpc",
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        expected_exception: type = Exception,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize circuit breaker.

        Args:
            name: Service label used for logs and metrics
            failure_threshold: Consecutive failures before opening circuit
            recovery_timeout: Seconds to wait before half-open probe
            expected_exception: Exception type that counts as failure
            monotonic: Time source (injectable for tests)
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception
        self._monotonic = monotonic

        self._failure_count = 0
        self._last_failure_time: Optional[float] = None
        self._state = CircuitState.CLOSED
        self._lock = asyncio.Lock()
        self._publish_state()

    @property
    def state(self) -> CircuitState:
        """Get current circuit state."""
        return self._state

    @property
    def failure_count(self) -> int:
        """Get current failure count."""
        return self._failure_count

    async def call(self, func: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
        """
        Execute coroutine function with circuit breaker protection.

        Raises:
            CircuitBreakerError: If circuit is open
            Exception: Original exception from function
        """
        async with self._lock:
            if self._state == CircuitState.OPEN:
                if self._should_attempt_reset():
                    self._set_state(CircuitState.HALF_OPEN)
                else:
                    raise CircuitBreakerError(
                        f"Circuit breaker '{self.name}' is OPEN. "
                        f"Failures: {self._failure_count}/{self.failure_threshold}. "
                        f"Retry after {self.recovery_timeout}s."
                    )

        try:
            result = await func(*args, **kwargs)
        except self.expected_exception:
            await self._on_failure()
            raise

        await self._on_success()
        return result

    async def _on_success(self) -> None:
        async with self._lock:
            self._failure_count = 0
            self._last_failure_time = None
            if self._state == CircuitState.HALF_OPEN:
                self._set_state(CircuitState.CLOSED)

    async def _on_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            self._last_failure_time = self._monotonic()

            if (
                self._state == CircuitState.HALF_OPEN
                or self._failure_count >= self.failure_threshold
            ):
                self._set_state(CircuitState.OPEN)

    def _should_attempt_reset(self) -> bool:
        if self._last_failure_time is None:
            return False

        elapsed = self._monotonic() - self._last_failure_time
        return elapsed >= self.recovery_timeout

    def _set_state(self, state: CircuitState) -> None:
        if state != self._state:
            logger.warning(
                f"Circuit breaker '{self.name}': "
                f"{self._state.value} -> {state.value}"
            )
        self._state = state
        self._publish_state()

    def _publish_state(self) -> None:
        metrics.circuit_breaker_state.labels(service=self.name).set(
            _STATE_GAUGE_VALUES[self._state]
        )

    async def reset(self) -> None:
        """Manually reset circuit breaker to CLOSED state."""
        async with self._lock:
            self._failure_count = 0
            self._last_failure_time = None
            self._set_state(CircuitState.CLOSED)

    def get_stats(self) -> dict:
        """
        Get circuit breaker statistics.

        Returns:
            Dict with state, failure_count, threshold and timeout
        """
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "recovery_timeout": self.recovery_timeout,
        }

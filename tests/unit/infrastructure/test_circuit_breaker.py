"""
Unit tests for CircuitBreaker.
"""

from unittest.mock import AsyncMock

import pytest

from douanier.infrastructure.blockchain.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
    CircuitState,
)


class FakeMonotonic:
    def __init__(self):
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def breaker(monotonic) -> CircuitBreaker:
    return CircuitBreaker(
        name="test_rpc",
        failure_threshold=3,
        recovery_timeout=30,
        expected_exception=ConnectionError,
        monotonic=monotonic,
    )


async def _fail(breaker: CircuitBreaker, times: int) -> None:
    failing = AsyncMock(side_effect=ConnectionError("down"))
    for _ in range(times):
        with pytest.raises(ConnectionError):
            await breaker.call(failing)


class TestCircuitBreaker:
    """Unit tests for CircuitBreaker."""

    async def test_success_passes_result_through(self, breaker):
        """Test closed circuit returns function result."""
        func = AsyncMock(return_value="ok")

        assert await breaker.call(func, 1, key="v") == "ok"
        func.assert_awaited_once_with(1, key="v")
        assert breaker.state == CircuitState.CLOSED

    async def test_opens_after_threshold(self, breaker):
        """Test consecutive failures open the circuit."""
        await _fail(breaker, 3)

        assert breaker.state == CircuitState.OPEN
        with pytest.raises(CircuitBreakerError):
            await breaker.call(AsyncMock())

    async def test_success_resets_failure_count(self, breaker):
        """Test a success in between keeps the circuit closed."""
        await _fail(breaker, 2)
        await breaker.call(AsyncMock(return_value=None))
        await _fail(breaker, 2)

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 2

    async def test_unexpected_exception_not_counted(self, breaker):
        """Test exceptions outside expected_exception do not trip."""
        for _ in range(5):
            with pytest.raises(ValueError):
                await breaker.call(AsyncMock(side_effect=ValueError("bad")))

        assert breaker.state == CircuitState.CLOSED

    async def test_half_open_probe_closes_on_success(self, breaker, monotonic):
        """Test probe after recovery timeout closes the circuit."""
        await _fail(breaker, 3)
        monotonic.value += 30

        assert await breaker.call(AsyncMock(return_value="back")) == "back"
        assert breaker.state == CircuitState.CLOSED

    async def test_half_open_probe_failure_reopens(self, breaker, monotonic):
        """Test failed probe reopens the circuit immediately."""
        await _fail(breaker, 3)
        monotonic.value += 30

        await _fail(breaker, 1)

        assert breaker.state == CircuitState.OPEN

    async def test_reset(self, breaker):
        """Test manual reset closes the circuit."""
        await _fail(breaker, 3)

        await breaker.reset()

        stats = breaker.get_stats()
        assert stats["state"] == "closed"
        assert stats["failure_count"] == 0
        assert stats["name"] == "test_rpc"

"""
Unit tests for DouanierHealthCheck.
"""

from unittest.mock import AsyncMock

from douanier.domain.exceptions import LedgerUnavailableError
from douanier.infrastructure.monitoring.health_check import DouanierHealthCheck


def _health(session_store, ledger_matcher) -> DouanierHealthCheck:
    return DouanierHealthCheck(
        session_store=session_store,
        ledger_matcher=ledger_matcher,
        version="0.1.0",
        network="devnet",
    )


class TestDouanierHealthCheck:
    """Unit tests for DouanierHealthCheck."""

    async def test_liveness_always_healthy(self, session_store, ledger_matcher):
        """Test liveness does not touch dependencies."""
        result = await _health(session_store, ledger_matcher).check_liveness()

        assert result["status"] == "healthy"
        ledger_matcher.check_connection.assert_not_called()

    async def test_readiness_healthy(self, session_store, ledger_matcher):
        """Test reachable store and ledger report healthy."""
        ledger_matcher.check_connection.return_value = "1.18.22"

        result = await _health(session_store, ledger_matcher).check_readiness()

        assert result["status"] == "healthy"
        assert result["checks"]["solana_rpc"]["solana_core"] == "1.18.22"
        assert result["checks"]["session_store"]["pending"] == 0

    async def test_ledger_down_degrades(self, session_store, ledger_matcher):
        """Test unreachable ledger only degrades readiness."""
        ledger_matcher.check_connection.side_effect = LedgerUnavailableError(
            "connection refused"
        )

        result = await _health(session_store, ledger_matcher).check_readiness()

        assert result["status"] == "degraded"

    async def test_store_down_unhealthy(self, session_store, ledger_matcher):
        """Test failing session store makes the service unhealthy."""
        session_store.counts = AsyncMock(side_effect=ConnectionError("redis down"))

        result = await _health(session_store, ledger_matcher).check_readiness()

        assert result["status"] == "unhealthy"

"""
Douanier health check implementation.

Kubernetes-compatible health checks for liveness and readiness probes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from douanier.application.services.session_store import SessionStore
from douanier.domain.exceptions import BlockchainError
from douanier.domain.services.i_ledger_matcher import ILedgerMatcher


class HealthStatus(str, Enum):
    """Health status levels."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class DouanierHealthCheck:
    """
    Health check for the wallet verification service.

    Checks:
    - Session store reachable (counts readable)
    - Solana RPC reachable (cluster version)
    """

    def __init__(
        self,
        session_store: SessionStore,
        ledger_matcher: ILedgerMatcher,
        version: str,
        network: str,
    ):
        """Initialize health check with its collaborators."""
        self.session_store = session_store
        self.ledger_matcher = ledger_matcher
        self.version = version
        self.network = network

    @staticmethod
    def _get_timestamp() -> str:
        return datetime.now(timezone.utc).isoformat()

    async def check_liveness(self) -> Dict[str, Any]:
        """
        Liveness probe - is the service alive?

        Returns basic service info without checking dependencies.
        """
        return {
            "status": HealthStatus.HEALTHY.value,
            "component": "douanier",
            "version": self.version,
            "timestamp": self._get_timestamp(),
        }

    async def check_readiness(self) -> Dict[str, Any]:
        """
        Readiness probe - is the service ready to handle requests?

        An unreachable session store makes the service unhealthy. An
        unreachable ledger only degrades it: sessions can still be created
        and polls stay pending until the ledger returns.
        """
        checks = {}
        overall_status = HealthStatus.HEALTHY

        store_status = await self._check_session_store()
        checks["session_store"] = store_status
        if store_status["status"] != HealthStatus.HEALTHY.value:
            overall_status = HealthStatus.UNHEALTHY

        ledger_status = await self._check_ledger()
        checks["solana_rpc"] = ledger_status
        if (
            ledger_status["status"] != HealthStatus.HEALTHY.value
            and overall_status == HealthStatus.HEALTHY
        ):
            overall_status = HealthStatus.DEGRADED

        return {
            "status": overall_status.value,
            "component": "douanier",
            "version": self.version,
            "network": self.network,
            "timestamp": self._get_timestamp(),
            "checks": checks,
        }

    async def _check_session_store(self) -> Dict[str, Any]:
        """Read partition sizes from the store backend."""
        try:
            counts = await self.session_store.counts()
        except Exception as e:
            return {
                "status": HealthStatus.UNHEALTHY.value,
                "message": f"Session store unavailable: {e}",
            }

        return {
            "status": HealthStatus.HEALTHY.value,
            "pending": counts.get("pending", 0),
            "verified": counts.get("verified", 0),
        }

    async def _check_ledger(self) -> Dict[str, Any]:
        """Query the Solana node version."""
        try:
            version: Optional[str] = await self.ledger_matcher.check_connection()
        except BlockchainError as e:
            return {
                "status": HealthStatus.DEGRADED.value,
                "message": f"Solana RPC unavailable: {e.message}",
            }

        return {
            "status": HealthStatus.HEALTHY.value,
            "solana_core": version,
        }

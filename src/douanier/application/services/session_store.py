"""
Session store - source of truth for authentication request state.

Owns the pending -> verified transition and enforces it exactly once.
All mutations run under a single asyncio lock. Callers must never hold
the lock across ledger I/O: read criteria via get_status(), query the
ledger, then commit through verify(), which re-checks everything.
"""

import asyncio
from datetime import timedelta
from typing import Dict, List, Optional

from douanier.application.dto.auth_dto import (
    AuthStatusView,
    InitiatedAuth,
    VerifyResult,
)
from douanier.domain.entities.auth_request import AuthRequest
from douanier.domain.exceptions import (
    ConfigurationError,
    SessionExpiredError,
    SessionNotFoundError,
)
from douanier.domain.repositories.i_auth_request_repository import (
    IAuthRequestRepository,
)
from douanier.domain.services.i_ledger_matcher import VerificationResult
from douanier.domain.value_objects.correlation_amount import CorrelationPolicy
from douanier.domain.value_objects.timestamp import Clock, utc_now
from douanier.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class SessionStore:
    """
    Authentication session state machine.

    Transitions:
    - create: (none) -> pending
    - verify: pending -> verified (single commit point)
    - get_status / verify / sweep: pending -> (deleted) once expired
    - invalidate: any -> (deleted)
    """

    def __init__(
        self,
        repository: IAuthRequestRepository,
        receiver_address: Optional[str],
        correlation_policy: CorrelationPolicy,
        session_timeout: timedelta,
        clock: Clock = utc_now,
        verified_ttl: Optional[timedelta] = None,
    ):
        """
        Initialize session store.

        Args:
            repository: Partitioned request storage
            receiver_address: Configured payment destination
            correlation_policy: Policy minting expected amounts
            session_timeout: Lifetime of a pending request
            clock: Source of aware UTC time (injectable for tests)
            verified_ttl: How long verified sessions survive; None keeps
                them until logout
        """
        self._repository = repository
        self._receiver_address = receiver_address
        self._policy = correlation_policy
        self._session_timeout = session_timeout
        self._clock = clock
        self._verified_ttl = verified_ttl
        self._lock = asyncio.Lock()

    @property
    def receiver_address(self) -> Optional[str]:
        """Configured receiver address."""
        return self._receiver_address

    async def create(self, wallet_address: str) -> InitiatedAuth:
        """
        Create a pending authentication request.

        Args:
            wallet_address: Claimed owner address (already validated)

        Returns:
            InitiatedAuth with payment instructions

        Raises:
            ConfigurationError: If receiver address is not configured
        """
        if not self._receiver_address:
            raise ConfigurationError("RECEIVER_WALLET_ADDRESS")

        async with self._lock:
            created_at = self._clock()
            request = AuthRequest(
                wallet_address=wallet_address,
                receiver_address=self._receiver_address,
                expected_amount=self._policy.amount_for(created_at),
                created_at=created_at,
                expires_at=created_at + self._session_timeout,
            )

            # uuid4 collisions are practically impossible, but ids must be
            # unseen in both partitions
            while await self._repository.exists(request.session_id):
                request = AuthRequest(
                    wallet_address=request.wallet_address,
                    receiver_address=request.receiver_address,
                    expected_amount=request.expected_amount,
                    created_at=request.created_at,
                    expires_at=request.expires_at,
                )

            await self._repository.add_pending(request)

        metrics.sessions_created_total.inc()
        logger.info(
            f"Auth request created for {request.wallet_address}",
            extra={
                "session_id": request.session_id,
                "expected_amount": str(request.expected_amount),
            },
        )

        amount = format(request.expected_amount, "f")
        return InitiatedAuth(
            session_id=request.session_id,
            receiver_address=request.receiver_address,
            expected_amount=request.expected_amount,
            expires_at=request.expires_at,
            message=(
                f"Send exactly {amount} SOL to {request.receiver_address} "
                "to verify your wallet ownership"
            ),
        )

    async def get_status(self, session_id: str) -> AuthStatusView:
        """
        Get current status of a session.

        Expired pending requests are deleted on read, so the expired view
        is returned exactly once and later reads report not_found.
        """
        async with self._lock:
            verified = await self._repository.get_verified(session_id)
            if verified is not None:
                return AuthStatusView.verified_view(verified)

            pending = await self._repository.get_pending(session_id)
            if pending is None:
                return AuthStatusView.not_found(session_id)

            if pending.is_expired(self._clock()):
                await self._repository.delete_pending(session_id)
                self._log_expired(session_id, path="status")
                return AuthStatusView.expired(session_id)

            return AuthStatusView.pending(pending)

    async def verify(
        self,
        session_id: str,
        signature: Optional[str],
        verification_result: VerificationResult,
    ) -> VerifyResult:
        """
        Commit a verification attempt.

        Re-detecting a match on an already verified session returns the
        stored result without touching signature or verified_at.

        Args:
            session_id: Session to verify
            signature: Transaction signature proving the payment
            verification_result: Ledger verdict for that transaction

        Returns:
            VerifyResult (success=False carries the failure reason and
            leaves the request pending)

        Raises:
            SessionNotFoundError: If session is neither pending nor verified
            SessionExpiredError: If pending request has expired
        """
        async with self._lock:
            verified = await self._repository.get_verified(session_id)
            if verified is not None:
                return VerifyResult.committed(verified, already_verified=True)

            pending = await self._repository.get_pending(session_id)
            if pending is None:
                raise SessionNotFoundError(session_id)

            now = self._clock()
            if pending.is_expired(now):
                await self._repository.delete_pending(session_id)
                self._log_expired(session_id, path="verify")
                raise SessionExpiredError(session_id)

            if not verification_result.verified:
                metrics.verification_failures_total.inc()
                reason = (
                    verification_result.error or "Transaction verification failed"
                )
                logger.info(
                    f"Verification failed: {reason}",
                    extra={"session_id": session_id},
                )
                return VerifyResult(
                    success=False,
                    session_id=session_id,
                    wallet_address=pending.wallet_address,
                    error=reason,
                )

            committed = pending.verified_copy(
                signature=signature or verification_result.signature,
                verified_at=now,
            )
            await self._repository.move_to_verified(committed)

        logger.info(
            f"Wallet authenticated: {committed.wallet_address}",
            extra={"session_id": session_id, "signature": committed.signature},
        )
        return VerifyResult.committed(committed)

    async def invalidate(self, session_id: str) -> bool:
        """
        Remove session from both partitions.

        Returns:
            True if anything was removed (callers report success regardless)
        """
        async with self._lock:
            removed = await self._repository.delete(session_id)

        if removed:
            logger.info("Session invalidated", extra={"session_id": session_id})
        return removed

    async def sweep(self) -> int:
        """
        Delete every expired pending request.

        With a verified TTL configured, verified sessions older than the
        TTL are deleted as well.

        Returns:
            Number of pending requests removed
        """
        async with self._lock:
            now = self._clock()
            removed = 0
            for request in await self._repository.list_pending():
                if request.is_expired(now):
                    if await self._repository.delete_pending(request.session_id):
                        removed += 1

            retired = 0
            if self._verified_ttl is not None:
                for request in await self._repository.list_verified():
                    if request.verified_at + self._verified_ttl < now:
                        if await self._repository.delete(request.session_id):
                            retired += 1

            counts = await self._repository.count()

        if removed:
            metrics.sessions_expired_total.labels(path="sweep").inc(removed)
        if retired:
            logger.info(f"Retired {retired} verified sessions past their TTL")
        metrics.pending_sessions.set(counts["pending"])
        metrics.verified_sessions.set(counts["verified"])
        return removed

    async def list_pending(self) -> List[AuthRequest]:
        """Snapshot of pending requests (monitoring)."""
        async with self._lock:
            return await self._repository.list_pending()

    async def counts(self) -> Dict[str, int]:
        """Sizes of the pending and verified partitions."""
        async with self._lock:
            return await self._repository.count()

    def _log_expired(self, session_id: str, path: str) -> None:
        metrics.sessions_expired_total.labels(path=path).inc()
        logger.info("Expired session removed", extra={"session_id": session_id})

"""
Check authentication status use case (polling).

Each poll of a pending session asks the ledger once for a matching
payment and commits the session on a match.
"""

import asyncio

from douanier.application.dto.auth_dto import AuthStatusView
from douanier.application.services.session_store import SessionStore
from douanier.domain.exceptions import (
    LedgerUnavailableError,
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
)
from douanier.domain.services.i_ledger_matcher import (
    ILedgerMatcher,
    VerificationResult,
)
from douanier.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class CheckAuthStatus:
    """
    Poll session status, detecting the correlated payment.

    Flow:
    1. Read status (lazy expiry applies)
    2. Terminal states return immediately
    3. Pending: one ledger scan outside the store lock
    4. On match: commit through the store (re-checked under lock)

    Ledger failures degrade to "still pending" and are only logged.
    """

    def __init__(
        self,
        session_store: SessionStore,
        ledger_matcher: ILedgerMatcher,
    ):
        """Initialize use case with dependencies."""
        self._session_store = session_store
        self._ledger_matcher = ledger_matcher

    async def execute(self, session_id: str) -> AuthStatusView:
        """
        Get status, committing a detected payment.

        Args:
            session_id: Session to poll

        Returns:
            AuthStatusView for the session

        Raises:
            ValidationError: Missing session id
        """
        if not session_id:
            raise ValidationError(
                field="sessionId",
                reason="Session ID is required",
            )

        status = await self._session_store.get_status(session_id)
        if status.is_terminal:
            return status

        # The scan and the commit outlive an abandoned client request
        return await asyncio.shield(self._match_and_commit(session_id, status))

    async def _match_and_commit(
        self, session_id: str, status: AuthStatusView
    ) -> AuthStatusView:
        """Scan the ledger once and commit on match."""
        try:
            match = await self._ledger_matcher.find_match(
                expected_sender=status.wallet_address,
                receiver_address=status.receiver_address,
                expected_amount=status.expected_amount,
            )
        except LedgerUnavailableError as e:
            metrics.ledger_errors_total.labels(
                operation="poll", error_type=type(e).__name__
            ).inc()
            logger.warning(
                f"Ledger unavailable while polling: {e.message}",
                extra={"session_id": session_id},
            )
            return status
        except Exception as e:
            metrics.ledger_errors_total.labels(
                operation="poll", error_type=type(e).__name__
            ).inc()
            logger.exception(
                f"Ledger scan raised {type(e).__name__}, session stays pending",
                extra={"session_id": session_id},
            )
            return status

        if match.error:
            metrics.ledger_errors_total.labels(
                operation="poll", error_type="match_error"
            ).inc()
            logger.warning(
                f"Ledger scan failed, session stays pending: {match.error}",
                extra={"session_id": session_id},
            )
            return status

        if not match.found:
            return status

        try:
            result = await self._session_store.verify(
                session_id,
                match.signature,
                VerificationResult.from_match(match),
            )
        except SessionExpiredError:
            return AuthStatusView.expired(session_id)
        except SessionNotFoundError:
            return AuthStatusView.not_found(session_id)

        if not result.already_verified:
            metrics.sessions_verified_total.labels(source="poll").inc()

        return result.to_status_view()

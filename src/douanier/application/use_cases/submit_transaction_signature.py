"""
Submit transaction signature use case.

Optional path where the client names the payment transaction itself
instead of waiting for the polling scan to find it.
"""

from typing import Optional, Union

from douanier.application.dto.auth_dto import AuthStatusView, VerifyResult
from douanier.application.services.session_store import SessionStore
from douanier.domain.entities.auth_request import AuthStatus
from douanier.domain.exceptions import (
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
    VerificationFailedError,
)
from douanier.domain.services.i_ledger_matcher import (
    ILedgerMatcher,
    VerificationResult,
)
from douanier.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class SubmitTransactionSignature:
    """
    Verify a session against a client-supplied transaction.

    Flow:
    1. Resolve session status (404 unknown, 400 expired)
    2. Already verified: return stored result
    3. No signature: return current status
    4. Verify the transaction on the ledger, then commit through the store
    """

    def __init__(
        self,
        session_store: SessionStore,
        ledger_matcher: ILedgerMatcher,
    ):
        """Initialize use case with dependencies."""
        self._session_store = session_store
        self._ledger_matcher = ledger_matcher

    async def execute(
        self,
        session_id: Optional[str],
        signature: Optional[str] = None,
    ) -> Union[VerifyResult, AuthStatusView]:
        """
        Submit signature for verification.

        Args:
            session_id: Session to verify
            signature: Optional transaction signature

        Returns:
            VerifyResult when verified (now or earlier), otherwise the
            pending AuthStatusView when no signature was given

        Raises:
            ValidationError: Missing session id
            SessionNotFoundError: Unknown session
            SessionExpiredError: Session window closed
            VerificationFailedError: Transaction does not prove the payment
        """
        if not session_id:
            raise ValidationError(
                field="sessionId",
                reason="Session ID is required",
            )

        status = await self._session_store.get_status(session_id)

        if status.status == AuthStatus.NOT_FOUND:
            raise SessionNotFoundError(session_id)

        if status.status == AuthStatus.EXPIRED:
            raise SessionExpiredError(session_id)

        if status.status == AuthStatus.VERIFIED:
            return VerifyResult(
                success=True,
                session_id=session_id,
                wallet_address=status.wallet_address,
                signature=status.signature,
                verified_at=status.verified_at,
                already_verified=True,
            )

        if not signature:
            return status

        try:
            verification = await self._ledger_matcher.verify_signature(
                signature=signature,
                from_address=status.wallet_address,
                to_address=status.receiver_address,
                expected_amount=status.expected_amount,
            )
        except Exception as e:
            metrics.ledger_errors_total.labels(
                operation="verify", error_type=type(e).__name__
            ).inc()
            logger.exception(
                f"Signature check raised {type(e).__name__}",
                extra={"session_id": session_id, "signature": signature},
            )
            verification = VerificationResult.failed(
                "Transaction could not be checked on the ledger"
            )

        result = await self._session_store.verify(session_id, signature, verification)

        if not result.success:
            raise VerificationFailedError(session_id, result.error)

        if not result.already_verified:
            metrics.sessions_verified_total.labels(source="signature").inc()

        return result

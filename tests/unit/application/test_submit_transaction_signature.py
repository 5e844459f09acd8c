"""
Unit tests for SubmitTransactionSignature use case.
"""

from decimal import Decimal

import pytest

from douanier.application.dto.auth_dto import AuthStatusView, VerifyResult
from douanier.application.use_cases.submit_transaction_signature import (
    SubmitTransactionSignature,
)
from douanier.domain.entities.auth_request import AuthStatus
from douanier.domain.exceptions import (
    SessionExpiredError,
    SessionNotFoundError,
    ValidationError,
    VerificationFailedError,
)
from douanier.domain.services.i_ledger_matcher import VerificationResult


class TestSubmitTransactionSignature:
    """Unit tests for SubmitTransactionSignature."""

    @pytest.fixture
    def use_case(self, session_store, ledger_matcher):
        return SubmitTransactionSignature(
            session_store=session_store,
            ledger_matcher=ledger_matcher,
        )

    async def test_missing_session_id_rejected(self, use_case):
        """Test empty session id raises validation error."""
        with pytest.raises(ValidationError):
            await use_case.execute(None, "5sig")

    async def test_unknown_session_raises_not_found(self, use_case):
        """Test unknown session raises SessionNotFoundError."""
        with pytest.raises(SessionNotFoundError) as exc_info:
            await use_case.execute("missing", "5sig")

        assert exc_info.value.message == "Session not found or expired"

    async def test_expired_session_raises(
        self, use_case, session_store, wallet_address, clock
    ):
        """Test expired session raises SessionExpiredError."""
        created = await session_store.create(wallet_address)
        clock.advance(minutes=16)

        with pytest.raises(SessionExpiredError):
            await use_case.execute(created.session_id, "5sig")

    async def test_no_signature_returns_pending_status(
        self, use_case, session_store, ledger_matcher, wallet_address
    ):
        """Test missing signature returns current status untouched."""
        created = await session_store.create(wallet_address)

        result = await use_case.execute(created.session_id)

        assert isinstance(result, AuthStatusView)
        assert result.status == AuthStatus.PENDING
        ledger_matcher.verify_signature.assert_not_called()

    async def test_valid_signature_verifies_session(
        self, use_case, session_store, ledger_matcher, wallet_address,
        receiver_address,
    ):
        """Test verified transaction commits the session."""
        created = await session_store.create(wallet_address)
        ledger_matcher.verify_signature.return_value = VerificationResult(
            verified=True, signature="5sig", amount=Decimal("0.000010042")
        )

        result = await use_case.execute(created.session_id, "5sig")

        assert isinstance(result, VerifyResult)
        assert result.success
        assert not result.already_verified
        assert result.signature == "5sig"
        ledger_matcher.verify_signature.assert_awaited_once_with(
            signature="5sig",
            from_address=wallet_address,
            to_address=receiver_address,
            expected_amount=Decimal("0.000010042"),
        )

    async def test_failed_verification_raises_with_reason(
        self, use_case, session_store, ledger_matcher, wallet_address
    ):
        """Test failed verification raises and leaves session pending."""
        created = await session_store.create(wallet_address)
        reason = "Amount mismatch. Expected: 0.000010042 SOL, Received: 0.00002 SOL"
        ledger_matcher.verify_signature.return_value = VerificationResult.failed(
            reason, amount=Decimal("0.00002")
        )

        with pytest.raises(VerificationFailedError) as exc_info:
            await use_case.execute(created.session_id, "5sig")

        assert exc_info.value.message == reason
        status = await session_store.get_status(created.session_id)
        assert status.status == AuthStatus.PENDING

    async def test_unexpected_matcher_error_fails_verification(
        self, use_case, session_store, ledger_matcher, wallet_address
    ):
        """Test a raising matcher yields a failed verification, not a crash."""
        created = await session_store.create(wallet_address)
        ledger_matcher.verify_signature.side_effect = KeyError("meta")

        with pytest.raises(VerificationFailedError) as exc_info:
            await use_case.execute(created.session_id, "5sig")

        assert exc_info.value.message == (
            "Transaction could not be checked on the ledger"
        )
        status = await session_store.get_status(created.session_id)
        assert status.status == AuthStatus.PENDING

    async def test_already_verified_short_circuits(
        self, use_case, session_store, ledger_matcher, wallet_address
    ):
        """Test verified session returns stored result without ledger call."""
        created = await session_store.create(wallet_address)
        await session_store.verify(
            created.session_id,
            "5first",
            VerificationResult(verified=True, signature="5first"),
        )

        result = await use_case.execute(created.session_id, "5second")

        assert result.success
        assert result.already_verified
        assert result.signature == "5first"
        ledger_matcher.verify_signature.assert_not_called()

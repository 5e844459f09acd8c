"""
Unit tests for InitiateAuthentication, Logout and SweepExpiredSessions.
"""

import pytest

from douanier.application.use_cases.initiate_authentication import (
    InitiateAuthentication,
)
from douanier.application.use_cases.logout import Logout
from douanier.application.use_cases.sweep_expired_sessions import (
    SweepExpiredSessions,
)
from douanier.domain.entities.auth_request import AuthStatus
from douanier.domain.exceptions import ValidationError


class TestInitiateAuthentication:
    """Unit tests for InitiateAuthentication."""

    @pytest.fixture
    def use_case(self, session_store, ledger_matcher):
        return InitiateAuthentication(
            session_store=session_store,
            ledger_matcher=ledger_matcher,
        )

    @pytest.mark.parametrize("wallet", [None, "", "   "])
    async def test_missing_wallet_rejected(self, use_case, wallet):
        """Test missing wallet address raises validation error."""
        with pytest.raises(ValidationError, match="Wallet address is required"):
            await use_case.execute(wallet)

    async def test_invalid_wallet_rejected(self, use_case, ledger_matcher):
        """Test address failing ledger validation is rejected."""
        ledger_matcher.is_valid_address.return_value = False

        with pytest.raises(ValidationError, match="Invalid Solana wallet address"):
            await use_case.execute("not-a-wallet")

    async def test_valid_wallet_creates_session(
        self, use_case, session_store, wallet_address
    ):
        """Test valid wallet creates a pending session."""
        result = await use_case.execute(f"  {wallet_address} ")

        status = await session_store.get_status(result.session_id)
        assert status.status == AuthStatus.PENDING
        assert status.wallet_address == wallet_address


class TestLogout:
    """Unit tests for Logout."""

    async def test_missing_session_id_rejected(self, session_store):
        """Test empty session id raises validation error."""
        with pytest.raises(ValidationError, match="Session ID is required"):
            await Logout(session_store).execute(None)

    async def test_logout_unknown_session_succeeds(self, session_store):
        """Test logout always reports success."""
        result = await Logout(session_store).execute("missing")

        assert result.success
        assert result.message == "Session invalidated"

    async def test_logout_removes_session(self, session_store, wallet_address):
        """Test logged-out session is no longer found."""
        created = await session_store.create(wallet_address)

        await Logout(session_store).execute(created.session_id)

        status = await session_store.get_status(created.session_id)
        assert status.status == AuthStatus.NOT_FOUND


class TestSweepExpiredSessions:
    """Unit tests for SweepExpiredSessions."""

    async def test_sweep_reports_removed_count(
        self, session_store, wallet_address, clock
    ):
        """Test sweep returns number of expired sessions removed."""
        await session_store.create(wallet_address)
        await session_store.create(wallet_address)
        clock.advance(minutes=30)

        removed = await SweepExpiredSessions(session_store).execute()

        assert removed == 2

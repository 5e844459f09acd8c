"""
Initiate authentication use case.

Validates the claimed wallet and issues payment instructions.
"""

from typing import Optional

from douanier.application.dto.auth_dto import InitiatedAuth
from douanier.application.services.session_store import SessionStore
from douanier.domain.exceptions import ValidationError
from douanier.domain.services.i_ledger_matcher import ILedgerMatcher


class InitiateAuthentication:
    """
    Start wallet authentication.

    Flow:
    1. Require a wallet address
    2. Validate it against the ledger's address rules
    3. Create pending session with its correlation amount
    """

    def __init__(
        self,
        session_store: SessionStore,
        ledger_matcher: ILedgerMatcher,
    ):
        """Initialize use case with dependencies."""
        self._session_store = session_store
        self._ledger_matcher = ledger_matcher

    async def execute(self, wallet_address: Optional[str]) -> InitiatedAuth:
        """
        Create authentication session.

        Args:
            wallet_address: Claimed wallet address

        Returns:
            InitiatedAuth with receiver, amount and expiry

        Raises:
            ValidationError: Missing or invalid address
            ConfigurationError: Receiver address not configured
        """
        wallet_address = (wallet_address or "").strip()

        if not wallet_address:
            raise ValidationError(
                field="walletAddress",
                reason="Wallet address is required",
            )

        if not self._ledger_matcher.is_valid_address(wallet_address):
            raise ValidationError(
                field="walletAddress",
                reason="Invalid Solana wallet address",
            )

        return await self._session_store.create(wallet_address)

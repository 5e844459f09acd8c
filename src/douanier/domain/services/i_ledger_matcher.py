"""
Ledger matcher interface.

Defines how the core asks the blockchain whether a correlated payment
has appeared. Implementations perform no session state mutation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class MatchResult:
    """
    Outcome of scanning recent ledger transactions for a payment.

    `error` is an observability-only tag set when the ledger query failed;
    such a result is still `found=False` and must be treated as
    "not found this round".
    """

    found: bool
    signature: Optional[str] = None
    received_amount: Optional[Decimal] = None
    block_time: Optional[int] = None
    slot: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def not_found(cls, error: Optional[str] = None) -> "MatchResult":
        """Build a negative result, optionally tagged with a ledger error."""
        return cls(found=False, error=error)


@dataclass
class VerificationResult:
    """Outcome of checking a specific transaction against a session."""

    verified: bool
    signature: Optional[str] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    amount: Optional[Decimal] = None
    block_time: Optional[int] = None
    slot: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def failed(
        cls, error: str, amount: Optional[Decimal] = None
    ) -> "VerificationResult":
        """Build a failed verification carrying its reason."""
        return cls(verified=False, error=error, amount=amount)

    @classmethod
    def from_match(cls, match: MatchResult) -> "VerificationResult":
        """Convert a positive scan match into a verification result."""
        return cls(
            verified=True,
            signature=match.signature,
            amount=match.received_amount,
            block_time=match.block_time,
            slot=match.slot,
        )


class ILedgerMatcher(ABC):
    """
    Abstract interface for correlating payments on the ledger.

    Queries the blockchain for transfers from an expected sender to the
    receiver address with an amount matching the session's correlation key.
    """

    @abstractmethod
    async def find_match(
        self,
        expected_sender: str,
        receiver_address: str,
        expected_amount: Decimal,
    ) -> MatchResult:
        """
        Scan the most recent receiver transactions for a matching transfer.

        Args:
            expected_sender: Wallet address that must be the first signer
            receiver_address: Address receiving the verification payment
            expected_amount: Correlation amount in SOL

        Returns:
            MatchResult. Never raises for "no match"; ledger failures are
            reported through MatchResult.error.
        """

    @abstractmethod
    async def verify_signature(
        self,
        signature: str,
        from_address: str,
        to_address: str,
        expected_amount: Decimal,
    ) -> VerificationResult:
        """
        Verify a client-submitted transaction signature.

        Args:
            signature: Transaction signature claimed by the client
            from_address: Expected sender address
            to_address: Expected receiver address
            expected_amount: Correlation amount in SOL

        Returns:
            VerificationResult with the failure reason when not verified
        """

    @abstractmethod
    def is_valid_address(self, address: str) -> bool:
        """Check if address is a valid wallet address on this ledger."""

    @abstractmethod
    async def check_connection(self) -> str:
        """
        Check ledger connectivity.

        Returns:
            Ledger node version string

        Raises:
            LedgerUnavailableError: If ledger is unreachable
        """

    async def close(self) -> None:
        """Close network resources (no-op by default)."""

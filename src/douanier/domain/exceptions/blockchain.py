"""
Blockchain-related exceptions.

Defines exceptions raised while querying the Solana ledger.
"""

from typing import Optional

from douanier.domain.exceptions.base import DouanierException


class BlockchainError(DouanierException):
    """Base exception for ledger operations."""


class LedgerUnavailableError(BlockchainError):
    """
    Raised when the ledger cannot be reached (network, timeout, open circuit).

    Treated as transient: a poll that hits it stays pending.
    """

    def __init__(self, message: str, method: Optional[str] = None):
        """
        Initialize ledger unavailable error.

        Args:
            message: Error message
            method: RPC method that failed, if known
        """
        super().__init__(message, code="LEDGER_UNAVAILABLE")
        self.method = method


class LedgerRPCError(BlockchainError):
    """Raised when the RPC node answers with a JSON-RPC error object."""

    def __init__(self, method: str, error: dict):
        """
        Initialize RPC error.

        Args:
            method: RPC method that was called
            error: JSON-RPC error payload
        """
        message = error.get("message", str(error))
        super().__init__(f"RPC error in {method}: {message}", code="LEDGER_RPC_ERROR")
        self.method = method
        self.error = error

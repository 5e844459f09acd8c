"""
Domain exceptions package.
"""

# Base exceptions
from douanier.domain.exceptions.base import (
    ConfigurationError,
    DouanierException,
    ValidationError,
)

# Blockchain exceptions
from douanier.domain.exceptions.blockchain import (
    BlockchainError,
    LedgerRPCError,
    LedgerUnavailableError,
)

# Session exceptions
from douanier.domain.exceptions.session import (
    SessionError,
    SessionExpiredError,
    SessionNotFoundError,
    VerificationFailedError,
)

__all__ = [
    # Base
    "DouanierException",
    "ValidationError",
    "ConfigurationError",
    # Session
    "SessionError",
    "SessionNotFoundError",
    "SessionExpiredError",
    "VerificationFailedError",
    # Blockchain
    "BlockchainError",
    "LedgerUnavailableError",
    "LedgerRPCError",
]

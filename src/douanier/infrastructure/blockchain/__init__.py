"""Solana blockchain integration."""

from douanier.infrastructure.blockchain.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
    CircuitState,
)
from douanier.infrastructure.blockchain.solana_ledger_matcher import (
    SolanaLedgerMatcher,
)

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitState",
    "SolanaLedgerMatcher",
]

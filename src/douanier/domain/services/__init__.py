"""Domain service interfaces."""

from douanier.domain.services.i_ledger_matcher import (
    ILedgerMatcher,
    MatchResult,
    VerificationResult,
)

__all__ = ["ILedgerMatcher", "MatchResult", "VerificationResult"]

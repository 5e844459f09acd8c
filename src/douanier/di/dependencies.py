"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
Tests replace get_session_store / get_ledger_matcher through
app.dependency_overrides; use cases pick up the overrides.
"""

from fastapi import Depends

from douanier.application.services.session_store import SessionStore
from douanier.application.use_cases.check_auth_status import CheckAuthStatus
from douanier.application.use_cases.initiate_authentication import (
    InitiateAuthentication,
)
from douanier.application.use_cases.logout import Logout
from douanier.application.use_cases.submit_transaction_signature import (
    SubmitTransactionSignature,
)
from douanier.di.container import get_container
from douanier.domain.services.i_ledger_matcher import ILedgerMatcher
from douanier.infrastructure.monitoring.health_check import DouanierHealthCheck

# ================================================================
# Service Dependencies
# ================================================================


def get_session_store() -> SessionStore:
    """Get SessionStore dependency."""
    return get_container().session_store


def get_ledger_matcher() -> ILedgerMatcher:
    """Get ledger matcher dependency."""
    return get_container().ledger_matcher


def get_health_check(
    session_store: SessionStore = Depends(get_session_store),
    ledger_matcher: ILedgerMatcher = Depends(get_ledger_matcher),
) -> DouanierHealthCheck:
    """Get health check dependency."""
    settings = get_container().settings
    return DouanierHealthCheck(
        session_store=session_store,
        ledger_matcher=ledger_matcher,
        version=settings.APP_VERSION,
        network=settings.SOLANA_NETWORK,
    )


# ================================================================
# Use Case Dependencies
# ================================================================


def get_initiate_authentication(
    session_store: SessionStore = Depends(get_session_store),
    ledger_matcher: ILedgerMatcher = Depends(get_ledger_matcher),
) -> InitiateAuthentication:
    """Get InitiateAuthentication use case dependency."""
    return InitiateAuthentication(
        session_store=session_store,
        ledger_matcher=ledger_matcher,
    )


def get_check_auth_status(
    session_store: SessionStore = Depends(get_session_store),
    ledger_matcher: ILedgerMatcher = Depends(get_ledger_matcher),
) -> CheckAuthStatus:
    """Get CheckAuthStatus use case dependency."""
    return CheckAuthStatus(
        session_store=session_store,
        ledger_matcher=ledger_matcher,
    )


def get_submit_transaction_signature(
    session_store: SessionStore = Depends(get_session_store),
    ledger_matcher: ILedgerMatcher = Depends(get_ledger_matcher),
) -> SubmitTransactionSignature:
    """Get SubmitTransactionSignature use case dependency."""
    return SubmitTransactionSignature(
        session_store=session_store,
        ledger_matcher=ledger_matcher,
    )


def get_logout(
    session_store: SessionStore = Depends(get_session_store),
) -> Logout:
    """Get Logout use case dependency."""
    return Logout(session_store=session_store)

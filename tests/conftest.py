"""
Test fixtures and configuration.
"""

import os

os.environ.setdefault("ENV", "test")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

from douanier.application.services.session_store import SessionStore  # noqa: E402
from douanier.domain.services.i_ledger_matcher import (  # noqa: E402
    ILedgerMatcher,
    MatchResult,
)
from douanier.domain.value_objects.correlation_amount import (  # noqa: E402
    CorrelationPolicy,
)
from douanier.infrastructure.persistence.in_memory_auth_request_repository import (  # noqa: E402, E501
    InMemoryAuthRequestRepository,
)
from tests.helpers import (  # noqa: E402
    BASE_AMOUNT,
    SESSION_TIMEOUT,
    FakeClock,
    new_wallet_address,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def receiver_address() -> str:
    return new_wallet_address()


@pytest.fixture
def wallet_address() -> str:
    return new_wallet_address()


@pytest.fixture
def repository() -> InMemoryAuthRequestRepository:
    return InMemoryAuthRequestRepository()


@pytest.fixture
def correlation_policy() -> CorrelationPolicy:
    return CorrelationPolicy(base_amount=BASE_AMOUNT)


@pytest.fixture
def session_store(repository, receiver_address, correlation_policy, clock):
    return SessionStore(
        repository=repository,
        receiver_address=receiver_address,
        correlation_policy=correlation_policy,
        session_timeout=SESSION_TIMEOUT,
        clock=clock,
    )


@pytest.fixture
def ledger_matcher() -> MagicMock:
    """
    Ledger matcher mock.

    Async interface methods become AsyncMocks via spec=ILedgerMatcher. Defaults:
    every address is valid and no payment is found.
    """
    matcher = MagicMock(spec=ILedgerMatcher)
    matcher.is_valid_address.return_value = True
    matcher.find_match.return_value = MatchResult.not_found()
    return matcher

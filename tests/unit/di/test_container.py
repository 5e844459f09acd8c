"""
Unit tests for the dependency injection container.
"""

from decimal import Decimal

import pytest

from douanier.config.settings import Settings
from douanier.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    reset_container,
)
from douanier.domain.services.i_ledger_matcher import VerificationResult
from douanier.infrastructure.blockchain import SolanaLedgerMatcher
from douanier.infrastructure.persistence import (
    InMemoryAuthRequestRepository,
    RedisAuthRequestRepository,
)


@pytest.fixture
def settings(receiver_address):
    return Settings(
        _env_file=None,
        ENV="test",
        RECEIVER_WALLET_ADDRESS=receiver_address,
        VERIFICATION_AMOUNT=Decimal("0.00002"),
        SESSION_EXPIRY_MINUTES=5,
    )


@pytest.fixture(autouse=True)
def clean_container():
    yield
    reset_container()


class TestDIContainer:
    """Test DIContainer wiring."""

    def test_memory_backend_by_default(self, settings):
        """Test memory repository is the default backend."""
        container = DIContainer(settings)

        assert isinstance(container.repository, InMemoryAuthRequestRepository)

    def test_redis_backend_selected(self, settings):
        """Test redis backend builds a Redis repository without connecting."""
        settings.SESSION_STORE_BACKEND = "redis"
        container = DIContainer(settings)

        assert isinstance(container.repository, RedisAuthRequestRepository)

    def test_singletons(self, settings):
        """Test services are built once per container."""
        container = DIContainer(settings)

        assert container.session_store is container.session_store
        assert container.ledger_matcher is container.ledger_matcher
        assert isinstance(container.ledger_matcher, SolanaLedgerMatcher)

    async def test_session_store_uses_settings(
        self, settings, receiver_address, wallet_address
    ):
        """Test session store is configured from settings."""
        store = DIContainer(settings).session_store

        initiated = await store.create(wallet_address)

        assert store.receiver_address == receiver_address
        assert initiated.receiver_address == receiver_address
        assert Decimal("0.00002") <= initiated.expected_amount < Decimal("0.00003")

    async def test_verified_ttl_from_settings(self, settings, wallet_address, clock):
        """Test VERIFIED_SESSION_TTL_MINUTES reaches the session store sweep."""
        settings.VERIFIED_SESSION_TTL_MINUTES = 30
        store = DIContainer(settings).session_store
        store._clock = clock
        created = await store.create(wallet_address)
        await store.verify(
            created.session_id,
            "5sig",
            VerificationResult(verified=True, signature="5sig"),
        )
        clock.advance(minutes=31)

        await store.sweep()

        assert await store.counts() == {"pending": 0, "verified": 0}

    async def test_shutdown_closes_services(self, settings):
        """Test shutdown stops sweeper and closes matcher."""
        container = DIContainer(settings)
        container.sweeper.start()

        await container.shutdown()

        assert not container.sweeper.is_running


class TestGlobalContainer:
    """Test module-level container helpers."""

    async def test_initialize_with_settings_replaces_container(self, settings):
        """Test initialize_container installs a fresh container."""
        old = get_container()

        container = await initialize_container(settings)

        assert container is not old
        assert get_container() is container
        assert container.settings is settings

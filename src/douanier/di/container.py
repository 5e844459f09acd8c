"""
Dependency Injection Container for Douanier.

Manages all service instances and their dependencies.
"""

from datetime import timedelta
from typing import Optional

from douanier.application.services.session_store import SessionStore
from douanier.application.use_cases.sweep_expired_sessions import (
    SweepExpiredSessions,
)
from douanier.config.settings import Settings, get_settings
from douanier.domain.repositories.i_auth_request_repository import (
    IAuthRequestRepository,
)
from douanier.domain.services.i_ledger_matcher import ILedgerMatcher
from douanier.domain.value_objects.correlation_amount import CorrelationPolicy
from douanier.infrastructure.blockchain.circuit_breaker import CircuitBreaker
from douanier.infrastructure.blockchain.solana_ledger_matcher import (
    TRANSIENT_ERRORS,
    SolanaLedgerMatcher,
)
from douanier.infrastructure.persistence.in_memory_auth_request_repository import (  # noqa: E501
    InMemoryAuthRequestRepository,
)
from douanier.infrastructure.persistence.redis_auth_request_repository import (
    RedisAuthRequestRepository,
)
from douanier.infrastructure.tasks.session_sweeper import SessionSweeper


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of the store, the ledger client and the
    background sweeper. Request-scoped use cases are built in di.dependencies.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize container with None instances."""
        self._settings = settings

        # Infrastructure
        self._repository: Optional[IAuthRequestRepository] = None
        self._ledger_matcher: Optional[ILedgerMatcher] = None
        self._sweeper: Optional[SessionSweeper] = None

        # Application services
        self._session_store: Optional[SessionStore] = None

    @property
    def settings(self) -> Settings:
        """Settings this container was built from."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    async def initialize(self) -> None:
        """Initialize services and establish connections."""
        if isinstance(self.repository, RedisAuthRequestRepository):
            await self.repository.connect()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._sweeper:
            await self._sweeper.stop()
        if self._ledger_matcher:
            await self._ledger_matcher.close()
        if self._repository:
            await self._repository.close()

    # ================================================================
    # Infrastructure Getters
    # ================================================================

    @property
    def repository(self) -> IAuthRequestRepository:
        """Get auth request repository for the configured backend."""
        if self._repository is None:
            if self.settings.SESSION_STORE_BACKEND == "redis":
                self._repository = RedisAuthRequestRepository(
                    host=self.settings.REDIS_HOST,
                    port=self.settings.REDIS_PORT,
                    db=self.settings.REDIS_DB,
                    password=self.settings.REDIS_PASSWORD,
                    key_prefix=self.settings.REDIS_KEY_PREFIX,
                )
            else:
                self._repository = InMemoryAuthRequestRepository()
        return self._repository

    @property
    def ledger_matcher(self) -> ILedgerMatcher:
        """Get Solana ledger matcher instance."""
        if self._ledger_matcher is None:
            self._ledger_matcher = SolanaLedgerMatcher(
                rpc_url=self.settings.SOLANA_RPC_URL,
                commitment=self.settings.SOLANA_COMMITMENT,
                scan_limit=self.settings.LEDGER_SCAN_LIMIT,
                match_tolerance=self.settings.MATCH_TOLERANCE,
                signature_tolerance=self.settings.SIGNATURE_TOLERANCE,
                total_timeout=self.settings.RPC_TOTAL_TIMEOUT,
                connect_timeout=self.settings.RPC_CONNECT_TIMEOUT,
                max_retries=self.settings.RETRY_MAX_ATTEMPTS,
                circuit_breaker=CircuitBreaker(
                    name="solana_rpc",
                    failure_threshold=self.settings.CB_FAILURE_THRESHOLD,
                    recovery_timeout=self.settings.CB_TIMEOUT_SECONDS,
                    expected_exception=TRANSIENT_ERRORS,
                ),
            )
        return self._ledger_matcher

    @property
    def sweeper(self) -> SessionSweeper:
        """Get background session sweeper."""
        if self._sweeper is None:
            self._sweeper = SessionSweeper(
                use_case=self.get_sweep_expired_sessions(),
                interval=self.settings.SWEEP_INTERVAL_SECONDS,
            )
        return self._sweeper

    # ================================================================
    # Application Service Getters
    # ================================================================

    @property
    def session_store(self) -> SessionStore:
        """Get session store (single lock owner for the process)."""
        if self._session_store is None:
            self._session_store = SessionStore(
                repository=self.repository,
                receiver_address=self.settings.RECEIVER_WALLET_ADDRESS,
                correlation_policy=CorrelationPolicy(
                    base_amount=self.settings.VERIFICATION_AMOUNT,
                    bucket_size=self.settings.AMOUNT_BUCKET_SIZE,
                    precision=self.settings.AMOUNT_PRECISION,
                ),
                session_timeout=timedelta(
                    minutes=self.settings.SESSION_EXPIRY_MINUTES
                ),
                verified_ttl=(
                    timedelta(minutes=self.settings.VERIFIED_SESSION_TTL_MINUTES)
                    if self.settings.VERIFIED_SESSION_TTL_MINUTES
                    else None
                ),
            )
        return self._session_store

    # ================================================================
    # Use Case Getters
    # ================================================================

    def get_sweep_expired_sessions(self) -> SweepExpiredSessions:
        """Get sweep expired sessions use case."""
        return SweepExpiredSessions(session_store=self.session_store)


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def initialize_container(settings: Optional[Settings] = None) -> DIContainer:
    """
    Initialize and return DI container.

    Args:
        settings: Settings to build the container from (replaces any
            existing container)
    """
    global _container
    if settings is not None:
        _container = DIContainer(settings)
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()


def reset_container() -> None:
    """Drop the global container (for testing)."""
    global _container
    _container = None

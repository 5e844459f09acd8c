"""Auth request persistence backends."""

from douanier.infrastructure.persistence.in_memory_auth_request_repository import (  # noqa: E501
    InMemoryAuthRequestRepository,
)
from douanier.infrastructure.persistence.redis_auth_request_repository import (
    RedisAuthRequestRepository,
)

__all__ = ["InMemoryAuthRequestRepository", "RedisAuthRequestRepository"]

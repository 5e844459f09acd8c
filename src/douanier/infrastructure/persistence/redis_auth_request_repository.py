"""Redis auth request repository implementation."""

import json
from datetime import datetime
from typing import Dict, List, Optional

import redis.asyncio as aioredis

from douanier.domain.entities.auth_request import AuthRequest
from douanier.domain.repositories.i_auth_request_repository import (
    IAuthRequestRepository,
)
from douanier.domain.value_objects.timestamp import Clock, utc_now

# Pending keys outlive expires_at a little so lazy expiry still reports
# "expired" once before the key vanishes
PENDING_TTL_GRACE_SECONDS = 60


class RedisAuthRequestRepository(IAuthRequestRepository):
    """
    Durable storage using async redis library.

    Layout:
        {prefix}:pending:{session_id}  -> JSON, TTL past expires_at
        {prefix}:verified:{session_id} -> JSON, no TTL
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        key_prefix: str = "douanier",
        clock: Clock = utc_now,
    ):
        """
        Initialize Redis repository configuration.

        Args:
            host: Redis server host
            port: Redis server port
            db: Redis database number (0-15)
            password: Redis password (None if no auth)
            key_prefix: Namespace for all keys
            clock: Source of aware UTC time for TTL computation
        """
        self.host = host
        self.port = port
        self.db = db
        self.password = password if password else None
        self.key_prefix = key_prefix
        self._clock = clock
        self._client: Optional[aioredis.Redis] = None

    async def connect(self) -> None:
        """Establish connection to Redis server."""
        if self._client is not None:
            return

        self._client = aioredis.from_url(
            f"redis://{self.host}:{self.port}/{self.db}",
            password=self.password,
            encoding="utf-8",
            decode_responses=True,
        )

    async def close(self) -> None:
        """Close connection to Redis server."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def ping(self) -> bool:
        """
        Check if Redis server is reachable.

        Returns:
            True if server responds
        """
        client = await self._get_client()
        try:
            return bool(await client.ping())
        except aioredis.RedisError:
            return False

    async def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            await self.connect()
        return self._client

    def _pending_key(self, session_id: str) -> str:
        return f"{self.key_prefix}:pending:{session_id}"

    def _verified_key(self, session_id: str) -> str:
        return f"{self.key_prefix}:verified:{session_id}"

    def _pending_ttl(self, expires_at: datetime) -> int:
        remaining = int((expires_at - self._clock()).total_seconds())
        return max(remaining, 0) + PENDING_TTL_GRACE_SECONDS

    @staticmethod
    def _decode(raw: Optional[str]) -> Optional[AuthRequest]:
        if raw is None:
            return None
        return AuthRequest.from_dict(json.loads(raw))

    async def add_pending(self, request: AuthRequest) -> None:
        client = await self._get_client()
        await client.set(
            self._pending_key(request.session_id),
            json.dumps(request.to_dict()),
            ex=self._pending_ttl(request.expires_at),
        )

    async def get_pending(self, session_id: str) -> Optional[AuthRequest]:
        client = await self._get_client()
        return self._decode(await client.get(self._pending_key(session_id)))

    async def get_verified(self, session_id: str) -> Optional[AuthRequest]:
        client = await self._get_client()
        return self._decode(await client.get(self._verified_key(session_id)))

    async def exists(self, session_id: str) -> bool:
        client = await self._get_client()
        found = await client.exists(
            self._pending_key(session_id),
            self._verified_key(session_id),
        )
        return found > 0

    async def move_to_verified(self, request: AuthRequest) -> None:
        """Write verified record and drop pending key in one MULTI/EXEC."""
        client = await self._get_client()
        async with client.pipeline(transaction=True) as pipe:
            pipe.set(
                self._verified_key(request.session_id),
                json.dumps(request.to_dict()),
            )
            pipe.delete(self._pending_key(request.session_id))
            await pipe.execute()

    async def delete_pending(self, session_id: str) -> bool:
        client = await self._get_client()
        return await client.delete(self._pending_key(session_id)) > 0

    async def delete(self, session_id: str) -> bool:
        client = await self._get_client()
        removed = await client.delete(
            self._pending_key(session_id),
            self._verified_key(session_id),
        )
        return removed > 0

    async def list_pending(self) -> List[AuthRequest]:
        return await self._list(self._pending_key("*"))

    async def list_verified(self) -> List[AuthRequest]:
        return await self._list(self._verified_key("*"))

    async def _list(self, pattern: str) -> List[AuthRequest]:
        client = await self._get_client()
        keys = [key async for key in client.scan_iter(match=pattern)]
        if not keys:
            return []

        values = await client.mget(keys)
        return [self._decode(raw) for raw in values if raw is not None]

    async def count(self) -> Dict[str, int]:
        client = await self._get_client()
        pending = 0
        async for _ in client.scan_iter(match=self._pending_key("*")):
            pending += 1
        verified = 0
        async for _ in client.scan_iter(match=self._verified_key("*")):
            verified += 1
        return {"pending": pending, "verified": verified}

"""In-memory auth request repository."""

from typing import Dict, List, Optional

from douanier.domain.entities.auth_request import AuthRequest
from douanier.domain.repositories.i_auth_request_repository import (
    IAuthRequestRepository,
)


class InMemoryAuthRequestRepository(IAuthRequestRepository):
    """
    Process-local storage backed by two dicts.

    Not shared between workers. Atomicity of move_to_verified relies on
    the absence of awaits between the two dict writes.
    """

    def __init__(self):
        """Initialize empty partitions."""
        self._pending: Dict[str, AuthRequest] = {}
        self._verified: Dict[str, AuthRequest] = {}

    async def add_pending(self, request: AuthRequest) -> None:
        self._pending[request.session_id] = request

    async def get_pending(self, session_id: str) -> Optional[AuthRequest]:
        return self._pending.get(session_id)

    async def get_verified(self, session_id: str) -> Optional[AuthRequest]:
        return self._verified.get(session_id)

    async def exists(self, session_id: str) -> bool:
        return session_id in self._pending or session_id in self._verified

    async def move_to_verified(self, request: AuthRequest) -> None:
        self._verified[request.session_id] = request
        self._pending.pop(request.session_id, None)

    async def delete_pending(self, session_id: str) -> bool:
        return self._pending.pop(session_id, None) is not None

    async def delete(self, session_id: str) -> bool:
        removed_verified = self._verified.pop(session_id, None) is not None
        removed_pending = self._pending.pop(session_id, None) is not None
        return removed_verified or removed_pending

    async def list_pending(self) -> List[AuthRequest]:
        return list(self._pending.values())

    async def list_verified(self) -> List[AuthRequest]:
        return list(self._verified.values())

    async def count(self) -> Dict[str, int]:
        return {"pending": len(self._pending), "verified": len(self._verified)}

"""
Auth request repository interface.

Storage is split into two disjoint partitions: pending and verified.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from douanier.domain.entities.auth_request import AuthRequest


class IAuthRequestRepository(ABC):
    """Interface for auth request persistence operations."""

    @abstractmethod
    async def add_pending(self, request: AuthRequest) -> None:
        """
        Store a new request in the pending partition.

        Args:
            request: Pending auth request
        """

    @abstractmethod
    async def get_pending(self, session_id: str) -> Optional[AuthRequest]:
        """
        Get pending request by session id.

        Returns:
            AuthRequest if pending, None otherwise
        """

    @abstractmethod
    async def get_verified(self, session_id: str) -> Optional[AuthRequest]:
        """
        Get verified request by session id.

        Returns:
            AuthRequest if verified, None otherwise
        """

    @abstractmethod
    async def exists(self, session_id: str) -> bool:
        """Check whether session id is present in either partition."""

    @abstractmethod
    async def move_to_verified(self, request: AuthRequest) -> None:
        """
        Atomically store a verified request and remove it from pending.

        Args:
            request: Request already carrying VERIFIED status
        """

    @abstractmethod
    async def delete_pending(self, session_id: str) -> bool:
        """
        Delete request from the pending partition.

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """
        Delete session id from both partitions.

        Returns:
            True if anything was deleted
        """

    @abstractmethod
    async def list_pending(self) -> List[AuthRequest]:
        """Return a snapshot of all pending requests."""

    @abstractmethod
    async def list_verified(self) -> List[AuthRequest]:
        """Return a snapshot of all verified requests."""

    @abstractmethod
    async def count(self) -> Dict[str, int]:
        """Return sizes of both partitions as {"pending": n, "verified": m}."""

    async def close(self) -> None:
        """Release backend resources (no-op by default)."""

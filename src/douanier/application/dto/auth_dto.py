"""
Data Transfer Objects for authentication sessions.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from douanier.domain.entities.auth_request import AuthRequest, AuthStatus


@dataclass
class InitiatedAuth:
    """Payment instructions returned when a session is created."""

    session_id: str
    receiver_address: str
    expected_amount: Decimal
    expires_at: datetime
    message: str


@dataclass
class AuthStatusView:
    """
    Read view of a session.

    Which optional fields are set depends on status:
    - pending: wallet_address, expires_at, expected_amount, receiver_address
    - verified: wallet_address, signature, verified_at
    - expired / not_found: error
    """

    status: AuthStatus
    session_id: Optional[str] = None
    wallet_address: Optional[str] = None
    expires_at: Optional[datetime] = None
    expected_amount: Optional[Decimal] = None
    receiver_address: Optional[str] = None
    signature: Optional[str] = None
    verified_at: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def verified(self) -> bool:
        """Check if view describes a verified session."""
        return self.status == AuthStatus.VERIFIED

    @property
    def is_terminal(self) -> bool:
        """Verified, expired and not_found never change on their own."""
        return self.status != AuthStatus.PENDING

    @classmethod
    def pending(cls, request: AuthRequest) -> "AuthStatusView":
        return cls(
            status=AuthStatus.PENDING,
            session_id=request.session_id,
            wallet_address=request.wallet_address,
            expires_at=request.expires_at,
            expected_amount=request.expected_amount,
            receiver_address=request.receiver_address,
        )

    @classmethod
    def verified_view(cls, request: AuthRequest) -> "AuthStatusView":
        return cls(
            status=AuthStatus.VERIFIED,
            session_id=request.session_id,
            wallet_address=request.wallet_address,
            signature=request.signature,
            verified_at=request.verified_at,
        )

    @classmethod
    def expired(cls, session_id: Optional[str] = None) -> "AuthStatusView":
        return cls(
            status=AuthStatus.EXPIRED,
            session_id=session_id,
            error="Session expired",
        )

    @classmethod
    def not_found(cls, session_id: Optional[str] = None) -> "AuthStatusView":
        return cls(
            status=AuthStatus.NOT_FOUND,
            session_id=session_id,
            error="Session not found",
        )


@dataclass
class VerifyResult:
    """Result of committing a verification attempt."""

    success: bool
    session_id: str
    wallet_address: Optional[str] = None
    signature: Optional[str] = None
    verified_at: Optional[datetime] = None
    error: Optional[str] = None
    already_verified: bool = False

    @classmethod
    def committed(
        cls, request: AuthRequest, already_verified: bool = False
    ) -> "VerifyResult":
        """Successful result describing a verified request."""
        return cls(
            success=True,
            session_id=request.session_id,
            wallet_address=request.wallet_address,
            signature=request.signature,
            verified_at=request.verified_at,
            already_verified=already_verified,
        )

    def to_status_view(self) -> AuthStatusView:
        """Convert a successful result into the verified status view."""
        return AuthStatusView(
            status=AuthStatus.VERIFIED,
            session_id=self.session_id,
            wallet_address=self.wallet_address,
            signature=self.signature,
            verified_at=self.verified_at,
        )


@dataclass
class LogoutResult:
    """Result of invalidating a session."""

    success: bool = True
    message: str = "Session invalidated"

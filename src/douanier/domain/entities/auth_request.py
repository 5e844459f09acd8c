"""
AuthRequest entity - a pending or verified wallet authentication.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from douanier.domain.value_objects.timestamp import from_epoch_ms, to_epoch_ms


class AuthStatus(str, Enum):
    """
    Authentication status.

    Only PENDING and VERIFIED are ever stored. EXPIRED is computed from
    expires_at, NOT_FOUND is a response for unknown ids.
    """

    PENDING = "pending"
    VERIFIED = "verified"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


@dataclass
class AuthRequest:
    """
    Authentication request bound to a correlation amount.

    Identity fields (session id, wallet, receiver, amount, timestamps) never
    change after creation. signature and verified_at are set exactly once,
    on the transition to VERIFIED.
    """

    wallet_address: str
    receiver_address: str
    expected_amount: Decimal
    created_at: datetime
    expires_at: datetime
    session_id: str = field(default_factory=lambda: str(uuid4()))
    status: AuthStatus = AuthStatus.PENDING
    signature: Optional[str] = None
    verified_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate request data after initialization."""
        if not self.wallet_address:
            raise ValueError("Wallet address is required")

        if not self.receiver_address:
            raise ValueError("Receiver address is required")

        if self.expected_amount <= 0:
            raise ValueError("Expected amount must be positive")

        if self.expires_at < self.created_at:
            raise ValueError("Expiry cannot precede creation")

    @property
    def is_verified(self) -> bool:
        """Check if request has been verified."""
        return self.status == AuthStatus.VERIFIED

    def is_expired(self, now: datetime) -> bool:
        """A request expires strictly after its expires_at instant."""
        return now > self.expires_at

    def verified_copy(self, signature: str, verified_at: datetime) -> "AuthRequest":
        """
        Return a verified copy of this pending request.

        The original instance is left untouched so a failed commit cannot
        leave a half-verified object in the pending partition.

        Raises:
            ValueError: If request is already verified or signature is empty
        """
        if self.is_verified:
            raise ValueError(f"Session {self.session_id} is already verified")

        if not signature:
            raise ValueError("Signature is required to verify a session")

        return replace(
            self,
            status=AuthStatus.VERIFIED,
            signature=signature,
            verified_at=verified_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to a JSON-safe dictionary."""
        return {
            "session_id": self.session_id,
            "wallet_address": self.wallet_address,
            "receiver_address": self.receiver_address,
            "expected_amount": str(self.expected_amount),
            "status": self.status.value,
            "created_at": to_epoch_ms(self.created_at),
            "expires_at": to_epoch_ms(self.expires_at),
            "signature": self.signature,
            "verified_at": (
                to_epoch_ms(self.verified_at) if self.verified_at else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthRequest":
        """Rebuild entity from the output of to_dict()."""
        verified_at = data.get("verified_at")
        return cls(
            session_id=data["session_id"],
            wallet_address=data["wallet_address"],
            receiver_address=data["receiver_address"],
            expected_amount=Decimal(data["expected_amount"]),
            status=AuthStatus(data["status"]),
            created_at=from_epoch_ms(data["created_at"]),
            expires_at=from_epoch_ms(data["expires_at"]),
            signature=data.get("signature"),
            verified_at=from_epoch_ms(verified_at) if verified_at else None,
        )

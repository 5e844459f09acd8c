"""
Authentication API schemas.

JSON bodies use camelCase keys; timestamps are epoch milliseconds.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from douanier.application.dto.auth_dto import (
    AuthStatusView,
    InitiatedAuth,
    VerifyResult,
)
from douanier.domain.value_objects.timestamp import to_epoch_ms


class CamelModel(BaseModel):
    """Base schema serializing snake_case fields as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ================================================================
# Initiate Schemas
# ================================================================


class InitiateAuthRequest(CamelModel):
    """Request to start wallet verification."""

    # Optional so a missing address reaches the use case and gets the
    # domain error body instead of a 422
    wallet_address: Optional[str] = Field(
        None,
        description="Solana wallet address to verify",
    )


class InitiateAuthResponse(CamelModel):
    """Payment instructions for the client."""

    success: bool = Field(default=True)
    session_id: str = Field(..., description="Session identifier")
    receiver_address: str = Field(..., description="Wallet to pay")
    expected_amount: float = Field(..., description="Exact amount in SOL")
    expires_at: int = Field(..., description="Expiry (epoch ms)")
    message: str = Field(..., description="Human-readable instructions")

    @classmethod
    def from_dto(cls, dto: InitiatedAuth) -> "InitiateAuthResponse":
        return cls(
            session_id=dto.session_id,
            receiver_address=dto.receiver_address,
            expected_amount=float(dto.expected_amount),
            expires_at=to_epoch_ms(dto.expires_at),
            message=dto.message,
        )


# ================================================================
# Status Schemas
# ================================================================


class AuthStatusResponse(CamelModel):
    """Session status as seen by a polling client."""

    status: str = Field(..., description="pending, verified, expired, not_found")
    verified: bool = Field(..., description="Session is verified")
    session_id: Optional[str] = Field(None)
    wallet_address: Optional[str] = Field(None)
    expires_at: Optional[int] = Field(None, description="Expiry (epoch ms)")
    expected_amount: Optional[float] = Field(None, description="Amount in SOL")
    receiver_address: Optional[str] = Field(None)
    signature: Optional[str] = Field(None, description="Payment transaction")
    verified_at: Optional[int] = Field(None, description="Verified (epoch ms)")
    error: Optional[str] = Field(None)

    @classmethod
    def from_view(cls, view: AuthStatusView) -> "AuthStatusResponse":
        return cls(**_view_fields(view))


# ================================================================
# Verify Schemas
# ================================================================


class VerifyAuthRequest(CamelModel):
    """Request to verify a session, optionally naming the transaction."""

    session_id: Optional[str] = Field(None, description="Session identifier")
    signature: Optional[str] = Field(
        None,
        description="Payment transaction signature (base58)",
    )


class VerifyAuthResponse(CamelModel):
    """Verification outcome or current status when nothing was submitted."""

    success: bool = Field(..., description="Session is verified")
    message: Optional[str] = Field(None)
    status: Optional[str] = Field(None)
    verified: Optional[bool] = Field(None)
    session_id: Optional[str] = Field(None)
    wallet_address: Optional[str] = Field(None)
    expires_at: Optional[int] = Field(None, description="Expiry (epoch ms)")
    expected_amount: Optional[float] = Field(None, description="Amount in SOL")
    receiver_address: Optional[str] = Field(None)
    signature: Optional[str] = Field(None)
    verified_at: Optional[int] = Field(None, description="Verified (epoch ms)")
    error: Optional[str] = Field(None)

    @classmethod
    def from_result(
        cls, result: Union[VerifyResult, AuthStatusView]
    ) -> "VerifyAuthResponse":
        if isinstance(result, AuthStatusView):
            return cls(success=False, **_view_fields(result))

        if result.already_verified:
            return cls(
                success=True,
                message="Already verified",
                **_view_fields(result.to_status_view()),
            )

        return cls(
            success=result.success,
            session_id=result.session_id,
            wallet_address=result.wallet_address,
            signature=result.signature,
            verified_at=_epoch_ms_or_none(result.verified_at),
            error=result.error,
        )


# ================================================================
# Logout Schemas
# ================================================================


class LogoutRequest(CamelModel):
    """Request to invalidate a session."""

    session_id: Optional[str] = Field(None, description="Session identifier")


class LogoutResponse(CamelModel):
    """Logout acknowledgement."""

    success: bool = Field(default=True)
    message: str = Field(default="Session invalidated")


# ================================================================
# Helpers
# ================================================================


def _epoch_ms_or_none(value):
    return to_epoch_ms(value) if value is not None else None


def _view_fields(view: AuthStatusView) -> dict:
    return {
        "status": view.status.value,
        "verified": view.verified,
        "session_id": view.session_id,
        "wallet_address": view.wallet_address,
        "expires_at": _epoch_ms_or_none(view.expires_at),
        "expected_amount": (
            float(view.expected_amount) if view.expected_amount is not None else None
        ),
        "receiver_address": view.receiver_address,
        "signature": view.signature,
        "verified_at": _epoch_ms_or_none(view.verified_at),
        "error": view.error,
    }

"""API request and response schemas."""

from douanier.presentation.schemas.auth_schemas import (
    AuthStatusResponse,
    InitiateAuthRequest,
    InitiateAuthResponse,
    LogoutRequest,
    LogoutResponse,
    VerifyAuthRequest,
    VerifyAuthResponse,
)

__all__ = [
    "AuthStatusResponse",
    "InitiateAuthRequest",
    "InitiateAuthResponse",
    "LogoutRequest",
    "LogoutResponse",
    "VerifyAuthRequest",
    "VerifyAuthResponse",
]

"""Application DTOs."""

from douanier.application.dto.auth_dto import (
    AuthStatusView,
    InitiatedAuth,
    LogoutResult,
    VerifyResult,
)

__all__ = [
    "AuthStatusView",
    "InitiatedAuth",
    "LogoutResult",
    "VerifyResult",
]

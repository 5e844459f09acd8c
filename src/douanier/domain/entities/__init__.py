"""Domain entities."""

from douanier.domain.entities.auth_request import AuthRequest, AuthStatus

__all__ = ["AuthRequest", "AuthStatus"]

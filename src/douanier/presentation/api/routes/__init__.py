"""API routes."""

from douanier.presentation.api.routes import auth, health

__all__ = ["auth", "health"]

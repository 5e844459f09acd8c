"""Application services."""

from douanier.application.services.session_store import SessionStore

__all__ = ["SessionStore"]

"""Domain repository interfaces."""

from douanier.domain.repositories.i_auth_request_repository import (
    IAuthRequestRepository,
)

__all__ = ["IAuthRequestRepository"]

"""
API middleware for Douanier.
"""

from douanier.presentation.api.middleware.error_handler import (
    douanier_exception_handler,
    request_validation_exception_handler,
)
from douanier.presentation.api.middleware.metrics_middleware import (
    MetricsMiddleware,
)
from douanier.presentation.api.middleware.request_id_middleware import (
    RequestIDMiddleware,
)

__all__ = [
    "MetricsMiddleware",
    "RequestIDMiddleware",
    "douanier_exception_handler",
    "request_validation_exception_handler",
]

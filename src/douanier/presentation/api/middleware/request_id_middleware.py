"""
Request ID middleware for request tracking.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from douanier.infrastructure.monitoring.logger import set_request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to generate and track request IDs.

    Reuses the caller's X-Request-ID when present and echoes it back, so
    every log line of a request carries the same id.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_id(request.headers.get("X-Request-ID"))

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

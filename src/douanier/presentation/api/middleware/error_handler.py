"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from douanier.domain.exceptions import DouanierException
from douanier.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

STATUS_CODE_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "SESSION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SESSION_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "VERIFICATION_FAILED": status.HTTP_400_BAD_REQUEST,
    "LEDGER_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "LEDGER_RPC_ERROR": status.HTTP_502_BAD_GATEWAY,
    "CONFIGURATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def douanier_exception_handler(
    request: Request, exc: DouanierException
) -> JSONResponse:
    """
    Handle Douanier domain exceptions.

    Converts domain exceptions to appropriate HTTP responses.
    """
    status_code = STATUS_CODE_MAP.get(
        exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    if status_code >= 500:
        logger.error(
            f"{exc.code} on {request.method} {request.url.path}: {exc.message}"
        )

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": exc.message,
            "code": exc.code,
        },
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies.

    Missing bodies and wrongly typed fields get the same 400 body as
    domain validation errors instead of FastAPI's default 422.
    """
    message = "Invalid request body"
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        if field:
            message = f"Invalid {field}: {first.get('msg')}"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": message,
            "code": "VALIDATION_ERROR",
        },
    )

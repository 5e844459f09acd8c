"""
Authentication API routes.

Wallet ownership is proven by paying a session-specific amount to the
receiver wallet:
- POST /auth/initiate - Get payment instructions
- GET /auth/status/{session_id} - Poll; detects the payment on-chain
- POST /auth/verify - Optionally submit the payment signature
- POST /auth/logout - Invalidate session
"""

from fastapi import APIRouter, Depends, status

from douanier.application.use_cases.check_auth_status import CheckAuthStatus
from douanier.application.use_cases.initiate_authentication import (
    InitiateAuthentication,
)
from douanier.application.use_cases.logout import Logout
from douanier.application.use_cases.submit_transaction_signature import (
    SubmitTransactionSignature,
)
from douanier.di.dependencies import (
    get_check_auth_status,
    get_initiate_authentication,
    get_logout,
    get_submit_transaction_signature,
)
from douanier.presentation.schemas.auth_schemas import (
    AuthStatusResponse,
    InitiateAuthRequest,
    InitiateAuthResponse,
    LogoutRequest,
    LogoutResponse,
    VerifyAuthRequest,
    VerifyAuthResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/initiate",
    response_model=InitiateAuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Start wallet verification",
)
async def initiate(
    request: InitiateAuthRequest,
    use_case: InitiateAuthentication = Depends(get_initiate_authentication),
) -> InitiateAuthResponse:
    """
    Create a pending session and return payment instructions.

    Raises:
        400: Missing or invalid wallet address
    """
    result = await use_case.execute(request.wallet_address)
    return InitiateAuthResponse.from_dto(result)


@router.post(
    "/verify",
    response_model=VerifyAuthResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Verify session by transaction signature",
)
async def verify(
    request: VerifyAuthRequest,
    use_case: SubmitTransactionSignature = Depends(get_submit_transaction_signature),
) -> VerifyAuthResponse:
    """
    Verify a session against a named transaction.

    Without a signature, returns the current pending status with
    success=false.

    Raises:
        400: Missing session id, expired session or failed verification
        404: Unknown session
    """
    result = await use_case.execute(request.session_id, request.signature)
    return VerifyAuthResponse.from_result(result)


@router.get(
    "/status/{session_id}",
    response_model=AuthStatusResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Poll session status",
)
async def get_status(
    session_id: str,
    use_case: CheckAuthStatus = Depends(get_check_auth_status),
) -> AuthStatusResponse:
    """
    Get session status, scanning the ledger once while pending.

    Ledger failures never fail the request: the session stays pending.
    """
    result = await use_case.execute(session_id)
    return AuthStatusResponse.from_view(result)


@router.get("/status", include_in_schema=False)
@router.get("/status/", include_in_schema=False)
async def get_status_without_session_id(
    use_case: CheckAuthStatus = Depends(get_check_auth_status),
):
    """Reject polls that omit the session id."""
    await use_case.execute("")


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Invalidate session",
)
async def logout(
    request: LogoutRequest,
    use_case: Logout = Depends(get_logout),
) -> LogoutResponse:
    """
    Invalidate a session, pending or verified.

    Raises:
        400: Missing session id
    """
    result = await use_case.execute(request.session_id)
    return LogoutResponse(success=result.success, message=result.message)

"""
OTP HTTP API
============
FastAPI routes exposing code request and verification.
"""

from typing import Dict, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import structlog

from .otp import OTPAuthenticator, OTPError, OTPErrorKind

logger = structlog.get_logger(__name__)


class CodeRequest(BaseModel):
    identifier: str


class CodeRequestResponse(BaseModel):
    resend_available_at: int
    expires_at: int


class VerifyRequest(BaseModel):
    identifier: str
    code: str


class IdentityModel(BaseModel):
    id: str
    name: str
    provider: str
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class VerifyResponse(BaseModel):
    token: str
    identity: IdentityModel


# HTTP status and user-facing text for each failure kind
ERROR_RESPONSES: Dict[OTPErrorKind, tuple] = {
    OTPErrorKind.INVALID_IDENTIFIER: (422, "Enter a valid email address or phone number."),
    OTPErrorKind.RATE_LIMITED: (429, "Too many code requests. Please wait before trying again."),
    OTPErrorKind.NOT_REQUESTED: (404, "Request a code first."),
    OTPErrorKind.TOO_MANY_ATTEMPTS: (429, "Too many attempts. Please request a new code."),
    OTPErrorKind.EXPIRED: (410, "This code has expired. Please request a new one."),
    OTPErrorKind.INVALID_CODE: (401, "That code is incorrect. Please try again."),
}


def error_response(error: OTPError) -> JSONResponse:
    """Map an OTP failure to a JSON response."""
    status_code, message = ERROR_RESPONSES[error.kind]
    logger.info("otp_api_error", kind=error.kind.value, status_code=status_code)
    content = {"error": error.kind.value, "message": message}
    headers = None
    if error.retry_after_ms is not None:
        headers = {"Retry-After": str(max(1, -(-error.retry_after_ms // 1000)))}
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def create_otp_router(authenticator: OTPAuthenticator, prefix: str = "/otp") -> APIRouter:
    """
    Create the OTP router.

    Args:
        authenticator: Authenticator holding the session state
        prefix: Route prefix

    Returns:
        FastAPI router with ``POST {prefix}/request`` and ``POST {prefix}/verify``
    """
    router = APIRouter(prefix=prefix, tags=["OTP"])

    @router.post("/request", response_model=CodeRequestResponse)
    async def request_code(body: CodeRequest):
        """Issue a code, or report the live one during cooldown."""
        try:
            issued = await authenticator.request_code(body.identifier)
        except OTPError as e:
            return error_response(e)
        return CodeRequestResponse(
            resend_available_at=issued.resend_available_at,
            expires_at=issued.expires_at,
        )

    @router.post("/verify", response_model=VerifyResponse)
    async def verify_code(body: VerifyRequest):
        """Verify a code and start a session."""
        try:
            result = await authenticator.verify_code(body.identifier, body.code)
        except OTPError as e:
            return error_response(e)
        return VerifyResponse(
            token=result.token,
            identity=IdentityModel(**result.identity.to_dict()),
        )

    return router

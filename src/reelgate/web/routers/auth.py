from fastapi import APIRouter
from pydantic import BaseModel, Field

from reelgate.web.deps import AppDep, OptionalSessionTokenDep, SessionTokenDep
from reelgate.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class VerifyPasswordRequest(BaseModel):
    """Password exchange request."""

    password: str | None = Field(None, description="Shared password")


class VerifyPasswordResponse(BaseModel):
    """Password exchange response."""

    success: bool = Field(True, description="Always true on success")
    token: str = Field(..., description="Session token for the Authorization Bearer header")


class PasswordResponse(BaseModel):
    """Shared password, for passing on to another viewer."""

    password: str = Field(..., description="Shared password")


class SuccessResponse(BaseModel):
    success: bool = Field(True, description="Always true on success")


class SessionStatusResponse(BaseModel):
    """Whether the presented session token is currently valid."""

    authenticated: bool = Field(..., description="True if the Bearer token is a live session")


@router.post(
    "/verify-password",
    summary="Exchange password for a session token",
    description="Verify the shared password and receive a session token valid for 24 hours.",
    operation_id="verifyPassword",
    responses={
        200: {"description": "Password accepted"},
        400: {"model": ErrorResponse, "description": "Password missing"},
        401: {"model": ErrorResponse, "description": "Incorrect password"},
    },
)
async def verify_password(app: AppDep, request: VerifyPasswordRequest | None = None) -> VerifyPasswordResponse:
    token = await app.verify_password(request.password if request else None)
    return VerifyPasswordResponse(token=token)


@router.get(
    "/get-password",
    summary="Get the shared password",
    description="Return the shared password to an authenticated viewer, e.g. to build a share link.",
    operation_id="getPassword",
    responses={
        200: {"description": "Shared password"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_password(app: AppDep, session_token: SessionTokenDep) -> PasswordResponse:
    return PasswordResponse(password=await app.get_password(session_token))


@router.post(
    "/logout",
    summary="End session",
    description="Revoke the session token together with every media token issued for it.",
    operation_id="logout",
    responses={
        200: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, session_token: SessionTokenDep) -> SuccessResponse:
    await app.logout(session_token)
    return SuccessResponse()


@router.get(
    "/session",
    summary="Check session",
    description="Report whether the Bearer token, if any, is a live session. Never fails.",
    operation_id="getSession",
)
async def get_session(app: AppDep, session_token: OptionalSessionTokenDep) -> SessionStatusResponse:
    if session_token is None:
        return SessionStatusResponse(authenticated=False)
    return SessionStatusResponse(authenticated=await app.is_session_token_valid(session_token))

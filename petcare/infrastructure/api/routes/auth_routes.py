from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from petcare.application.dtos.common_dto import ErrorResponse, SuccessResponse
from petcare.application.dtos.session_dto import (
    ProfileResponse,
    SessionResponse,
    SignInBody,
    SignUpBody,
)
from petcare.application.session_manager import SessionManager
from petcare.config import Settings
from petcare.domain.results import Failure, FailureKind
from petcare.infrastructure.api.dependencies import (
    clear_session_cookie,
    get_client_session,
    get_registry,
    get_session_manager,
    get_settings,
    require_client_session,
    set_session_cookie,
)
from petcare.infrastructure.api.sessions import ClientSession, SessionRegistry

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Invalid input or rejected by the auth provider"},
        422: {"description": "Validation Error - Invalid request format"},
    },
)

_NOT_SIGNED_IN = {401: {"model": ErrorResponse, "description": "Unauthorized - No session for this client"}}


def _raise_for(failure: Failure, *, rejected_status: int, fallback: str) -> None:
    if failure.kind is FailureKind.VALIDATION_FAILED:
        code = status.HTTP_400_BAD_REQUEST
    elif failure.kind is FailureKind.PROFILE_LOOKUP_FAILED:
        code = status.HTTP_404_NOT_FOUND
    else:
        code = rejected_status
    raise HTTPException(status_code=code, detail=failure.message or fallback)


@router.post(
    "/sign-in",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign In",
    description="""
    Verify email and password with the identity provider.

    A client without a session cookie gets its own session, returned as an HttpOnly
    `petcare_session` cookie. The session is updated by the provider's SIGNED_IN
    notification; the response is the snapshot once that notification and the
    profile lookup have been handled (or the settle timeout elapsed).
    """,
    responses={401: {"model": ErrorResponse, "description": "Unauthorized - Credentials rejected"}},
)
async def sign_in(
    body: SignInBody,
    response: Response,
    client_session: ClientSession | None = Depends(get_client_session),
    registry: SessionRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """Sign in with email and password."""
    opened = client_session is None
    if opened:
        client_session = await registry.open()
    manager = client_session.manager

    result = await manager.sign_in(body.email, body.password)
    if not result.ok:
        if opened:
            await registry.discard(client_session.id)
        _raise_for(result.failure, rejected_status=status.HTTP_401_UNAUTHORIZED, fallback="Failed to sign in")

    state = await manager.wait_until_settled(settings.session_settle_timeout)
    if opened:
        set_session_cookie(response, client_session.id, settings)
    return SessionResponse.from_state(state)


@router.post(
    "/sign-up",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Account",
    description="""
    Register a new account. The full name is stored as user metadata; the backend
    creates the member's profile and household from it. Does not sign in.

    **Request Requirements:**
    - Password must be at least 6 characters (checked before contacting the provider)
    """,
)
async def sign_up(
    body: SignUpBody,
    client_session: ClientSession | None = Depends(get_client_session),
    registry: SessionRegistry = Depends(get_registry),
):
    """Create a new account."""
    # callers without a session register through a throwaway one
    temporary = client_session is None
    if temporary:
        client_session = await registry.open()
    try:
        result = await client_session.manager.sign_up(body.email, body.password, body.full_name)
    finally:
        if temporary:
            await registry.discard(client_session.id)
    if not result.ok:
        _raise_for(result.failure, rejected_status=status.HTTP_400_BAD_REQUEST, fallback="Failed to create account")
    return {"ok": True, "message": "Account created. Please sign in."}


@router.post(
    "/sign-out",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign Out",
    description="End the caller's session and drop its session cookie.",
    responses=_NOT_SIGNED_IN,
)
async def sign_out(
    response: Response,
    client_session: ClientSession = Depends(require_client_session),
    registry: SessionRegistry = Depends(get_registry),
    settings: Settings = Depends(get_settings),
):
    """End the current session."""
    manager = client_session.manager
    result = await manager.sign_out()
    if not result.ok:
        _raise_for(result.failure, rejected_status=status.HTTP_400_BAD_REQUEST, fallback="Failed to sign out")
    state = await manager.wait_until_settled(settings.session_settle_timeout)
    await registry.discard(client_session.id)
    clear_session_cookie(response)
    return SessionResponse.from_state(state)


@router.post(
    "/profile/refresh",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Reload Profile",
    description="""
    Look the signed-in member's profile up again. Use this when the session shows an
    identity without a profile, e.g. because the profile row did not exist yet.
    """,
    responses={
        **_NOT_SIGNED_IN,
        404: {"model": ErrorResponse, "description": "Not Found - No profile for the current identity"},
    },
)
async def refresh_profile(manager: SessionManager = Depends(get_session_manager)):
    """Reload the current member's profile."""
    result = await manager.refresh_profile()
    if not result.ok:
        _raise_for(result.failure, rejected_status=status.HTTP_400_BAD_REQUEST, fallback="Profile not found")
    return ProfileResponse.from_entity(result.value)

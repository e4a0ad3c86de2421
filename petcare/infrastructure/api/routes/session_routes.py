from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from petcare.application.dtos.common_dto import ErrorResponse
from petcare.application.dtos.session_dto import DashboardResponse, SessionResponse
from petcare.domain.entities.session_state import SessionState
from petcare.infrastructure.api.dependencies import (
    get_client_session,
    require_client_session,
    require_session,
)
from petcare.infrastructure.api.sessions import ClientSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Session"])


@router.get(
    "/session",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Current Session",
    description="""
    Read the caller's identity, profile and loading flag. A client without a session
    cookie is resolved and signed out.
    """,
)
def get_session(client_session: ClientSession | None = Depends(get_client_session)):
    if client_session is None:
        return SessionResponse.from_state(SessionState(loading=False))
    return SessionResponse.from_state(client_session.manager.state)


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    status_code=status.HTTP_200_OK,
    summary="Dashboard",
    description="""
    Summary shown on the protected home view.

    - **503**: initial session check still running
    - **401**: not signed in; the `Location` header points at the login view
    """,
    responses={
        401: {"model": ErrorResponse, "description": "Unauthorized - Not signed in"},
        503: {"model": ErrorResponse, "description": "Service Unavailable - Session not determined yet"},
    },
)
async def dashboard(
    state: SessionState = Depends(require_session),
    client_session: ClientSession = Depends(require_client_session),
):
    profile = state.profile
    if profile is None:
        # lookup pending or failed; show what the identity has
        return DashboardResponse(email=state.identity.email)

    household_name = None
    try:
        household = await client_session.households.get_by_id(profile.household_id)
        household_name = household.name if household else None
    except RuntimeError as exc:
        logger.warning("Household lookup failed for %s: %s", profile.household_id, exc)

    return DashboardResponse(
        welcome_name=profile.display_name,
        name=profile.full_name or "Not set",
        email=profile.email,
        role=profile.role,
        household_id=profile.household_id,
        household_name=household_name,
    )

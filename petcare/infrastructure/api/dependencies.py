from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, Response, status

from petcare.application.session_manager import SessionManager
from petcare.config import Settings
from petcare.domain.entities.session_state import SessionState
from petcare.infrastructure.api.sessions import ClientSession, SessionRegistry
from petcare.infrastructure.auth.in_memory_identity_provider import (
    InMemoryAccounts,
    InMemoryIdentityProvider,
)
from petcare.infrastructure.auth.registration_trigger import RegistrationTrigger
from petcare.infrastructure.auth.supabase_identity_provider import SupabaseIdentityProvider
from petcare.infrastructure.database.repositories.household_repository import HouseholdRepository
from petcare.infrastructure.database.repositories.profile_repository import ProfileRepository
from petcare.infrastructure.database.supabase_client import create_supabase_client

LOGIN_PATH = "/login"
SESSION_COOKIE = "petcare_session"


@dataclass
class Services:
    """Everything one app instance shares; lives on ``app.state.services``."""

    settings: Settings
    sessions: SessionRegistry


def build_services(settings: Settings) -> Services:
    if settings.use_supabase:
        # each client gets its own Supabase client, so auth state and row-level
        # security follow that client's user
        async def open_client() -> tuple[SessionManager, HouseholdRepository]:
            client = await create_supabase_client(settings)
            manager = SessionManager(
                SupabaseIdentityProvider(client),
                ProfileRepository(client),
                min_password_length=settings.min_password_length,
            )
            return manager, HouseholdRepository(client)

    else:
        profiles = ProfileRepository(None)
        households = HouseholdRepository(None)
        accounts = InMemoryAccounts(
            on_registered=RegistrationTrigger(profiles=profiles, households=households)
        )

        async def open_client() -> tuple[SessionManager, HouseholdRepository]:
            manager = SessionManager(
                InMemoryIdentityProvider(accounts),
                profiles,
                min_password_length=settings.min_password_length,
            )
            return manager, households

    return Services(settings=settings, sessions=SessionRegistry(open_client))


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_registry(services: Annotated[Services, Depends(get_services)]) -> SessionRegistry:
    return services.sessions


def get_settings(services: Annotated[Services, Depends(get_services)]) -> Settings:
    return services.settings


def get_client_session(
    request: Request,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> ClientSession | None:
    """The caller's session, or None without a (known) session cookie."""
    return registry.get(request.cookies.get(SESSION_COOKIE))


def require_client_session(
    client_session: Annotated[ClientSession | None, Depends(get_client_session)],
) -> ClientSession:
    if client_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"Location": LOGIN_PATH},
        )
    return client_session


def get_session_manager(
    client_session: Annotated[ClientSession, Depends(require_client_session)],
) -> SessionManager:
    return client_session.manager


def require_session(
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionState:
    """Guard for protected routes.

    Answers 503 while the caller's initial check runs and 401 (pointing at the login
    view) once it resolved without an identity.
    """
    state = manager.state
    if state.loading:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Session not determined yet",
            headers={"Retry-After": "1"},
        )
    if state.identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"Location": LOGIN_PATH},
        )
    return state


def set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        httponly=True,
        samesite="lax",
        secure=settings.env == "production",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE)

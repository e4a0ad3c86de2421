from __future__ import annotations

import logging
from typing import Any

from supabase import AsyncClient

from petcare.application.notifications import Channel
from petcare.domain.entities.identity import AuthChange, AuthSession, IdentityEntity
from petcare.domain.results import FailureKind, Result

logger = logging.getLogger(__name__)


def _provider_message(exc: Exception, fallback: str) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return message or fallback


def to_identity(user: Any) -> IdentityEntity:
    return IdentityEntity(
        id=str(user.id),
        email=getattr(user, "email", None),
        metadata=dict(getattr(user, "user_metadata", None) or {}),
    )


def to_session(session: Any) -> AuthSession | None:
    if session is None or getattr(session, "user", None) is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=getattr(session, "refresh_token", None),
        expires_at=getattr(session, "expires_at", None),
        identity=to_identity(session.user),
    )


class SupabaseIdentityProvider:
    """Supabase Auth behind the identity provider port.

    Exceptions from the auth client are turned into AUTH_REJECTED results carrying the
    provider's message.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client

    async def get_current_session(self) -> Result[AuthSession | None]:
        try:
            session = await self.client.auth.get_session()
        except Exception as exc:
            return Result.fail(
                FailureKind.AUTH_REJECTED, _provider_message(exc, "Session check failed"), str(exc)
            )
        return Result.success(to_session(session))

    def subscribe_to_auth_changes(self) -> Channel[AuthChange]:
        subscription = None

        def on_close() -> None:
            if subscription is not None:
                subscription.unsubscribe()

        channel: Channel[AuthChange] = Channel(on_close=on_close)

        def on_change(event: Any, session: Any) -> None:
            logger.debug("Supabase auth event %s", event)
            channel.publish(AuthChange(event=str(event), session=to_session(session)))

        subscription = self.client.auth.on_auth_state_change(on_change)
        return channel

    async def sign_in_with_password(self, email: str, password: str) -> Result[AuthSession]:
        try:
            res = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            return Result.fail(
                FailureKind.AUTH_REJECTED, _provider_message(exc, "Failed to sign in"), str(exc)
            )
        session = to_session(res.session)
        if session is None:
            return Result.fail(FailureKind.AUTH_REJECTED, "Failed to sign in")
        return Result.success(session)

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any]
    ) -> Result[IdentityEntity]:
        try:
            res = await self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        except Exception as exc:
            return Result.fail(
                FailureKind.AUTH_REJECTED,
                _provider_message(exc, "Failed to create account"),
                str(exc),
            )
        if res.user is None:
            return Result.fail(FailureKind.AUTH_REJECTED, "Failed to create account")
        return Result.success(to_identity(res.user))

    async def sign_out(self) -> Result[None]:
        try:
            await self.client.auth.sign_out()
        except Exception as exc:
            return Result.fail(
                FailureKind.AUTH_REJECTED, _provider_message(exc, "Failed to sign out"), str(exc)
            )
        return Result.success()

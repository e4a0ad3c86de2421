"""Interfaces of the hosted backend the session flow talks to."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from petcare.domain.entities.identity import AuthChange, AuthSession, IdentityEntity
from petcare.domain.entities.profile import ProfileEntity
from petcare.domain.results import Result

if TYPE_CHECKING:
    from petcare.application.notifications import Channel


class IdentityProvider(Protocol):
    async def get_current_session(self) -> Result[AuthSession | None]: ...

    def subscribe_to_auth_changes(self) -> Channel[AuthChange]: ...

    async def sign_in_with_password(self, email: str, password: str) -> Result[AuthSession]: ...

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any]
    ) -> Result[IdentityEntity]: ...

    async def sign_out(self) -> Result[None]: ...


class ProfileStore(Protocol):
    async def get_by_id(self, profile_id: str) -> ProfileEntity | None:
        """Return the profile row or None; raise on query errors."""
        ...

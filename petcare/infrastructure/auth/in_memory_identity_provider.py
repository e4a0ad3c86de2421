from __future__ import annotations

import hashlib
import logging
import secrets
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from petcare.application.notifications import Channel
from petcare.domain.entities.identity import (
    AuthChange,
    AuthChangeEvent,
    AuthSession,
    IdentityEntity,
)
from petcare.domain.results import FailureKind, Result

logger = logging.getLogger(__name__)

SESSION_TTL_SECONDS = 3600


@dataclass
class _Account:
    identity: IdentityEntity
    salt: bytes
    password_hash: bytes


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, 100_000)


class InMemoryAccounts:
    """Registered accounts shared by every client of one process.

    ``on_registered`` stands in for the backend trigger that seeds profile rows.
    """

    def __init__(self, on_registered: Callable[[IdentityEntity], Any] | None = None) -> None:
        self._accounts: dict[str, _Account] = {}
        self._on_registered = on_registered

    def register(self, email: str, password: str, metadata: dict[str, Any]) -> Result[IdentityEntity]:
        key = email.lower()
        if key in self._accounts:
            return Result.fail(FailureKind.AUTH_REJECTED, "User already registered")
        identity = IdentityEntity(id=str(uuid.uuid4()), email=email, metadata=dict(metadata))
        salt = secrets.token_bytes(16)
        self._accounts[key] = _Account(identity, salt, _hash_password(password, salt))
        if self._on_registered is not None:
            self._on_registered(identity)
        logger.debug("Registered in-memory account %s", identity.id)
        return Result.success(identity)

    def verify(self, email: str, password: str) -> IdentityEntity | None:
        account = self._accounts.get(email.lower())
        if account is None or not secrets.compare_digest(
            account.password_hash, _hash_password(password, account.salt)
        ):
            return None
        return account.identity


class InMemoryIdentityProvider:
    """Process-local identity provider used when Supabase is disabled.

    One instance per client, like one Supabase client per browser: the current session
    belongs to this instance, the accounts are shared. Mirrors Supabase's observable
    behavior: notifications on sign-in and sign-out, the same rejection messages, and
    no automatic sign-in after sign-up.
    """

    def __init__(self, accounts: InMemoryAccounts | None = None) -> None:
        self.accounts = accounts or InMemoryAccounts()
        self._session: AuthSession | None = None
        self._subscribers: list[Channel[AuthChange]] = []

    async def get_current_session(self) -> Result[AuthSession | None]:
        return Result.success(self._session)

    def subscribe_to_auth_changes(self) -> Channel[AuthChange]:
        channel: Channel[AuthChange] = Channel(on_close=lambda: self._subscribers.remove(channel))
        self._subscribers.append(channel)
        return channel

    def emit(self, event: AuthChangeEvent | str, session: AuthSession | None) -> None:
        name = event.value if isinstance(event, AuthChangeEvent) else event
        change = AuthChange(event=name, session=session)
        for channel in list(self._subscribers):
            channel.publish(change)

    async def sign_in_with_password(self, email: str, password: str) -> Result[AuthSession]:
        identity = self.accounts.verify(email, password)
        if identity is None:
            return Result.fail(FailureKind.AUTH_REJECTED, "Invalid login credentials")
        self._session = AuthSession(
            access_token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(16),
            expires_at=int(time.time()) + SESSION_TTL_SECONDS,
            identity=identity,
        )
        self.emit(AuthChangeEvent.SIGNED_IN, self._session)
        return Result.success(self._session)

    async def sign_up(
        self, email: str, password: str, metadata: dict[str, Any]
    ) -> Result[IdentityEntity]:
        return self.accounts.register(email, password, metadata)

    async def sign_out(self) -> Result[None]:
        self._session = None
        self.emit(AuthChangeEvent.SIGNED_OUT, None)
        return Result.success()

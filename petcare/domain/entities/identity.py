from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AuthChangeEvent(str, Enum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    USER_DELETED = "USER_DELETED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"


@dataclass(frozen=True)
class IdentityEntity:
    """The account as the identity provider knows it. Never owned by this app."""

    id: str
    email: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def full_name(self) -> str | None:
        return self.metadata.get("full_name") or None


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    identity: IdentityEntity
    refresh_token: str | None = None
    expires_at: int | None = None  # unix seconds


@dataclass(frozen=True)
class AuthChange:
    event: str
    session: AuthSession | None = None

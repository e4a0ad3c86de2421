from __future__ import annotations

from dataclasses import dataclass

from petcare.domain.entities.identity import IdentityEntity
from petcare.domain.entities.profile import ProfileEntity


@dataclass(frozen=True)
class SessionState:
    """Snapshot of who is signed in.

    Always replaced as a whole so identity, profile and loading never disagree.
    While ``loading`` is true, identity and profile are undetermined rather than absent.
    A present identity with an absent profile is valid: the lookup is in flight or failed.
    """

    identity: IdentityEntity | None = None
    profile: ProfileEntity | None = None
    loading: bool = True

    def __post_init__(self) -> None:
        if self.identity is None and self.profile is not None:
            raise ValueError("profile cannot be set without an identity")

    @classmethod
    def initial(cls) -> SessionState:
        return cls(identity=None, profile=None, loading=True)

    @property
    def authenticated(self) -> bool:
        return not self.loading and self.identity is not None

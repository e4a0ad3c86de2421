from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from petcare.domain.entities.identity import IdentityEntity
from petcare.domain.entities.profile import ProfileEntity, UserRole
from petcare.domain.entities.session_state import SessionState


class SignInBody(BaseModel):
    """Request model for signing in."""
    email: str = Field(..., description="Account email", examples=["owner@example.com"])
    password: str = Field(..., description="Account password")


class SignUpBody(BaseModel):
    """Request model for creating an account."""
    email: str = Field(..., description="Account email", examples=["owner@example.com"])
    password: str = Field(..., description="Password, at least 6 characters")
    full_name: str = Field("", max_length=100, description="Name shown in the app", examples=["Jane Doe"])


class IdentityResponse(BaseModel):
    id: str = Field(..., description="Identity id issued by the auth provider")
    email: Optional[str] = Field(None, description="Account email")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Provider-managed user metadata")

    @classmethod
    def from_entity(cls, identity: IdentityEntity) -> IdentityResponse:
        return cls(id=identity.id, email=identity.email, metadata=dict(identity.metadata))


class ProfileResponse(BaseModel):
    id: str = Field(..., description="Profile id, equal to the identity id")
    email: str = Field(..., description="Profile email")
    full_name: Optional[str] = Field(None, description="Display name given at registration")
    role: UserRole = Field(..., description="Household role")
    household_id: str = Field(..., description="Household the member belongs to")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, profile: ProfileEntity) -> ProfileResponse:
        return cls(
            id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            role=profile.role,
            household_id=profile.household_id,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class SessionResponse(BaseModel):
    """Snapshot of the session.

    While ``loading`` is true, identity and profile are not determined yet. A present
    identity without a profile means the profile lookup is pending or failed.
    """
    identity: Optional[IdentityResponse] = None
    profile: Optional[ProfileResponse] = None
    loading: bool = Field(..., description="True only during the initial session check")
    authenticated: bool = Field(..., description="Resolved and signed in")

    @classmethod
    def from_state(cls, state: SessionState) -> SessionResponse:
        return cls(
            identity=IdentityResponse.from_entity(state.identity) if state.identity else None,
            profile=ProfileResponse.from_entity(state.profile) if state.profile else None,
            loading=state.loading,
            authenticated=state.authenticated,
        )


class DashboardResponse(BaseModel):
    title: str = Field("Cat Care Tracker", description="Application title")
    welcome_name: Optional[str] = Field(
        None, description="Full name or email; null until the profile is known"
    )
    name: str = Field("Not set", description="Full name, or 'Not set'")
    email: Optional[str] = None
    role: Optional[UserRole] = None
    household_id: Optional[str] = None
    household_name: Optional[str] = None

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    PENDING = "pending"


@dataclass(frozen=True)
class ProfileEntity:
    id: str  # same id as the Supabase auth user
    email: str
    household_id: str
    role: UserRole = UserRole.USER
    full_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

"""Runtime configuration read from the environment."""
from __future__ import annotations

import os

from pydantic import BaseModel, Field

from petcare.domain.services.password_policy import MIN_PASSWORD_LENGTH

_DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]


class Settings(BaseModel):
    """Typed settings; build with :func:`load_settings`."""

    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_disabled: bool = False
    env: str = "development"
    cors_origins: list[str] = Field(default_factory=list)
    min_password_length: int = Field(default=MIN_PASSWORD_LENGTH, ge=1)
    session_settle_timeout: float = Field(default=5.0, ge=0)
    log_level: str = "INFO"

    @property
    def use_supabase(self) -> bool:
        return not self.supabase_disabled and bool(self.supabase_url and self.supabase_anon_key)

    @property
    def allowed_origins(self) -> list[str]:
        if self.cors_origins:
            return self.cors_origins
        if self.env in ("development", "staging"):
            return list(_DEV_ORIGINS)
        return []


def load_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "")
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL"),
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY")
        or os.getenv("NEXT_PUBLIC_SUPABASE_ANON_KEY"),
        supabase_disabled=os.getenv("SUPABASE_DISABLED", "0") == "1",
        env=os.getenv("ENV", "development"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        min_password_length=int(os.getenv("MIN_PASSWORD_LENGTH", str(MIN_PASSWORD_LENGTH))),
        session_settle_timeout=float(os.getenv("SESSION_SETTLE_TIMEOUT", "5")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

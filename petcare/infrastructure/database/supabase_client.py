from __future__ import annotations

from supabase import AsyncClient, acreate_client

from petcare.config import Settings


async def create_supabase_client(settings: Settings) -> AsyncClient | None:
    """Build the async Supabase client, or None when running without Supabase.

    The caller owns the returned client; the session manager and repositories of one
    app instance share it.
    """
    if not settings.use_supabase:
        return None
    return await acreate_client(settings.supabase_url, settings.supabase_anon_key)

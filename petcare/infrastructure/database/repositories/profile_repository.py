from __future__ import annotations

from datetime import datetime

from supabase import AsyncClient

from petcare.domain.entities.profile import ProfileEntity, UserRole


def _parse_ts(value: str | datetime | None) -> datetime | None:
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value


class ProfileRepository:
    """Reads rows of the ``profiles`` table.

    Rows are written by the backend trigger that runs on registration, never by this
    client. Without a Supabase client the repository keeps rows in memory.
    """

    table = "profiles"

    def __init__(self, client: AsyncClient | None) -> None:
        self.client = client
        self._mem: dict[str, ProfileEntity] = {}

    @property
    def in_memory(self) -> bool:
        return self.client is None

    def _row_to_entity(self, row: dict) -> ProfileEntity:
        """Convert database row to ProfileEntity."""
        return ProfileEntity(
            id=row["id"],
            email=row["email"],
            household_id=row["household_id"],
            role=UserRole(row.get("role") or UserRole.PENDING.value),
            full_name=row.get("full_name"),
            created_at=_parse_ts(row.get("created_at")),
            updated_at=_parse_ts(row.get("updated_at")),
        )

    async def get_by_id(self, profile_id: str) -> ProfileEntity | None:
        # In-memory mode
        if self.in_memory:
            return self._mem.get(profile_id)

        # Supabase mode
        try:
            res = await self.client.table(self.table).select("*").eq("id", profile_id).limit(1).execute()
        except Exception as exc:
            raise RuntimeError(f"DB get profile failed: {exc}") from exc
        rows = res.data or []
        if not rows:
            return None
        return self._row_to_entity(rows[0])

    def save(self, entity: ProfileEntity) -> ProfileEntity:
        """Store a row in memory; stands in for the registration trigger."""
        if not self.in_memory:
            raise RuntimeError("Profiles are created by the database trigger in Supabase mode")
        self._mem[entity.id] = entity
        return entity

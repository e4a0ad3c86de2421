from __future__ import annotations

import uuid
from datetime import UTC, datetime

from supabase import AsyncClient

from petcare.domain.entities.household import HouseholdEntity


class HouseholdRepository:
    table = "households"

    def __init__(self, client: AsyncClient | None) -> None:
        self.client = client
        self._mem: dict[str, HouseholdEntity] = {}

    @property
    def in_memory(self) -> bool:
        return self.client is None

    def _row_to_entity(self, row: dict) -> HouseholdEntity:
        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        return HouseholdEntity(id=row["id"], name=row["name"], created_at=created_at)

    async def get_by_id(self, household_id: str) -> HouseholdEntity | None:
        if self.in_memory:
            return self._mem.get(household_id)
        try:
            res = (
                await self.client.table(self.table)
                .select("*")
                .eq("id", household_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise RuntimeError(f"DB get household failed: {exc}") from exc
        rows = res.data or []
        return self._row_to_entity(rows[0]) if rows else None

    def create(self, name: str) -> HouseholdEntity:
        if not self.in_memory:
            raise RuntimeError("Households are created by the database trigger in Supabase mode")
        entity = HouseholdEntity(id=str(uuid.uuid4()), name=name, created_at=datetime.now(UTC))
        self._mem[entity.id] = entity
        return entity

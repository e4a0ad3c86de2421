from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HouseholdEntity:
    id: str
    name: str
    created_at: datetime | None = None

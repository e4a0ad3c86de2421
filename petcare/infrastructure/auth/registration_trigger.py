from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from petcare.domain.entities.identity import IdentityEntity
from petcare.domain.entities.profile import ProfileEntity, UserRole
from petcare.infrastructure.database.repositories.household_repository import HouseholdRepository
from petcare.infrastructure.database.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class RegistrationTrigger:
    """In-memory counterpart of the database trigger run on account creation.

    Creates a household for the new member and a profile row seeded from the
    registration metadata. The founder of a household is its admin.
    """

    profiles: ProfileRepository
    households: HouseholdRepository

    def __call__(self, identity: IdentityEntity) -> ProfileEntity:
        email = identity.email or ""
        owner = identity.full_name or email
        household = self.households.create(name=f"{owner}'s Household")
        now = datetime.now(UTC)
        profile = ProfileEntity(
            id=identity.id,
            email=email,
            household_id=household.id,
            role=UserRole.ADMIN,
            full_name=identity.full_name,
            created_at=now,
            updated_at=now,
        )
        logger.debug("Created profile %s in household %s", identity.id, household.id)
        return self.profiles.save(profile)

from __future__ import annotations

import logging
from dataclasses import dataclass

from petcare.domain.entities.profile import ProfileEntity
from petcare.domain.ports import ProfileStore
from petcare.domain.results import FailureKind, Result

logger = logging.getLogger(__name__)


@dataclass
class FetchProfileUseCase:
    profiles: ProfileStore

    async def execute(self, identity_id: str) -> Result[ProfileEntity]:
        """
        Look up the profile row for a signed-in identity.

        A missing row usually means the backend trigger that creates profiles on
        registration did not run. Both that and query errors come back as a
        PROFILE_LOOKUP_FAILED result instead of an exception.
        """
        logger.debug("Fetching profile for user %s", identity_id)
        try:
            profile = await self.profiles.get_by_id(identity_id)
        except Exception as exc:
            logger.warning("Error fetching profile for user %s: %s", identity_id, exc)
            return Result.fail(
                FailureKind.PROFILE_LOOKUP_FAILED, "Profile could not be loaded", detail=str(exc)
            )
        if profile is None:
            logger.warning("No profile row for user %s", identity_id)
            return Result.fail(
                FailureKind.PROFILE_LOOKUP_FAILED,
                "Profile not found",
                detail=f"no profiles row with id={identity_id}",
            )
        return Result.success(profile)

from __future__ import annotations

import logging
from dataclasses import dataclass

from petcare.domain.ports import IdentityProvider
from petcare.domain.results import Result

logger = logging.getLogger(__name__)


@dataclass
class SignOutUseCase:
    identity_provider: IdentityProvider

    async def execute(self) -> Result[None]:
        result = await self.identity_provider.sign_out()
        if not result.ok:
            logger.info("Sign-out rejected: %s", result.failure.message)
        return result

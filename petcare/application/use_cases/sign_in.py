from __future__ import annotations

import logging
from dataclasses import dataclass

from petcare.domain.ports import IdentityProvider
from petcare.domain.results import Result

logger = logging.getLogger(__name__)


@dataclass
class SignInUseCase:
    identity_provider: IdentityProvider

    async def execute(self, email: str, password: str) -> Result[None]:
        """
        Verify credentials with the identity provider.

        Session state is not touched here; the provider's SIGNED_IN notification
        carries the new session to the session manager.
        """
        result = await self.identity_provider.sign_in_with_password(email, password)
        if not result.ok:
            logger.info("Sign-in rejected for %s: %s", email, result.failure.message)
            return Result(failure=result.failure)
        return Result.success()

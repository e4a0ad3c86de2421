from __future__ import annotations

import logging
from dataclasses import dataclass

from petcare.domain.ports import IdentityProvider
from petcare.domain.results import Result
from petcare.domain.services.password_policy import MIN_PASSWORD_LENGTH, validate_credentials

logger = logging.getLogger(__name__)


@dataclass
class SignUpUseCase:
    identity_provider: IdentityProvider
    min_password_length: int = MIN_PASSWORD_LENGTH

    async def execute(self, email: str, password: str, full_name: str) -> Result[None]:
        """
        Create an account.

        The full name travels as user metadata; the backend trigger reads it to seed
        the profile and household rows. Local validation short-circuits before any
        provider call.
        """
        invalid = validate_credentials(email, password, min_length=self.min_password_length)
        if invalid is not None:
            return Result(failure=invalid)

        email = email.strip()
        metadata = {"full_name": (full_name or "").strip()}
        result = await self.identity_provider.sign_up(email, password, metadata)
        if not result.ok:
            logger.info("Sign-up rejected for %s: %s", email, result.failure.message)
            return Result(failure=result.failure)
        logger.info("Account created for %s", email)
        return Result.success()

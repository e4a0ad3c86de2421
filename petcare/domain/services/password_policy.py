from __future__ import annotations

from petcare.domain.results import Failure, FailureKind

MIN_PASSWORD_LENGTH = 6


def validate_credentials(
    email: str, password: str, *, min_length: int = MIN_PASSWORD_LENGTH
) -> Failure | None:
    """Local checks run before the identity provider is contacted.

    The provider may still reject the credentials under its own policy.
    """
    if not email or not email.strip():
        return Failure(FailureKind.VALIDATION_FAILED, "Email is required")
    if len(password or "") < min_length:
        return Failure(
            FailureKind.VALIDATION_FAILED,
            f"Password must be at least {min_length} characters",
        )
    return None

"""Explicit success/failure values returned by auth and profile operations."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    AUTH_REJECTED = "auth_rejected"
    VALIDATION_FAILED = "validation_failed"
    PROFILE_LOOKUP_FAILED = "profile_lookup_failed"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str  # safe to show to the end user as-is
    detail: str | None = None


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, kind: FailureKind, message: str, detail: str | None = None) -> Result[T]:
        return cls(failure=Failure(kind=kind, message=message, detail=detail))

"""
Scoring Errors - Error taxonomy for the match scoring pipeline.

Every error carries a machine-readable ``code`` and a human-readable
``reason`` that can be shown to the user as-is. The provider layer raises
these internally; the public operations return them inside a ``Result``.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ScoringError(Exception):
    """Base class for all match scoring failures."""

    code = "SCORING_FAILED"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    def to_dict(self) -> dict:
        return {"code": self.code, "error": self.reason}


class ValidationError(ScoringError):
    """Missing or incomplete input (no profile, no skills, no description)."""

    code = "VALIDATION_FAILED"


class NotFoundError(ScoringError):
    """The application does not exist or does not belong to the user."""

    code = "NOT_FOUND"


class RateLimitError(ScoringError):
    """Local per-user quota for an operation type is exhausted."""

    code = "RATE_LIMITED"

    def __init__(
        self,
        reason: str,
        operation_type: str,
        limit: Optional[int] = None,
        retry_after_seconds: Optional[int] = None
    ):
        super().__init__(reason)
        self.operation_type = operation_type
        self.limit = limit
        self.retry_after_seconds = retry_after_seconds

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["retry_after_seconds"] = self.retry_after_seconds
        return data


class QuotaExceededError(ScoringError):
    """The reasoning provider itself reported quota or rate exhaustion."""

    code = "PROVIDER_QUOTA_EXCEEDED"


class APIError(ScoringError):
    """Transport failure, non-2xx response or invalid upstream payload."""

    code = "UPSTREAM_FAILED"

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.status_code = status_code


class PersistenceError(ScoringError):
    """The data-store collaborator failed to load or save."""

    code = "PERSISTENCE_FAILED"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: exactly one of ``value`` or ``error`` is set."""
    value: Optional[T] = None
    error: Optional[ScoringError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ScoringError) -> "Result[T]":
        return cls(error=error)

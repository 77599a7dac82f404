"""OperationResult: success/failure outcome returned by domain services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a service call.

    value is only readable on success; reading it from a failed result
    raises, so callers cannot silently use a missing value.
    """

    is_success: bool
    error: str = ""
    _value: T | None = None

    @classmethod
    def success(cls, value: T | None = None) -> OperationResult[T]:
        return cls(is_success=True, _value=value)

    @classmethod
    def failure(cls, error: str) -> OperationResult[T]:
        return cls(is_success=False, error=error)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        if not self.is_success:
            raise RuntimeError(f"Cannot access value of failed result: {self.error}")
        return self._value  # type: ignore[return-value]

"""Result type carried by every store, guard and repository operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORE_FAILURE = "store_failure"


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORE_FAILURE: 500,
}


@dataclass(frozen=True)
class DocumentError:
    """A classified failure, optionally carrying the current stored revision."""

    kind: ErrorKind
    message: str
    revision: str | None = None

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self.kind]


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a ``DocumentError``; never both."""

    value: T | None = None
    error: DocumentError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        revision: str | None = None,
    ) -> Result[T]:
        return cls(error=DocumentError(kind=kind, message=message, revision=revision))

    def propagate(self) -> Result[U]:
        """Re-type a failed result so it can be returned from another operation."""
        if self.error is None:
            raise ValueError("Cannot propagate a successful result")
        return Result(error=self.error)

    def unwrap(self) -> T:
        """Return the value, raising ``ValueError`` for a failed result."""
        if self.error is not None:
            raise ValueError(f"{self.error.kind}: {self.error.message}")
        return self.value  # type: ignore[return-value]


def not_found(message: str = "Not Found") -> Result:
    return Result.failure(ErrorKind.NOT_FOUND, message)


def conflict(message: str, *, revision: str | None = None) -> Result:
    return Result.failure(ErrorKind.CONFLICT, message, revision=revision)

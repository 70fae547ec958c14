"""
Result values returned by the booking lifecycle service.

Domain failures are data, not exceptions: each operation returns a Result
holding either a value or a ServiceError whose kind the HTTP layer maps to a
status code.
"""

import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    BAD_REQUEST = "bad_request"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message))

    @classmethod
    def from_error(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)


def not_found(message: str) -> Result:
    return Result.failure(ErrorKind.NOT_FOUND, message)


def forbidden(message: str) -> Result:
    return Result.failure(ErrorKind.FORBIDDEN, message)


def bad_request(message: str) -> Result:
    return Result.failure(ErrorKind.BAD_REQUEST, message)

"""
Explicit outcome values returned by the domain services.

Services never raise for business failures. They return a ``Result`` that
either carries a value or a ``Failure`` whose ``ErrorKind`` the routers turn
into an HTTP status.
"""
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT_ALREADY_ADOPTED = "CONFLICT_ALREADY_ADOPTED"
    CONFLICT_DUPLICATE_REQUEST = "CONFLICT_DUPLICATE_REQUEST"
    INVALID_STATE = "INVALID_STATE"
    INVALID_INPUT = "INVALID_INPUT"
    UNAVAILABLE = "UNAVAILABLE"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def retryable(self) -> bool:
        return self is ErrorKind.UNAVAILABLE


_HTTP_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT_ALREADY_ADOPTED: 409,
    ErrorKind.CONFLICT_DUPLICATE_REQUEST: 409,
    ErrorKind.INVALID_STATE: 400,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNAVAILABLE: 503,
}


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    code: str
    reason: str


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, code: str, reason: str) -> "Result[T]":
        return cls(failure=Failure(kind=kind, code=code, reason=reason))

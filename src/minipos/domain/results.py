from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NETWORK = "network"
    HTTP = "http"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one backend call: a payload, or an error kind plus message."""

    value: Optional[T] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ""
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, status_code: int | None = None) -> "ApiResult[T]":
        return cls(error_kind=kind, message=message, status_code=status_code)

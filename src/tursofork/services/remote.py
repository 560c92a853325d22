"""Uniform results for remote API calls."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from tursofork.services.turso_api import TursoClientError

UNKNOWN_ERROR = "Unknown error"
NOT_FOUND_MARKERS = ("404", "not found")


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    API = "api"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RemoteFailure:
    kind: FailureKind
    message: str

    @property
    def from_client(self) -> bool:
        """True when the Platform API client itself reported the failure."""
        return self.kind in (FailureKind.API, FailureKind.NOT_FOUND)


@dataclass(frozen=True)
class RemoteResult:
    value: Any = None
    failure: Optional[RemoteFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def is_not_found_message(message: str) -> bool:
    text = message.lower()
    return any(marker in text for marker in NOT_FOUND_MARKERS)


def classify_failure(exc: Exception) -> RemoteFailure:
    if isinstance(exc, TursoClientError):
        message = exc.message or UNKNOWN_ERROR
        if exc.status_code == 404 or (
            exc.status_code is not None and is_not_found_message(message)
        ):
            return RemoteFailure(FailureKind.NOT_FOUND, message)
        return RemoteFailure(FailureKind.API, message)

    message = str(exc)
    if message:
        return RemoteFailure(FailureKind.ERROR, message)
    return RemoteFailure(FailureKind.UNKNOWN, UNKNOWN_ERROR)


def call_remote(operation: Callable[..., Any], *args, **kwargs) -> RemoteResult:
    try:
        return RemoteResult(value=operation(*args, **kwargs))
    except Exception as exc:
        return RemoteResult(failure=classify_failure(exc))

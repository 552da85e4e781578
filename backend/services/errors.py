"""Error taxonomy for dispatched voice-agent requests."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


# Upstream failures carry their own status code.
STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INTERNAL: 500,
}


class DispatchError(Exception):
    """Terminal failure for a single request, rendered as ``{"error": ...}``."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        upstream_status: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.upstream_status = upstream_status
        self.details = details

    @property
    def status_code(self) -> int:
        if self.kind is ErrorKind.UPSTREAM and self.upstream_status is not None:
            return self.upstream_status
        return STATUS_BY_KIND.get(self.kind, 500)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.kind is ErrorKind.UPSTREAM:
            body["details"] = self.details
        return body

    @classmethod
    def unauthenticated(cls, message: str) -> "DispatchError":
        return cls(ErrorKind.UNAUTHENTICATED, message)

    @classmethod
    def validation(cls, message: str) -> "DispatchError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def upstream(cls, status_code: int, message: str, details: Any) -> "DispatchError":
        return cls(
            ErrorKind.UPSTREAM,
            message,
            upstream_status=status_code,
            details=details,
        )

    @classmethod
    def internal(cls, message: str) -> "DispatchError":
        return cls(ErrorKind.INTERNAL, message)

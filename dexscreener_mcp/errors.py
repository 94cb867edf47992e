"""Classified errors raised by the gateway.

Every failure surfaces as a single ``DexScreenerError`` carrying a fixed
``ErrorKind``. Errors are built once where they originate and propagate
to the caller unchanged:

    UNKNOWN_OPERATION, INVALID_ARGUMENTS  -> dispatcher
    NETWORK, UPSTREAM, DECODE             -> upstream client
"""
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class ErrorKind(str, Enum):
    """Failure categories exposed to callers."""

    UNKNOWN_OPERATION = "unknown_operation"
    INVALID_ARGUMENTS = "invalid_arguments"
    NETWORK = "network"
    UPSTREAM = "upstream"
    DECODE = "decode"


class DexScreenerError(Exception):
    """Structured failure of a single gateway call."""

    def __init__(self, kind: ErrorKind, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.kind.value} ({self.status}): {self.message}"
        return f"{self.kind.value}: {self.message}"

    def __repr__(self) -> str:
        return f"DexScreenerError(kind={self.kind.name}, status={self.status!r}, message={self.message!r})"

    @classmethod
    def unknown_operation(cls, name: str) -> "DexScreenerError":
        return cls(ErrorKind.UNKNOWN_OPERATION, name)

    @classmethod
    def invalid_arguments(cls, message: str) -> "DexScreenerError":
        return cls(ErrorKind.INVALID_ARGUMENTS, message)

    @classmethod
    def missing_arguments(cls, operation: str, missing: Iterable[str]) -> "DexScreenerError":
        names = ", ".join(missing)
        return cls(ErrorKind.INVALID_ARGUMENTS, f"{operation}: missing required arguments: {names}")

    @classmethod
    def network(cls, cause: str) -> "DexScreenerError":
        return cls(ErrorKind.NETWORK, cause)

    @classmethod
    def upstream(cls, status: int, message: str) -> "DexScreenerError":
        return cls(ErrorKind.UPSTREAM, message, status=status)

    @classmethod
    def decode(cls, message: str) -> "DexScreenerError":
        return cls(ErrorKind.DECODE, message)

    def to_dict(self) -> Dict[str, Any]:
        """Render the error for a transport layer."""
        data: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.status is not None:
            data["status"] = self.status
        return data

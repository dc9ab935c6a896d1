"""
Swellforms error types — every failure the SDK raises is a SwellformsError.
"""

from typing import Optional


class ErrorCode:
    TIMEOUT = "TIMEOUT"
    NETWORK = "NETWORK"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"
    CONFLICT = "CONFLICT"
    SERVER = "SERVER"
    UNEXPECTED = "UNEXPECTED"


class SwellformsError(Exception):
    """Raised for transport failures and HTTP statuses outside the form contract.

    ``status`` is 0 when no HTTP response was received (timeouts, network).
    """

    def __init__(
        self,
        message: str,
        status: int,
        code: Optional[str] = None,
        errors: Optional[dict[str, list[str]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.errors = errors

    def __repr__(self) -> str:
        return f"SwellformsError({self.message!r}, status={self.status}, code={self.code!r})"

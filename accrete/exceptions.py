from typing import Any

__all__ = ("AccreteError", "RequestException")


class AccreteError(Exception):
    """Base class for errors raised by accrete."""


class RequestException(AccreteError):
    """A page request that completed with a non-success status."""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)

from collections.abc import Callable, Mapping
from typing import Any

import httpx

from accrete.exceptions import RequestException

__all__ = (
    "DEFAULT_ERROR_MESSAGE",
    "default_extract_items",
    "default_extract_total_pages",
    "make_default_has_more",
    "describe_error",
)

DEFAULT_ERROR_MESSAGE = "Failed to load data"


def _lookup(value: Any, *path: str) -> Any:
    """Walk `path` through mappings or attributes, returning None at the first gap."""
    for key in path:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(key)
        else:
            value = getattr(value, key, None)
    return value


def default_extract_items(response: Any) -> list[Any]:
    """Items live under `responseObject.items`."""
    items = _lookup(response, "responseObject", "items")
    if not items:
        return []
    return list(items)


def default_extract_total_pages(response: Any) -> int | None:
    """Total page count lives under `responseObject.totalPages`."""
    total = _lookup(response, "responseObject", "totalPages")
    if total is None or isinstance(total, bool):
        return None
    try:
        return int(total)
    except (TypeError, ValueError):
        return None


def make_default_has_more(
    extract_items: Callable[[Any], list[Any]], limit: int
) -> Callable[[Any, list[Any]], bool]:
    """A page holding exactly `limit` items may be followed by another one."""

    def has_more(response: Any, accumulated: list[Any]) -> bool:
        return len(extract_items(response) or []) == limit

    return has_more


def _structured_message(exc: BaseException) -> str | None:
    if isinstance(exc, RequestException):
        message = _lookup(exc.payload, "message")
        if isinstance(message, str) and message:
            return message

    if isinstance(exc, httpx.HTTPStatusError):
        try:
            message = _lookup(exc.response.json(), "message")
        except ValueError:
            message = None
        if isinstance(message, str) and message:
            return message

    # wrappers that expose the decoded body as `response.data`
    message = _lookup(getattr(exc, "response", None), "data", "message")
    if isinstance(message, str) and message:
        return message
    return None


def describe_error(exc: BaseException) -> str:
    """Human readable message for a failed page request."""
    if message := _structured_message(exc):
        return message
    if message := str(exc):
        return message
    return DEFAULT_ERROR_MESSAGE

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("AccumulatorState",)


class AccumulatorState(BaseModel):
    """Read-only snapshot of everything accumulated during one session."""

    model_config = ConfigDict(frozen=True)

    items: list[Any] = Field(default_factory=list)
    """Accumulated records, in page order."""
    current_page: int = 1
    """Last page known to have more data after it."""
    loading: bool = False
    """Whether a page request is in flight."""
    initial_loading: bool = True
    """Whether the first page request of the session is still pending."""
    has_more: bool = True
    """Whether another page may be requested."""
    error: str | None = None
    """Message of the last failed request, if any."""

from collections.abc import Awaitable, Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from accrete.adapter import default_extract_items, default_extract_total_pages, make_default_has_more
from accrete.logging import SessionLogFile
from accrete.settings import settings

__all__ = ("PaginatorConfig", "PaginationMode", "FetchFn")

PaginationMode = Literal["sequential", "bulk"]

FetchFn = Callable[[int, int], Awaitable[Any]]


class PaginatorConfig(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    fetch_fn: FetchFn
    """Async callable requesting one page: `fetch_fn(page, limit)`."""
    limit: int = Field(default_factory=lambda: settings.DEFAULT_LIMIT, gt=0)
    """Number of items requested per page."""
    mode: PaginationMode = "sequential"
    """`sequential` loads one page at a time, `bulk` loads every page up front."""
    scroll_threshold: float = Field(default_factory=lambda: settings.SCROLL_THRESHOLD, gt=0, lt=1)
    """Scroll fraction after which the next page is requested."""
    extract_items: Callable[[Any], list[Any]] = default_extract_items
    """Pulls the page's items out of a response."""
    extract_total_pages: Callable[[Any], int | None] = default_extract_total_pages
    """Pulls the total page count out of a response, None when unknown."""
    has_more_predicate: Callable[[Any, list[Any]], bool] | None = None
    """Decides from a response and the items accumulated so far whether another page exists."""
    initial_page: int = 1
    """Number of the first page."""
    enable_infinite_scroll: bool = True
    """Attach a scroll listener to the registered scroll source."""
    log_file: SessionLogFile | None = None
    """Also write this session's events to a rotating JSON-lines file."""

    @model_validator(mode="after")
    def fill_has_more_predicate(self):
        if self.has_more_predicate is None:
            self.has_more_predicate = make_default_has_more(self.extract_items, self.limit)
        return self

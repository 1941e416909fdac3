"""Shared test fixtures and configuration."""

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from accrete.store import AccumulatorStore


def page_response(items: list[Any], total_pages: int | None = None) -> dict[str, Any]:
    """Build a response in the default `responseObject` envelope."""
    body: dict[str, Any] = {"items": items}
    if total_pages is not None:
        body["totalPages"] = total_pages
    return {"responseObject": body}


@pytest.fixture
def make_fetch_fn():
    """Factory for an AsyncMock page fetcher serving fixed pages.

    Pages not listed come back empty; pages listed in `errors` raise instead.
    """

    def factory(
        pages: dict[int, list[Any]],
        *,
        total_pages: int | None = None,
        errors: dict[int, Exception] | None = None,
    ) -> AsyncMock:
        async def fetch(page: int, limit: int) -> dict[str, Any]:
            if errors and page in errors:
                raise errors[page]
            return page_response(pages.get(page, []), total_pages)

        return AsyncMock(side_effect=fetch)

    return factory


@pytest.fixture
def gated_fetch_fn():
    """Page fetcher whose calls block until the test releases the gate."""
    gate = asyncio.Event()

    async def fetch(page: int, limit: int) -> dict[str, Any]:
        await gate.wait()
        return page_response([{"id": page}])

    mock = AsyncMock(side_effect=fetch)
    mock.gate = gate
    return mock


@pytest.fixture
def store():
    """Real AccumulatorStore starting at page 1."""
    return AccumulatorStore(initial_page=1)


@pytest.fixture
def items_40():
    """Forty distinct records."""
    return [{"id": i, "name": f"item-{i}"} for i in range(1, 41)]

"""Tests for loading every page concurrently."""

import asyncio

import pytest

from accrete.pagers import ConcurrentBulkPager
from accrete.schema import PaginatorConfig
from tests.conftest import page_response


def build_pager(store, fetch_fn, **options) -> ConcurrentBulkPager:
    return ConcurrentBulkPager(PaginatorConfig(fetch_fn=fetch_fn, **options), store)


class TestFetchAll:
    """Test the happy paths of a bulk load."""

    @pytest.mark.asyncio
    async def test_all_pages_merged(self, store, make_fetch_fn):
        """Test every page is requested and merged into a finished session."""
        fetch_fn = make_fetch_fn(
            {1: [{"id": 1}, {"id": 2}], 2: [{"id": 3}, {"id": 4}], 3: [{"id": 5}]},
            total_pages=3,
        )
        pager = build_pager(store, fetch_fn, mode="bulk", limit=2)

        await pager.fetch_all()

        state = store.state
        assert state.items == [{"id": i} for i in range(1, 6)]
        assert sorted(call.args for call in fetch_fn.await_args_list) == [(1, 2), (2, 2), (3, 2)]
        assert state.current_page == 3
        assert state.has_more is False
        assert state.loading is False
        assert state.initial_loading is False
        assert state.error is None

    @pytest.mark.asyncio
    async def test_page_order_independent_of_completion_order(self, store, mocker):
        """Test page 2 items precede page 3 items even when page 3 answers first."""
        page_3_done = asyncio.Event()
        completed = []

        async def fetch(page, limit):
            if page == 2:
                await page_3_done.wait()
            completed.append(page)
            if page == 3:
                page_3_done.set()
            return page_response([{"id": f"p{page}"}], total_pages=3)

        pager = build_pager(store, mocker.AsyncMock(side_effect=fetch), limit=1)

        await pager.fetch_all()

        assert completed == [1, 3, 2]
        assert store.state.items == [{"id": "p1"}, {"id": "p2"}, {"id": "p3"}]

    @pytest.mark.asyncio
    async def test_duplicates_across_pages_dropped(self, store, make_fetch_fn):
        """Test a record repeated on a later page appears only once."""
        fetch_fn = make_fetch_fn({1: [{"id": 1, "page": 1}], 2: [{"id": 1, "page": 2}, {"id": 2}]}, total_pages=2)
        pager = build_pager(store, fetch_fn, limit=2)

        await pager.fetch_all()

        assert store.state.items == [{"id": 1, "page": 1}, {"id": 2}]

    @pytest.mark.asyncio
    async def test_requests_are_concurrent(self, store, mocker):
        """Test the remaining pages are all in flight at the same time."""
        in_flight = 0
        peak = 0
        release = asyncio.Event()

        async def fetch(page, limit):
            nonlocal in_flight, peak
            if page == 1:
                return page_response([{"id": 1}], total_pages=4)
            in_flight += 1
            peak = max(peak, in_flight)
            if in_flight == 3:
                release.set()
            await release.wait()
            in_flight -= 1
            return page_response([{"id": page}])

        pager = build_pager(store, mocker.AsyncMock(side_effect=fetch), limit=1)

        await pager.fetch_all()

        assert peak == 3
        assert [item["id"] for item in store.state.items] == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_non_default_initial_page(self, store, make_fetch_fn):
        """Test zero-based APIs are paged from the initial page onward."""
        fetch_fn = make_fetch_fn({0: [{"id": "a"}], 1: [{"id": "b"}], 2: [{"id": "c"}]}, total_pages=3)
        pager = build_pager(store, fetch_fn, limit=1, initial_page=0)

        await pager.fetch_all()

        assert sorted(call.args[0] for call in fetch_fn.await_args_list) == [0, 1, 2]
        assert store.state.items == [{"id": "a"}, {"id": "b"}, {"id": "c"}]
        assert store.state.current_page == 2


class TestSinglePage:
    """Test results that fit in the first page."""

    @pytest.mark.asyncio
    async def test_unknown_total(self, store, make_fetch_fn):
        """Test the first page is the whole result when no total is reported."""
        fetch_fn = make_fetch_fn({1: [{"id": 1}, {"id": 2}]})
        pager = build_pager(store, fetch_fn, limit=2)

        await pager.fetch_all()

        assert store.state.items == [{"id": 1}, {"id": 2}]
        assert store.state.has_more is False
        assert store.state.current_page == 1
        assert fetch_fn.await_count == 1

    @pytest.mark.asyncio
    async def test_total_of_one(self, store, make_fetch_fn):
        """Test a single reported page needs no further requests."""
        fetch_fn = make_fetch_fn({1: [{"id": 1}]}, total_pages=1)
        pager = build_pager(store, fetch_fn)

        await pager.fetch_all()

        assert store.state.items == [{"id": 1}]
        assert fetch_fn.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_first_page(self, store, make_fetch_fn):
        """Test an empty first page finishes the session with nothing."""
        fetch_fn = make_fetch_fn({}, total_pages=5)
        pager = build_pager(store, fetch_fn)

        await pager.fetch_all()

        assert store.state.items == []
        assert store.state.has_more is False
        assert store.state.initial_loading is False
        assert fetch_fn.await_count == 1


class TestFailures:
    """Test the all-or-nothing failure policy."""

    @pytest.mark.asyncio
    async def test_single_failure_discards_everything(self, store, make_fetch_fn):
        """Test one failing page leaves no partial result behind."""
        fetch_fn = make_fetch_fn(
            {1: [{"id": 1}], 2: [{"id": 2}], 3: [{"id": 3}]},
            total_pages=3,
            errors={3: ConnectionError("Connection reset")},
        )
        pager = build_pager(store, fetch_fn, limit=1)

        await pager.fetch_all()

        state = store.state
        assert state.items == []
        assert state.error == "Connection reset"
        assert state.loading is False
        assert state.initial_loading is False

    @pytest.mark.asyncio
    async def test_first_page_failure(self, store, make_fetch_fn):
        """Test a failing first page is reported without further requests."""
        fetch_fn = make_fetch_fn({}, errors={1: RuntimeError("boom")})
        pager = build_pager(store, fetch_fn)

        await pager.fetch_all()

        assert store.state.error == "boom"
        assert fetch_fn.await_count == 1

    @pytest.mark.asyncio
    async def test_skipped_while_loading(self, store, make_fetch_fn):
        """Test a bulk load is not started on top of another request."""
        fetch_fn = make_fetch_fn({1: [{"id": 1}]})
        pager = build_pager(store, fetch_fn)
        store.set_loading(True)

        await pager.fetch_all()

        assert fetch_fn.await_count == 0


class TestStaleResults:
    """Test bulk results arriving after a reset."""

    @pytest.mark.asyncio
    async def test_result_after_reset_is_discarded(self, store, mocker):
        """Test a bulk load finishing after a reset does not resurrect its items."""
        gate = asyncio.Event()

        async def fetch(page, limit):
            if page == 2:
                await gate.wait()
            return page_response([{"id": page}], total_pages=2)

        pager = build_pager(store, mocker.AsyncMock(side_effect=fetch), limit=1)
        task = asyncio.create_task(pager.fetch_all())
        for _ in range(5):
            await asyncio.sleep(0)
        store.reset_all()
        gate.set()
        await task

        assert store.state.items == []
        assert store.state.has_more is True
        assert store.state.current_page == 1

import asyncio

from accrete.adapter import describe_error
from accrete.dedup import merge_unique
from accrete.pagers.base import BasePager

__all__ = ("ConcurrentBulkPager",)


class ConcurrentBulkPager(BasePager):
    """
    Loads the whole result set in one round.

    The first page tells how many pages exist; the rest are requested concurrently and merged
    in page order, dropping records already seen. The operation is all-or-nothing: if any page
    fails, nothing fetched in this round is kept.
    """

    async def fetch_all(self) -> None:
        if self.store.state.loading:
            self._logger.debug("load-all", status="skipped", reason="already loading")
            return

        first_page = self.config.initial_page
        generation = self.store.generation
        self.store.set_loading(True)
        self.store.set_error(None)
        try:
            first_response = await self._fetch_response(first_page)
            if self._discard_stale(generation, page=first_page):
                return

            first_items = self._extract_items(first_response)
            if not first_items:
                self.store.set_has_more(False)
                self._logger.info("load-all", status="completed", page_count=1, item_count=0)
                return

            total_pages = self.config.extract_total_pages(first_response)
            if not total_pages or total_pages <= 1:
                self.store.replace(first_items)
                self.store.set_has_more(False)
                self._logger.info("load-all", status="completed", page_count=1, item_count=len(first_items))
                return

            last_page = self._last_page(total_pages)
            remaining_pages = range(first_page + 1, last_page + 1)
            self._logger.info("load-all", status="pending", total_pages=total_pages)
            # gather keeps results in request order whatever order they complete in
            responses = await asyncio.gather(*(self._fetch_response(page) for page in remaining_pages))
            if self._discard_stale(generation, pages=list(remaining_pages)):
                return

            merged = merge_unique(first_items, *(self._extract_items(response) for response in responses))
            self.store.replace(merged)
            self.store.set_page(last_page)
            self.store.set_has_more(False)
            self._logger.info("load-all", status="completed", page_count=total_pages, item_count=len(merged))
        except Exception as e:
            if self._discard_stale(generation):
                return
            message = describe_error(e)
            self.store.set_error(message)
            self._logger.info("load-all", status="failed", reason=message)
        finally:
            if self.store.is_current(generation):
                self.store.set_loading(False)
                self.store.set_initial_loading(False)

from accrete.adapter import describe_error
from accrete.pagers.base import BasePager

__all__ = ("SequentialPager",)


class SequentialPager(BasePager):
    """Loads one page at a time and appends it to the accumulated items."""

    def _should_skip(self, *, replace: bool) -> str | None:
        state = self.store.state
        if state.loading:
            return "already loading"
        if not state.has_more:
            return "no more pages"
        if self.store.resetting and not replace:
            return "session is resetting"
        return None

    async def fetch_page(self, page: int, *, replace: bool = False) -> None:
        """
        Request `page` and fold its items into the store.

        Calls made while another request is in flight, after the last page, or while the session
        is resetting are ignored. Failures end up in the store's `error`, never raised.

        Args:
            page: The page number to request.
            replace: Replace the accumulated items instead of appending to them.
        """
        if reason := self._should_skip(replace=replace):
            self._logger.debug("load-page", page=page, status="skipped", reason=reason)
            return

        generation = self.store.generation
        self.store.set_loading(True)
        self.store.set_error(None)
        try:
            response = await self._fetch_response(page)
            if self._discard_stale(generation, page=page):
                return

            items = self._extract_items(response)
            if not items:
                self.store.set_has_more(False)
                self._logger.info("load-page", page=page, status="completed", item_count=0, has_more=False)
                return

            if replace:
                self.store.replace(items)
            else:
                self.store.append(items)

            has_more = bool(self.config.has_more_predicate(response, list(self.store.state.items)))
            if len(items) < self.config.limit:
                has_more = False
            total_pages = self.config.extract_total_pages(response)
            if total_pages is not None and page >= self._last_page(total_pages):
                has_more = False

            self.store.set_has_more(has_more)
            if has_more:
                self.store.set_page(page)
            self._logger.info("load-page", page=page, status="completed", item_count=len(items), has_more=has_more)
        except Exception as e:
            if self._discard_stale(generation, page=page):
                return
            message = describe_error(e)
            self.store.set_error(message)
            self._logger.info("load-page", page=page, status="failed", reason=message)
        finally:
            if self.store.is_current(generation):
                self.store.set_loading(False)
                self.store.set_initial_loading(False)

    async def load_next_page(self) -> None:
        await self.fetch_page(self.store.state.current_page + 1)

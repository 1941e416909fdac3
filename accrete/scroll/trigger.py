import asyncio
from collections.abc import Callable

from accrete.logging import LoggerType, get_logger
from accrete.pagers.sequential import SequentialPager
from accrete.schema.scroll import ScrollMetrics
from accrete.scroll.source import ScrollSource

__all__ = ("ScrollTrigger",)


class ScrollTrigger:
    """
    Requests the next page once a scroll source is scrolled past `threshold`.

    At most one source is observed at a time. Loads are scheduled as tasks on the running loop;
    no debouncing is done here since the pager ignores calls while a request is in flight.
    """

    def __init__(
        self,
        pager: SequentialPager,
        *,
        threshold: float = 0.8,
        enabled: bool = True,
        logger: LoggerType | None = None,
    ) -> None:
        self._pager = pager
        self.threshold = threshold
        self.enabled = enabled
        self._logger = logger or get_logger()
        self._source: ScrollSource | None = None
        self._unsubscribe: Callable[[], None] | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def source(self) -> ScrollSource | None:
        return self._source

    def attach(self, source: ScrollSource | None) -> None:
        """Observe `source`, detaching from the previously observed one first."""
        self.detach()
        if source is None or not self.enabled:
            return

        self._source = source
        self._unsubscribe = source.subscribe(self.handle_scroll)
        self._logger.debug("scroll-listener", action="attach", source=repr(source))

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._logger.debug("scroll-listener", action="detach", source=repr(self._source))
        self._unsubscribe = None
        self._source = None

    def handle_scroll(self, metrics: ScrollMetrics) -> asyncio.Task | None:
        """Schedule loading the next page if the scroll position calls for it."""
        percentage = metrics.scroll_percentage
        if percentage is None or percentage < self.threshold:
            return None

        state = self._pager.store.state
        if state.loading or not state.has_more:
            return None

        next_page = state.current_page + 1
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._logger.warning(
                "scroll-threshold", percentage=percentage, next_page=next_page, status="skipped", reason="no running loop"
            )
            return None

        self._logger.debug("scroll-threshold", percentage=percentage, next_page=next_page, status="pending")
        task = loop.create_task(self._pager.load_next_page())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait for every load scheduled by scroll events to finish."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

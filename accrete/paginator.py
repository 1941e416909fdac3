from __future__ import annotations

from collections.abc import Callable
from typing import Any, Self

from accrete.lifecycle import SessionLifecycle
from accrete.logging import LoggerType, LogLevel, get_logger, setup_logging
from accrete.pagers import ConcurrentBulkPager, SequentialPager
from accrete.schema import AccumulatorState, PaginatorConfig
from accrete.scroll import ScrollSource, ScrollTrigger
from accrete.settings import settings
from accrete.store import AccumulatorStore, StateListener

__all__ = ("Paginator",)

setup_logging(LogLevel[settings.LOG_LEVEL])


class Paginator:
    """
    Accumulates the records of a paged API for one interactive session.

    Example:
        async with Paginator(fetch_fn=api.list_teams, limit=20) as paginator:
            paginator.register_scroll_container(container)
            ...
            render(paginator.items)

    Args:
        config: A ready `PaginatorConfig`. Mutually exclusive with keyword options.
        viewport: Scroll source observed when no container is registered.
        logger: The logger to use. Defaults to one that also writes to `log_file` when configured.
        **options: Fields of `PaginatorConfig`.
    """

    def __init__(
        self,
        config: PaginatorConfig | None = None,
        *,
        viewport: ScrollSource | None = None,
        logger: LoggerType | None = None,
        **options: Any,
    ) -> None:
        if config is not None and options:
            raise TypeError("Pass either a PaginatorConfig or keyword options, not both")

        self.config = config or PaginatorConfig(**options)
        if logger is None:
            log_file = self.config.log_file
            logger = get_logger(log_file.name, log_file) if log_file else get_logger()
        self._logger = logger
        self._viewport = viewport

        self.store = AccumulatorStore(initial_page=self.config.initial_page, logger=self._logger)
        self.sequential = SequentialPager(self.config, self.store, logger=self._logger)
        self.bulk = ConcurrentBulkPager(self.config, self.store, logger=self._logger)
        self.scroll_trigger = ScrollTrigger(
            self.sequential,
            threshold=self.config.scroll_threshold,
            enabled=self.config.enable_infinite_scroll,
            logger=self._logger,
        )
        self.lifecycle = SessionLifecycle(
            mode=self.config.mode,
            initial_page=self.config.initial_page,
            store=self.store,
            sequential=self.sequential,
            bulk=self.bulk,
            logger=self._logger,
        )
        self.scroll_trigger.attach(viewport)

    async def __aenter__(self) -> Self:
        await self.activate()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def state(self) -> AccumulatorState:
        return self.store.state

    @property
    def items(self) -> list[Any]:
        return list(self.store.state.items)

    @property
    def current_page(self) -> int:
        return self.store.state.current_page

    @property
    def loading(self) -> bool:
        return self.store.state.loading

    @property
    def initial_loading(self) -> bool:
        return self.store.state.initial_loading

    @property
    def has_more(self) -> bool:
        return self.store.state.has_more

    @property
    def error(self) -> str | None:
        return self.store.state.error

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    async def activate(self) -> None:
        await self.lifecycle.activate()

    async def load_next_page(self) -> None:
        await self.sequential.load_next_page()

    def reset(self) -> None:
        self.lifecycle.reset()

    async def refresh(self) -> None:
        await self.lifecycle.refresh()

    def register_scroll_container(self, element: ScrollSource | None) -> None:
        """Observe `element` for infinite scroll; None falls back to the viewport."""
        self.scroll_trigger.attach(element if element is not None else self._viewport)

    def close(self) -> None:
        """Stop observing scroll events. Requests still in flight resolve on their own."""
        self.scroll_trigger.detach()

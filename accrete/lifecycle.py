from accrete.logging import LoggerType, get_logger
from accrete.pagers.bulk import ConcurrentBulkPager
from accrete.pagers.sequential import SequentialPager
from accrete.schema.config import PaginationMode
from accrete.store import AccumulatorStore

__all__ = ("SessionLifecycle",)


class SessionLifecycle:
    """Runs the initial load of a session exactly once and rebuilds the session on reset/refresh."""

    def __init__(
        self,
        *,
        mode: PaginationMode,
        initial_page: int,
        store: AccumulatorStore,
        sequential: SequentialPager,
        bulk: ConcurrentBulkPager,
        logger: LoggerType | None = None,
    ) -> None:
        self.mode = mode
        self.initial_page = initial_page
        self._store = store
        self._sequential = sequential
        self._bulk = bulk
        self._logger = logger or get_logger()
        self._has_fetched = False

    @property
    def has_fetched(self) -> bool:
        return self._has_fetched

    async def _initial_fetch(self) -> None:
        if self.mode == "bulk":
            await self._bulk.fetch_all()
        else:
            await self._sequential.fetch_page(self.initial_page, replace=True)

    async def activate(self) -> None:
        """Perform the initial load. Repeated activations of an initialized session do nothing."""
        if self._has_fetched or self._store.resetting:
            self._logger.debug("activate", mode=self.mode, status="skipped")
            return

        # latched before the first await so concurrent activations see it
        self._has_fetched = True
        self._logger.info("activate", mode=self.mode, status="pending")
        await self._initial_fetch()
        self._logger.info("activate", mode=self.mode, status="completed")

    def reset(self) -> None:
        """Clear the session without loading anything; the next `activate` loads from scratch."""
        self._store.set_resetting(True)
        try:
            self._store.reset_all()
            self._has_fetched = False
        finally:
            self._store.set_resetting(False)

    async def refresh(self) -> None:
        """Clear the session and load it again from the initial page."""
        self._store.set_resetting(True)
        self._store.reset_all()
        generation = self._store.generation
        self._has_fetched = True
        try:
            self._logger.info("refresh", mode=self.mode, status="pending")
            await self._initial_fetch()
            self._logger.info("refresh", mode=self.mode, status="completed")
        finally:
            # a newer reset or refresh owns the guard now
            if self._store.is_current(generation):
                self._store.set_resetting(False)

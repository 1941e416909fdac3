from typing import Any

from accrete.logging import LoggerType, get_logger
from accrete.schema.config import PaginatorConfig
from accrete.store import AccumulatorStore

__all__ = ("BasePager",)


class BasePager:
    def __init__(self, config: PaginatorConfig, store: AccumulatorStore, logger: LoggerType | None = None) -> None:
        self.config = config
        self.store = store
        self._logger = logger or get_logger()

    async def _fetch_response(self, page: int) -> Any:
        limit = self.config.limit
        self._logger.info("fetch-page", page=page, limit=limit, status="pending")
        try:
            response = await self.config.fetch_fn(page, limit)
        except Exception as e:
            self._logger.info("fetch-page", page=page, limit=limit, status="failed", reason=e)
            raise
        self._logger.info("fetch-page", page=page, limit=limit, status="completed")
        return response

    def _extract_items(self, response: Any) -> list[Any]:
        return list(self.config.extract_items(response) or [])

    def _last_page(self, total_pages: int) -> int:
        return self.config.initial_page + total_pages - 1

    def _discard_stale(self, generation: int, **context: Any) -> bool:
        """Check whether a reset happened since `generation` was captured, logging the discarded result."""
        if self.store.is_current(generation):
            return False
        self._logger.info(
            "stale-result",
            generation=generation,
            current_generation=self.store.generation,
            status="skipped",
            **context,
        )
        return True

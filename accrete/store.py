from collections.abc import Callable, Iterable
from typing import Any

from accrete.logging import LoggerType, get_logger
from accrete.schema.state import AccumulatorState

__all__ = ("AccumulatorStore", "StateListener")

StateListener = Callable[[AccumulatorState], None]


class AccumulatorStore:
    """
    Single owner of the accumulated pagination state.

    Every transition replaces the immutable `AccumulatorState` snapshot and notifies subscribers.
    Besides the observable state, the store keeps two pieces of session bookkeeping:

    - `generation`, bumped on every reset so that a request started before the reset can detect
      that its result is stale.
    - `resetting`, raised while a refresh is rebuilding the session.
    """

    def __init__(self, initial_page: int = 1, logger: LoggerType | None = None) -> None:
        self._initial_page = initial_page
        self._logger = logger or get_logger()
        self._state = AccumulatorState(current_page=initial_page)
        self._generation = 0
        self._resetting = False
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> AccumulatorState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def resetting(self) -> bool:
        return self._resetting

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register `listener` for every new snapshot. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                self._logger.warning("state-listener", status="failed", reason=e)

    def append(self, items: Iterable[Any]) -> None:
        self._update(items=[*self._state.items, *items])

    def replace(self, items: Iterable[Any]) -> None:
        self._update(items=list(items))

    def set_error(self, message: str | None) -> None:
        self._update(error=message)

    def set_loading(self, loading: bool) -> None:
        self._update(loading=loading)

    def set_initial_loading(self, initial_loading: bool) -> None:
        self._update(initial_loading=initial_loading)

    def set_has_more(self, has_more: bool) -> None:
        self._update(has_more=has_more)

    def set_page(self, page: int) -> None:
        self._update(current_page=page)

    def set_resetting(self, resetting: bool) -> None:
        self._resetting = resetting

    def reset_all(self) -> None:
        """Drop everything accumulated and invalidate requests still in flight."""
        self._generation += 1
        self._logger.info("reset-state", generation=self._generation, dropped=len(self._state.items))
        self._update(
            items=[],
            current_page=self._initial_page,
            loading=False,
            initial_loading=True,
            has_more=True,
            error=None,
        )

from collections.abc import Callable

from accrete.schema.scroll import ScrollMetrics

__all__ = ("ScrollListener", "ScrollSource", "ViewportScrollSource", "ElementScrollSource")

ScrollListener = Callable[[ScrollMetrics], None]


class ScrollSource:
    """
    Something that scrolls: exposes its current metrics and notifies listeners on every scroll.

    Hosts feed positions in through `scroll_to`; listeners are passive and cannot veto a scroll.
    Scrolls that should load pages must be fed from inside a running event loop, since the
    infinite scroll listener schedules each load as a task on it.
    """

    def __init__(self) -> None:
        self._listeners: list[ScrollListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get_metrics(self) -> ScrollMetrics:
        raise NotImplementedError("Subclasses must implement this method.")

    def subscribe(self, listener: ScrollListener) -> Callable[[], None]:
        """Register `listener` for scroll events. Returns a callable that detaches it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        metrics = self.get_metrics()
        for listener in list(self._listeners):
            listener(metrics)

    def scroll_to(self, position: float) -> None:
        raise NotImplementedError("Subclasses must implement this method.")


class ViewportScrollSource(ScrollSource):
    """The top-level window: document height against the visible viewport height."""

    def __init__(self, *, document_height: float = 0, inner_height: float = 0, scroll_y: float = 0) -> None:
        super().__init__()
        self.document_height = document_height
        self.inner_height = inner_height
        self.scroll_y = scroll_y

    def get_metrics(self) -> ScrollMetrics:
        return ScrollMetrics(
            scroll_top=self.scroll_y,
            scroll_height=self.document_height,
            client_height=self.inner_height,
        )

    def resize(self, *, document_height: float | None = None, inner_height: float | None = None) -> None:
        if document_height is not None:
            self.document_height = document_height
        if inner_height is not None:
            self.inner_height = inner_height

    def scroll_to(self, position: float) -> None:
        self.scroll_y = position
        self._emit()


class ElementScrollSource(ScrollSource):
    """A scrollable container element inside the page."""

    def __init__(
        self,
        name: str | None = None,
        *,
        scroll_height: float = 0,
        client_height: float = 0,
        scroll_top: float = 0,
    ) -> None:
        super().__init__()
        self.name = name
        self.scroll_height = scroll_height
        self.client_height = client_height
        self.scroll_top = scroll_top

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"

    def get_metrics(self) -> ScrollMetrics:
        return ScrollMetrics(
            scroll_top=self.scroll_top,
            scroll_height=self.scroll_height,
            client_height=self.client_height,
        )

    def resize(self, *, scroll_height: float | None = None, client_height: float | None = None) -> None:
        if scroll_height is not None:
            self.scroll_height = scroll_height
        if client_height is not None:
            self.client_height = client_height

    def scroll_to(self, position: float) -> None:
        self.scroll_top = position
        self._emit()

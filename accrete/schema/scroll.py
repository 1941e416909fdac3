from pydantic import BaseModel, ConfigDict

__all__ = ("ScrollMetrics",)


class ScrollMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    scroll_top: float = 0
    scroll_height: float = 0
    client_height: float = 0

    @property
    def scrollable_range(self) -> float:
        return self.scroll_height - self.client_height

    @property
    def scroll_percentage(self) -> float | None:
        """Fraction of the scrollable range already scrolled, or None when nothing can scroll."""
        if self.scrollable_range <= 0:
            return None
        return self.scroll_top / self.scrollable_range

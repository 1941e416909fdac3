from accrete.scroll.source import ElementScrollSource, ScrollListener, ScrollSource, ViewportScrollSource
from accrete.scroll.trigger import ScrollTrigger

__all__ = ("ElementScrollSource", "ScrollListener", "ScrollSource", "ScrollTrigger", "ViewportScrollSource")

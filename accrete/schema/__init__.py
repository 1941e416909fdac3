from accrete.schema.config import FetchFn, PaginationMode, PaginatorConfig
from accrete.schema.scroll import ScrollMetrics
from accrete.schema.state import AccumulatorState

__all__ = ("AccumulatorState", "FetchFn", "PaginationMode", "PaginatorConfig", "ScrollMetrics")

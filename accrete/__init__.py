from accrete.dedup import identity_key, merge_unique
from accrete.exceptions import AccreteError, RequestException
from accrete.logging import SessionLogFile
from accrete.client import HttpPageClient
from accrete.paginator import Paginator
from accrete.schema import AccumulatorState, PaginatorConfig, ScrollMetrics
from accrete.scroll import ElementScrollSource, ScrollSource, ViewportScrollSource

__all__ = (
    "AccreteError",
    "AccumulatorState",
    "ElementScrollSource",
    "HttpPageClient",
    "Paginator",
    "PaginatorConfig",
    "RequestException",
    "ScrollMetrics",
    "ScrollSource",
    "SessionLogFile",
    "ViewportScrollSource",
    "identity_key",
    "merge_unique",
)

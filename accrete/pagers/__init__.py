from accrete.pagers.base import BasePager
from accrete.pagers.bulk import ConcurrentBulkPager
from accrete.pagers.sequential import SequentialPager

__all__ = ("BasePager", "ConcurrentBulkPager", "SequentialPager")

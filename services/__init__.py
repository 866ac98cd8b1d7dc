"""
Services backing the list controller: filtering and pagination.
"""

from .errors import ListControllerError, SearchConfigurationError
from .filter_service import FilterService
from .pagination_service import PaginationService, QUANTITY_PAGE_PER_LOT

__all__ = [
    'ListControllerError',
    'SearchConfigurationError',
    'FilterService',
    'PaginationService',
    'QUANTITY_PAGE_PER_LOT',
]

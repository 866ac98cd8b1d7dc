"""
List Controller

Backs a UI list view (table, grid) with an in-memory entity collection:
- paginated access to the current (possibly filtered) list
- a visible-page window for the page selector, moved in whole lots
- cached multi-field search delegated to FilterService

The controller is single-threaded: callers serialize access, e.g. from one
UI event loop or one request at a time.
"""

import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, TypeVar

import config
from models.entity_store import EntityStore
from models.search_criterion import SearchCriterion
from services.filter_service import FilterService
from services.pagination_service import PaginationService, QUANTITY_PAGE_PER_LOT

logger = logging.getLogger(__name__)

M = TypeVar('M')

PageHandler = Callable[[int], Any]
FilterHandler = Callable[[List[SearchCriterion]], Any]


class ListController(Generic[M]):
    """
    Pagination, page-window and search state for one UI list.

    Two hooks let the UI take over navigation and filtering. For each, either
    the built-in behavior (``set_page`` / ``search``) or a caller-supplied
    callback runs; a supplied callback replaces the built-in one, so a
    callback that still wants it must call ``set_page`` / ``search`` itself.
    """

    QUANTITY_PAGE_PER_LOT = QUANTITY_PAGE_PER_LOT

    def __init__(
        self,
        model: type,
        row_per_page: Optional[int] = None,
        factory: Optional[Callable[[Any], M]] = None,
        on_change_page: Optional[PageHandler] = None,
        on_filter: Optional[FilterHandler] = None,
        filter_service: Optional[FilterService] = None,
        pagination_service: Optional[PaginationService] = None,
    ):
        """
        Args:
            model: Canonical entity class
            row_per_page: Page size; 0 shows everything on one page.
                Defaults to config.LIST_PAGE_SIZE
            factory: Optional raw-record to entity converter (see EntityStore)
            on_change_page: Custom page-changed handler, or None for set_page
            on_filter: Custom filter-requested handler, or None for search
            filter_service: FilterService instance (or None for default)
            pagination_service: PaginationService instance (or None for default)
        """
        self._store: EntityStore[M] = EntityStore(model, factory)
        self._filter = filter_service or FilterService()
        self._pagination = pagination_service or PaginationService(self.QUANTITY_PAGE_PER_LOT)
        self._row_per_page = config.LIST_PAGE_SIZE if row_per_page is None else row_per_page

        self._view: List[Any] = self._store.slots
        self._current_list: List[M] = []
        self._current_page = 1
        self._total_page = 0
        self._total = 0
        self._visible_pages: Optional[List[int]] = None
        self._data: Dict[str, Any] = {}

        self._page_handler_active = False
        self.set_page_handler(on_change_page)
        self.set_filter_handler(on_filter)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    @property
    def model(self) -> type:
        return self._store.model

    @property
    def row_per_page(self) -> int:
        return self._row_per_page

    @property
    def current_list(self) -> List[M]:
        return self._current_list

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_page(self) -> int:
        return self._total_page

    @property
    def total(self) -> int:
        return self._total

    @property
    def visible_pages(self) -> List[int]:
        return list(self._visible_pages) if self._visible_pages else []

    @property
    def first_visible_page(self) -> int:
        return self._visible_pages[0] if self._visible_pages else 0

    @property
    def last_visible_page(self) -> int:
        return self._visible_pages[-1] if self._visible_pages else 0

    @property
    def is_filtered(self) -> bool:
        return self._view is not self._store.slots

    @property
    def original_list(self) -> List[Any]:
        return self._store.slots

    @property
    def list(self) -> List[Any]:
        """The current view: the original list, or the last search result."""
        return self._view

    @list.setter
    def list(self, records: Optional[Iterable[Any]]) -> None:
        self._store.reset(records)
        self._filter.reset()
        self._current_page = 1
        self._total = len(self._store)
        logger.debug(f"List of {self._store.model_name} replaced: {self._total} entities")

        self._update_list(self._store.slots)

    # ------------------------------------------------------------------
    # Ancillary data
    # ------------------------------------------------------------------
    def get_data(self, name: str, default: Any = None) -> Any:
        return self._data.get(name, default)

    def set_data(self, name: str, value: Any) -> None:
        self._data[name] = value

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------
    def set_page_handler(self, callback: Optional[PageHandler]) -> None:
        """Select the page-changed handler: a callback, or None for set_page."""
        self._custom_page_handler = callback
        self._dispatch_page = callback if callback is not None else self.set_page

    def set_filter_handler(self, callback: Optional[FilterHandler]) -> None:
        """Select the filter-requested handler: a callback, or None for search."""
        self._custom_filter_handler = callback
        self._dispatch_filter = callback if callback is not None else self.search

    def on_change_page(self, page: int) -> None:
        """Page-changed hook: records the page, then runs the selected handler."""
        self._current_page = page
        was_active, self._page_handler_active = self._page_handler_active, True
        try:
            self._dispatch_page(page)
        finally:
            self._page_handler_active = was_active

    def on_filter(self, criteria: List[SearchCriterion]) -> None:
        """Filter-requested hook: runs the selected handler."""
        self._dispatch_filter(criteria)

    def _notify_page_changed(self, page: int) -> None:
        # The built-in handler is set_page itself; only callbacks are told
        if self._custom_page_handler is None or self._page_handler_active:
            return
        self._page_handler_active = True
        try:
            self._custom_page_handler(page)
        finally:
            self._page_handler_active = False

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------
    def set_page(self, page: int) -> 'ListController[M]':
        """
        Show a page of the current view.

        Non-numeric input means page 1. A page past the data gives an empty
        ``current_list``; when that happens beyond page 1 the controller
        steps back with ``previous`` instead of committing the page.
        """
        page = self._pagination.coerce_page(page)
        view = self._view
        start, end = self._pagination.page_bounds(page, self._row_per_page, len(view))

        current = view[start:end]
        for offset, entity in enumerate(current):
            if not self._store.is_canonical(entity):
                if view is self._store.slots:
                    index = start + offset
                else:
                    index = self._store.index_of(entity)
                current[offset] = self._store.materialize(index)
        self._current_list = current

        if page > 1 and not current:
            self.previous()
        else:
            self._current_page = page
            self._notify_page_changed(page)

        return self

    def next(self) -> None:
        if self._current_page < self._total_page:
            if self._current_page == self.last_visible_page:
                self.next_pages()
            else:
                self.on_change_page(self._current_page + 1)

    def previous(self) -> None:
        if self._current_page > 1:
            if self._current_page == self.first_visible_page:
                self.previous_pages()
            else:
                self.on_change_page(self._current_page - 1)

    def next_pages(self) -> None:
        """Slide the window one lot forward and go to its first page."""
        self._next_pages(set_current_page=True)

    def previous_pages(self) -> None:
        """Slide the window one lot back and go to its last page."""
        if self.first_visible_page > 1:
            self._generate_visible_pages(forward=False)
            self.on_change_page(self.last_visible_page)

    def _next_pages(self, set_current_page: bool) -> bool:
        if self.last_visible_page < self._total_page:
            self._generate_visible_pages(forward=True)
            if set_current_page:
                self.on_change_page(self.first_visible_page)
            return True
        return False

    def _generate_visible_pages(self, forward: bool = True) -> None:
        self._visible_pages = self._pagination.generate_visible_pages(
            self._total_page, self._visible_pages, forward
        )
        logger.debug(f"Visible pages: {self._visible_pages}")

    def _update_list(self, view: List[Any]) -> None:
        """Rebuild page count, current page and window for a new view."""
        self._view = view
        self._visible_pages = None

        if not view:
            self._current_list = []
            self._total_page = 0
            return

        self._total_page = self._pagination.calculate_total_pages(len(view), self._row_per_page)
        if self._row_per_page:
            self._current_page = self._pagination.validate_page(self._current_page, self._total_page)
        else:
            self._current_page = 1

        self.set_page(self._current_page)

        self._generate_visible_pages()
        while self._visible_pages and self._current_page not in self._visible_pages:
            if not self._next_pages(set_current_page=False):
                break

    # ------------------------------------------------------------------
    # Search / mutation
    # ------------------------------------------------------------------
    def search(
        self,
        criteria: Optional[Iterable[SearchCriterion]],
        identical_search: bool = True
    ) -> 'ListController[M]':
        """
        Filter the original list and go back to page 1.

        Vacuous criteria (no value, blank string, empty list, predicate with
        a blank cache name) are removed from ``criteria`` when it is a list.
        Results are cached per criteria signature until the list is replaced.

        Args:
            criteria: Search criteria
            identical_search: True to require every criterion to match,
                False to require at least one

        Raises:
            SearchConfigurationError: A predicate criterion has no cache name
        """
        if criteria is None:
            criteria = []
        elif not isinstance(criteria, list):
            criteria = list(criteria)

        view = self._filter.filter(self._store, criteria, identical_search)

        self._total = len(view)
        self._visible_pages = None
        self._current_page = 1

        self._update_list(view)
        return self

    def remove(self, entity: M) -> bool:
        """
        Remove an entity (by identity) from the list and every cached view.

        The controller falls back to the unfiltered list afterwards.

        Returns:
            False if the entity is not in the list, True otherwise
        """
        index = self._store.index_of(entity)
        if index == -1:
            return False

        self._filter.forget(entity)
        self._store.remove_at(index)
        self._total = len(self._store)
        logger.debug(f"Removed {self._store.model_name} at position {index}")

        self._update_list(self._store.slots)
        return True

    def clean(self) -> 'ListController[M]':
        """Empty the list and the filter cache."""
        self.list = None
        self._filter.reset()
        self._total = 0
        return self

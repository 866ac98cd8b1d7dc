"""
Filter engine with a permanent, signature-keyed result cache.

A search is described by a list of criteria. Each criterion contributes a
normalized token to a cache signature; the filtered view computed for a
signature is kept until the original list is replaced, so repeating a search
(e.g. while the user edits and restores a search box) never rescans the list.

Per-entity data lives in side tables keyed by entity identity instead of on
the entities themselves:
- normalized field values, so a field is normalized once per entity
- the cache keys of the cached views an entity belongs to, so removing the
  entity can splice it out of those views without recomputing them
"""

import logging
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Set, Tuple

from models.entity_store import EntityStore
from models.search_criterion import SearchCriterion
from services.errors import SearchConfigurationError
from utils.text import loose_equals, normalize, resolve_path

logger = logging.getLogger(__name__)

SIGNATURE_SEPARATOR = '#|#'

# Cache key prefixes per match mode
ALL_CRITERIA_PREFIX = 'AND|'
ANY_CRITERIA_PREFIX = 'OR|'


class ActiveCriterion(NamedTuple):
    """A non-vacuous criterion with its value prepared for matching."""
    name: str
    values: Tuple[Any, ...]
    predicate: Any = None


def is_vacuous(criterion: SearchCriterion) -> bool:
    """True when a criterion cannot restrict anything and must be dropped."""
    value = criterion.value
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    if callable(value):
        return isinstance(criterion.cache_name, str) and criterion.cache_name.strip() == ''
    return False


def _normalize_value(value: Any) -> Any:
    return normalize(value) if isinstance(value, str) else value


class FilterService:
    """Filters an entity store by criteria and caches the results."""

    def __init__(self):
        self._cache: Dict[str, List[Any]] = {}
        self._normalized: Dict[int, Dict[str, Any]] = {}
        self._references: Dict[int, Set[str]] = {}

    def reset(self) -> None:
        """Drop every cached view and side-table entry."""
        self._cache = {}
        self._normalized = {}
        self._references = {}

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def cache_key(self, signature: str, identical_search: bool = True) -> str:
        prefix = ALL_CRITERIA_PREFIX if identical_search else ANY_CRITERIA_PREFIX
        return prefix + signature

    def cached_view(self, signature: str, identical_search: bool = True) -> Optional[List[Any]]:
        return self._cache.get(self.cache_key(signature, identical_search))

    def prune_criteria(self, criteria: List[SearchCriterion]) -> List[SearchCriterion]:
        """Remove vacuous criteria from the list in place and return it."""
        criteria[:] = [criterion for criterion in criteria if not is_vacuous(criterion)]
        return criteria

    def compile(
        self,
        criteria: Sequence[SearchCriterion],
        model_name: str = None
    ) -> Tuple[str, List[ActiveCriterion]]:
        """
        Build the cache signature and matchable form of pruned criteria.

        Args:
            criteria: Criteria without vacuous entries
            model_name: Entity model name used in error messages

        Returns:
            Tuple of (signature, active criteria); the signature is empty
            when there is nothing to filter by

        Raises:
            SearchConfigurationError: A predicate criterion has no cache name
        """
        signature = ''
        active: List[ActiveCriterion] = []

        for criterion in criteria:
            value = criterion.value
            if callable(value):
                if criterion.cache_name is None:
                    raise SearchConfigurationError(criterion.name, model_name)
                token = str(criterion.cache_name)
                active.append(ActiveCriterion(criterion.name, (), value))
            elif isinstance(value, (list, tuple)):
                values = tuple(_normalize_value(item) for item in value)
                token = ','.join(str(item) for item in values)
                active.append(ActiveCriterion(criterion.name, values))
            else:
                normalized = _normalize_value(value)
                token = str(normalized)
                active.append(ActiveCriterion(criterion.name, (normalized,)))

            signature += f"{criterion.name}={token}" + SIGNATURE_SEPARATOR

        return signature, active

    def filter(
        self,
        store: EntityStore,
        criteria: List[SearchCriterion],
        identical_search: bool = True
    ) -> List[Any]:
        """
        Return the filtered view of a store for the given criteria.

        Vacuous criteria are removed from ``criteria`` in place. With no
        active criteria the store's own list is returned (unfiltered view).
        A cached view is returned verbatim when the signature and the
        match mode both hit.

        Args:
            store: Original list of entities
            criteria: Search criteria, ANDed or ORed by ``identical_search``
            identical_search: True requires every criterion to match,
                False requires at least one

        Returns:
            The filtered view (a list of canonical entities)
        """
        if not criteria:
            return store.slots

        self.prune_criteria(criteria)
        signature, active = self.compile(criteria, store.model_name)
        if not signature:
            return store.slots

        key = self.cache_key(signature, identical_search)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Filter cache hit for {key!r} ({len(cached)} entities)")
            return cached

        view: List[Any] = []
        self._cache[key] = view
        for index in range(len(store)):
            entity = store.materialize(index)
            matches = self._count_matches(entity, active)
            if (not identical_search and matches > 0) or matches == len(active):
                view.append(entity)
                self._references.setdefault(id(entity), set()).add(key)

        logger.debug(
            f"Filter cache miss for {key!r}: {len(view)} of {len(store)} entities match"
        )
        return view

    def _count_matches(self, entity: Any, active: Sequence[ActiveCriterion]) -> int:
        count = 0
        for criterion in active:
            original_value = resolve_path(entity, criterion.name)
            if not original_value:
                continue

            field_value = self._normalized_field(entity, criterion.name, original_value)

            if criterion.predicate is not None:
                if criterion.predicate(entity):
                    count += 1
                continue

            for value in criterion.values:
                if (isinstance(field_value, str) and str(value) in field_value) \
                        or loose_equals(field_value, value):
                    count += 1
                    break
        return count

    def _normalized_field(self, entity: Any, name: str, original_value: Any) -> Any:
        memo = self._normalized.setdefault(id(entity), {})
        if name not in memo:
            memo[name] = _normalize_value(original_value)
        return memo[name]

    def forget(self, entity: Any) -> int:
        """
        Splice an entity out of every cached view it was recorded in.

        Args:
            entity: Entity about to leave the original list

        Returns:
            Number of cached views the entity was removed from
        """
        entity_id = id(entity)
        keys = self._references.pop(entity_id, set())
        self._normalized.pop(entity_id, None)

        pruned = 0
        for key in keys:
            view = self._cache.get(key)
            if view is None:
                continue
            for position, cached_entity in enumerate(view):
                if cached_entity is entity:
                    del view[position]
                    pruned += 1
                    break

        if pruned:
            logger.debug(f"Removed entity from {pruned} cached filter views")
        return pruned

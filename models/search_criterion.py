"""
Search criterion passed to ``ListController.search``.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

CriterionValue = Union[str, int, float, Sequence[Union[str, int, float]], Callable[[Any], Any], None]


@dataclass
class SearchCriterion:
    """One (property path, value, cache name) search term.

    Attributes:
        name: Dot-separated property path resolved on each entity
        value: Scalar, list of scalars, or a predicate taking the entity
        cache_name: Required for predicates; identifies the predicate in
            the filter cache since a function has no comparable value
    """
    name: str
    value: CriterionValue = None
    cache_name: Optional[str] = None

    @property
    def is_predicate(self) -> bool:
        return callable(self.value)

    @classmethod
    def from_dict(cls, data: dict) -> 'SearchCriterion':
        """Build a criterion from a JSON-style dict with name/value/cache_name keys."""
        return cls(
            name=data['name'],
            value=data.get('value'),
            cache_name=data.get('cache_name', data.get('cacheName')),
        )

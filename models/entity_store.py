"""
Index-addressed storage for the original entity list.

Slots hold either raw records (e.g. freshly decoded JSON) or canonical
entities. A raw slot is upgraded to its canonical form the first time it is
accessed and the upgraded instance replaces the slot, so the conversion
happens at most once per slot and never for records that are never read.
"""

from collections.abc import Mapping
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar


M = TypeVar('M')


class EntityStore(Generic[M]):
    """Original list of entities with lazy materialization."""

    def __init__(self, model: type, factory: Optional[Callable[[Any], M]] = None):
        """
        Args:
            model: Canonical entity class; instances of it are never converted
            factory: Optional callable turning a raw record into a ``model``
                instance. Defaults to ``model(**raw)`` for mappings and
                ``model(raw)`` otherwise.
        """
        self.model = model
        self.factory = factory
        self._slots: List[Any] = []

    @property
    def model_name(self) -> str:
        return getattr(self.model, '__name__', repr(self.model))

    @property
    def slots(self) -> List[Any]:
        """The underlying list object; its identity marks the unfiltered view."""
        return self._slots

    def reset(self, records: Optional[Iterable[Any]]) -> None:
        # A fresh list object: the caller's sequence is never mutated
        self._slots = list(records) if records else []

    def __len__(self):
        return len(self._slots)

    def is_canonical(self, obj: Any) -> bool:
        return isinstance(obj, self.model)

    def materialize(self, index: int) -> M:
        """Return the canonical entity at ``index``, converting the slot if needed."""
        obj = self._slots[index]
        if not self.is_canonical(obj):
            obj = self._build(obj)
            self._slots[index] = obj
        return obj

    def _build(self, raw: Any) -> M:
        if self.factory is not None:
            entity = self.factory(raw)
        elif isinstance(raw, Mapping):
            entity = self.model(**raw)
        else:
            entity = self.model(raw)

        on_init = getattr(entity, 'on_init', None)
        if callable(on_init):
            on_init()
        return entity

    def index_of(self, obj: Any) -> int:
        """Position of ``obj`` by identity, or -1 when it is not stored."""
        for index, slot in enumerate(self._slots):
            if slot is obj:
                return index
        return -1

    def remove_at(self, index: int) -> Any:
        return self._slots.pop(index)

from abc import ABC


class Entity(ABC):
    """Base class for canonical list entities.

    Subclassing is optional: the list controller accepts any class as the
    entity model and only relies on the optional ``on_init`` hook.
    """

    def on_init(self):
        """Called once, right after a raw record is materialized into this entity"""
        pass

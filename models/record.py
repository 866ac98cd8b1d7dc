"""
Generic attribute-style entity used when records arrive as plain JSON.
"""

from typing import Any, Dict

from models.entity import Entity


class Record(Entity):
    """Canonical form of a JSON object: keys become attributes.

    Nested objects stay plain dicts; property paths resolve through them.
    """

    def __init__(self, **fields: Any):
        self.__dict__.update(fields)

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in self.__dict__.items() if not key.startswith('_')}

    def __repr__(self):
        fields = ', '.join(f'{key}={value!r}' for key, value in self.to_dict().items())
        return f'Record({fields})'

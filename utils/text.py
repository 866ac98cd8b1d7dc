"""
Text and value helpers shared by the filter engine.

Normalization is accent- and case-insensitive so that "José" and "jose"
compare equal.
"""

import unicodedata
from collections.abc import Mapping
from typing import Any


def normalize(text: str) -> str:
    """
    Lower-case a string and strip its diacritics.

    The string is decomposed (NFD) and every combining mark is dropped,
    so "Ñandú" becomes "nandu".
    """
    decomposed = unicodedata.normalize('NFD', text)
    stripped = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower()


def resolve_path(obj: Any, path: str) -> Any:
    """
    Resolve a dot-separated property path against an object.

    Each segment is looked up as a mapping key when the current value is a
    mapping, otherwise as an attribute. A missing or falsy intermediate
    value stops the traversal and is returned as-is (usually None).

    Args:
        obj: Root object (entity)
        path: Property path such as "address.city"

    Returns:
        The resolved value, or None if a segment is missing
    """
    value = obj
    for name in path.split('.'):
        if not value:
            break
        if isinstance(value, Mapping):
            value = value.get(name)
        else:
            value = getattr(value, name, None)
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def loose_equals(left: Any, right: Any) -> bool:
    """Equality that also matches a number against its string form ("5" == 5)."""
    if left == right:
        return True
    if isinstance(left, str) and _is_number(right):
        return left == _number_text(right)
    if isinstance(right, str) and _is_number(left):
        return right == _number_text(left)
    return False


def _number_text(number) -> str:
    # 5.0 renders as "5" so it matches the integer's text
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)

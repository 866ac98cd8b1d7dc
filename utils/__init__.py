"""
Utility modules for the list controller.
"""

from .text import normalize, resolve_path, loose_equals

__all__ = ['normalize', 'resolve_path', 'loose_equals']

"""Source provider interface.

Concrete providers live in the platforms/ directory.
"""

from .base import SourceProvider

__all__ = ["SourceProvider"]

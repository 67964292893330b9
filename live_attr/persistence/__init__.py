"""
Persistence package.

The authoritative store behind the cache. ``DocumentRepository`` is the
contract the cache engine consumes; ``InMemoryRepository`` is a
dict-backed implementation for tests and single-process use.
"""

from .base import DocumentRepository
from .memory import InMemoryRepository

__all__ = ["DocumentRepository", "InMemoryRepository"]

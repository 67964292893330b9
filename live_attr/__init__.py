"""
live_attr: Redis-backed live attributes for persisted documents.

Write-heavy counters (page views, likes, downloads) are incremented in
Redis and written back to the database in one batch when the host asks
for it, instead of costing a database write per event.
"""

from .cache import IncrementResult, LiveAttributes
from .fields import FieldKind, LiveDocument, LiveField
from .manager import LiveAttrManager
from .persistence import DocumentRepository, InMemoryRepository
from .redis_client import create_redis_client

__all__ = [
    "DocumentRepository",
    "FieldKind",
    "InMemoryRepository",
    "IncrementResult",
    "LiveAttrManager",
    "LiveAttributes",
    "LiveDocument",
    "LiveField",
    "create_redis_client",
]

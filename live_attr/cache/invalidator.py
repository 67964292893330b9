"""
Cache cleanup for deleted documents.
"""

from shared.logging import get_logger
from ..fields.models import LiveDocument
from .hash_store import HashStore
from .keys import KeyDeriver
from .object_cache import ObjectCache


class CacheInvalidator:
    """Removes every cache entry belonging to one document."""

    def __init__(self, store: HashStore, keys: KeyDeriver):
        self.store = store
        self.keys = keys
        self.logger = get_logger("live_attr.invalidator")

    def clean(self, document: LiveDocument) -> int:
        """Delete live attribute keys and the snapshot in one HDEL. Idempotent."""
        stale = self.keys.live_keys(self.keys.resolve_identity(document))
        stale.append(ObjectCache.snapshot_key(document.primary_identity()))

        removed = self.store.delete(stale)
        self.logger.info("Cache cleaned", namespace=self.store.namespace, keys=len(stale), removed=removed)
        return removed

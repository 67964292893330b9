"""
Live attribute caching package.

Everything that talks to Redis lives here. Each document type owns one
Redis hash (its namespace) holding per-field counters keyed by
``{identity}_{field}`` and whole-document JSON snapshots keyed by the
primary identity.

Modules of interest:
- hash_store: Namespaced wrapper over the redis-py hash commands.
- keys: Cache key derivation.
- attribute_cache: Read-through accessor for single live attributes.
- increment: Seeded, type-aware atomic increments.
- object_cache: Snapshot fetch with schema-drift fallback.
- invalidator: Cleanup after deletion.
"""

from .attribute_cache import AttributeCache, LiveAttributes
from .hash_store import HashStore
from .increment import IncrementEngine, IncrementResult
from .invalidator import CacheInvalidator
from .keys import KeyDeriver
from .object_cache import ObjectCache

__all__ = [
    "AttributeCache",
    "CacheInvalidator",
    "HashStore",
    "IncrementEngine",
    "IncrementResult",
    "KeyDeriver",
    "LiveAttributes",
    "ObjectCache",
]

"""
Read-through access to live attributes.
"""

from typing import Any, Optional

from shared.errors import InvalidFieldError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..fields.models import LiveDocument
from .hash_store import HashStore
from .keys import KeyDeriver


class AttributeCache:
    """Reads live attributes from Redis, filling the cache on a miss."""

    def __init__(self, store: HashStore, keys: KeyDeriver, metrics: Optional[MetricsCollector] = None):
        self.store = store
        self.keys = keys
        self.metrics = metrics
        self.logger = get_logger("live_attr.attribute_cache")

    def get(self, document: LiveDocument, field: str) -> Any:
        """
        Current value of a live attribute.

        On a hit the raw Redis value is coerced to the declared type and
        the entry is left untouched. On a miss the in-memory value is
        written to Redis (running the field's default factory first when
        the value is unset) so the next read hits, and the value is
        returned as it decodes from Redis. A value that stays ``None`` is
        not cached. Filled entries never expire.

        Raises:
            InvalidFieldError: field is not live on the document's type.
        """
        live_field = type(document).live_field(field)
        key = self.keys.key(document, field)

        raw = self.store.get(key)
        if raw is not None:
            self._record("live_attr_cache_hits_total")
            self.logger.debug("Live attribute cache hit", namespace=self.store.namespace, key=key)
            return live_field.decode(raw)

        self._record("live_attr_cache_misses_total")
        value = getattr(document, field)
        if value is None and live_field.default_factory is not None:
            setattr(document, field, live_field.default_factory())
            value = getattr(document, field)

        if value is None:
            # an empty entry would block seeding of the first increment
            self.logger.debug("Live attribute unset, not cached", namespace=self.store.namespace, key=key)
            return None

        encoded = live_field.encode(value)
        self.store.set(key, encoded)
        self.logger.debug("Live attribute cache filled", namespace=self.store.namespace, key=key)
        return live_field.decode(encoded)

    def _record(self, metric_name: str) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, cache_type="attribute")


class LiveAttributes:
    """
    Attribute-style view over a document's live attributes.

        views = manager.attributes(article).view
    """

    def __init__(self, cache: AttributeCache, document: LiveDocument):
        self._cache = cache
        self._document = document

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._cache.get(self._document, name)
        except InvalidFieldError:
            raise AttributeError(f"{type(self._document).__name__} has no live attribute {name!r}") from None

    def __getitem__(self, name: str) -> Any:
        return self._cache.get(self._document, name)

    def __dir__(self):
        return list(type(self._document).live_fields())

"""
Host-facing facade for live attributes.
"""

from typing import Any, Generic, Optional, Type, TypeVar, Union

import redis

from shared.config import LiveAttrConfig
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from .cache.attribute_cache import AttributeCache, LiveAttributes
from .cache.hash_store import HashStore
from .cache.increment import IncrementEngine, IncrementResult
from .cache.invalidator import CacheInvalidator
from .cache.keys import KeyDeriver
from .cache.object_cache import ObjectCache
from .fields.models import LiveDocument
from .persistence.base import DocumentRepository
from .sync.reconcile import ReconciliationEngine

D = TypeVar("D", bound=LiveDocument)


class LiveAttrManager(Generic[D]):
    """
    Live attribute operations for one document type.

    Wires the cache components around a single injected Redis client and
    the type's repository. Writes go through ``save``/``delete`` so the
    snapshot refresh and cache cleanup hooks run exactly once per
    successful write; hosts persisting documents some other way must call
    ``on_after_persist``/``on_after_delete`` themselves.

        manager = LiveAttrManager(Article, create_redis_client(), repository)
        manager.incr(article.id, "view")
        manager.update_db(article)
    """

    def __init__(
        self,
        model: Type[D],
        client: redis.Redis,
        repository: DocumentRepository,
        metrics: Optional[MetricsCollector] = None,
        config: Optional[LiveAttrConfig] = None
    ):
        self.model = model
        self.repository = repository
        self.logger = get_logger("live_attr.manager")

        namespace = model.namespace()
        if config is not None:
            namespace = config.namespace_for(namespace)

        self.store = HashStore(client, namespace)
        self.keys = KeyDeriver(model)
        self.attribute_cache = AttributeCache(self.store, self.keys, metrics)
        self.increments = IncrementEngine(self.store, model, metrics)
        self.reconciler = ReconciliationEngine(self.store, self.keys, self.save, metrics)
        self.objects = ObjectCache(self.store, model, repository, metrics)
        self.invalidator = CacheInvalidator(self.store, self.keys)

    @property
    def namespace(self) -> str:
        return self.store.namespace

    # Keys

    def identity(self, document: D) -> Any:
        return self.keys.resolve_identity(document)

    def key(self, document: D, field: str) -> str:
        """Redis key of one live attribute, e.g. ``54d5f10d_view``."""
        return self.keys.key(document, field)

    # Reads

    def get(self, document: D, field: str) -> Any:
        return self.attribute_cache.get(document, field)

    def attributes(self, document: D) -> LiveAttributes:
        return LiveAttributes(self.attribute_cache, document)

    def fetch(self, identity: Any) -> D:
        return self.objects.fetch(identity)

    # Increments

    def incr(self, identity: Any, field: str, amount: Any = 1) -> Union[int, float, str]:
        """
        Increment a live attribute by live identity.

        Returns the new value, or the error message when the field is not
        live or the amount does not fit its type. The first increment of
        a key starts from the value persisted in the repository.
        """
        return self.incr_result(identity, field, amount).render()

    def incr_result(self, identity: Any, field: str, amount: Any = 1) -> IncrementResult:
        def persisted_value():
            return getattr(self.repository.find_by(self.model.live_key, identity), field)

        return self.increments.incr(identity, field, amount, baseline=persisted_value)

    def incr_document(self, document: D, field: str, amount: Any = 1) -> Union[int, float, str]:
        """Same as ``incr`` for a loaded document, seeded from its current value."""
        result = self.increments.incr(
            self.identity(document), field, amount,
            baseline=lambda: getattr(document, field)
        )
        return result.render()

    # Writes

    def update_db(self, document: D) -> bool:
        return self.reconciler.reconcile(document)

    def update_to_redis(self, document: D) -> None:
        self.objects.update_to_redis(document)

    def clean(self, document: D) -> int:
        return self.invalidator.clean(document)

    def save(self, document: D) -> bool:
        saved = self.repository.save(document)
        if saved:
            self.on_after_persist(document)
        return saved

    def delete(self, document: D) -> bool:
        deleted = self.repository.delete(document)
        if deleted:
            self.on_after_delete(document)
        return deleted

    # Lifecycle hooks

    def on_after_persist(self, document: D) -> None:
        self.update_to_redis(document)

    def on_after_delete(self, document: D) -> None:
        self.clean(document)

"""
Whole-document snapshot cache.
"""

from typing import Any, Optional, Type

from pydantic import ValidationError

from shared.errors import SchemaDriftError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..fields.models import LiveDocument
from ..persistence.base import DocumentRepository
from .hash_store import HashStore


class ObjectCache:
    """Serves documents from JSON snapshots, falling back to the repository."""

    def __init__(
        self,
        store: HashStore,
        model: Type[LiveDocument],
        repository: DocumentRepository,
        metrics: Optional[MetricsCollector] = None
    ):
        self.store = store
        self.model = model
        self.repository = repository
        self.metrics = metrics
        self.logger = get_logger("live_attr.object_cache")

    @staticmethod
    def snapshot_key(identity: Any) -> str:
        return str(identity)

    def fetch(self, identity: Any) -> LiveDocument:
        """
        Load a document by primary identity without touching the database
        when a valid snapshot is cached.

        A snapshot that no longer validates against the model (a field was
        removed, renamed or retyped) is replaced with a fresh copy from
        the repository. Either way a usable snapshot is cached afterwards.

        Raises:
            NotFoundError: the repository has no document with this identity.
        """
        raw = self.store.get(self.snapshot_key(identity))
        if raw is None:
            self._record("live_attr_cache_misses_total")
            return self._fetch_from_db(identity)

        try:
            document = self._load(raw)
        except SchemaDriftError as e:
            self.logger.warning(
                "Discarding stale snapshot",
                namespace=self.store.namespace,
                identity=str(identity),
                **e.details
            )
            if self.metrics:
                self.metrics.increment_counter("live_attr_schema_drift_total")
            return self._fetch_from_db(identity)

        self._record("live_attr_cache_hits_total")
        return document

    def update_to_redis(self, document: LiveDocument) -> None:
        """Write the document's full persisted state as its snapshot."""
        key = self.snapshot_key(document.primary_identity())
        self.store.set(key, document.model_dump_json())
        self.logger.info("Snapshot refreshed", namespace=self.store.namespace, key=key)

    def _load(self, raw: str) -> LiveDocument:
        try:
            return self.model.model_validate_json(raw)
        except ValidationError as e:
            raise SchemaDriftError(details={"error_count": e.error_count()}) from e

    def _fetch_from_db(self, identity: Any) -> LiveDocument:
        document = self.repository.find(identity)
        self.update_to_redis(document)
        return document

    def _record(self, metric_name: str) -> None:
        if self.metrics:
            self.metrics.increment_counter(metric_name, cache_type="object")

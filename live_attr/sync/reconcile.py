"""
Write-back of cached live attributes into the persisted document.
"""

from typing import Callable, Optional

from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..cache.hash_store import HashStore
from ..cache.keys import KeyDeriver
from ..fields.models import LiveDocument


class ReconciliationEngine:
    """Copies every live attribute from Redis onto a document, then saves it once."""

    def __init__(
        self,
        store: HashStore,
        keys: KeyDeriver,
        persist: Callable[[LiveDocument], bool],
        metrics: Optional[MetricsCollector] = None
    ):
        self.store = store
        self.keys = keys
        self.persist = persist
        self.metrics = metrics
        self.logger = get_logger("live_attr.reconcile")

    def reconcile(self, document: LiveDocument) -> bool:
        """
        One HMGET across all live keys, one save of the whole document.

        Attributes with no cached value keep their in-memory value.
        Returns the result of the save.
        """
        model = type(document)
        names = model.live_fields()
        raw_values = self.store.mget(self.keys.live_keys(self.keys.resolve_identity(document)))

        changed = []
        for name, raw in zip(names, raw_values):
            if raw is None:
                continue
            value = model.live_field(name).decode(raw)
            if getattr(document, name) != value:
                setattr(document, name, value)
                changed.append(name)

        saved = self.persist(document)

        if self.metrics:
            self.metrics.increment_counter("live_attr_reconciliations_total", status="success" if saved else "failed")
        if saved:
            self.logger.info(
                "Live attributes written back",
                namespace=self.store.namespace,
                identity=str(document.primary_identity()),
                changed=changed
            )
        else:
            self.logger.warning(
                "Live attribute write-back refused",
                namespace=self.store.namespace,
                identity=str(document.primary_identity())
            )
        return saved

"""
In-memory persistence for live documents.
"""

import threading
from typing import Any, Dict, Generic, List, Type, TypeVar

from shared.errors import NotFoundError
from shared.logging import get_logger
from ..fields.models import LiveDocument

D = TypeVar("D", bound=LiveDocument)


class InMemoryRepository(Generic[D]):
    """
    Dict-backed document repository.

    Documents are stored as JSON so every load returns an independent copy,
    the same way a real database would.
    """

    def __init__(self, model: Type[D]):
        self.model = model
        self.logger = get_logger("live_attr.persistence.memory")
        self._documents: Dict[str, str] = {}
        self._lock = threading.Lock()

    def find(self, identity: Any) -> D:
        with self._lock:
            raw = self._documents.get(str(identity))
        if raw is None:
            raise NotFoundError(self.model.__name__, identity)
        return self.model.model_validate_json(raw)

    def find_by(self, field: str, value: Any) -> D:
        for document in self.all():
            if getattr(document, field) == value:
                return document
        raise NotFoundError(self.model.__name__, value, {"field": field})

    def all(self) -> List[D]:
        with self._lock:
            raws = list(self._documents.values())
        return [self.model.model_validate_json(raw) for raw in raws]

    def save(self, document: D) -> bool:
        identity = str(document.primary_identity())
        with self._lock:
            self._documents[identity] = document.model_dump_json()
        self.logger.debug("Document saved", model=self.model.__name__, identity=identity)
        return True

    def delete(self, document: D) -> bool:
        identity = str(document.primary_identity())
        with self._lock:
            existed = self._documents.pop(identity, None) is not None
        self.logger.debug("Document deleted", model=self.model.__name__, identity=identity, existed=existed)
        return True

    def __len__(self) -> int:
        return len(self._documents)

"""
Cache key derivation for live attributes.
"""

from typing import Any, List, Type

from ..fields.models import LiveDocument


class KeyDeriver:
    """Builds per-field keys from a document's live identity."""

    def __init__(self, model: Type[LiveDocument]):
        self.model = model

    @staticmethod
    def derive_key(identity: Any, field: str) -> str:
        return f"{identity}_{field}"

    def resolve_identity(self, document: LiveDocument) -> Any:
        return document.live_identity()

    def key(self, document: LiveDocument, field: str) -> str:
        return self.derive_key(self.resolve_identity(document), field)

    def live_keys(self, identity: Any) -> List[str]:
        """Keys of every live attribute for one identity, in registry order."""
        return [self.derive_key(identity, name) for name in self.model.live_fields()]

"""
Persistence collaborator contract.
"""

from typing import Any, Protocol

from ..fields.models import LiveDocument


class DocumentRepository(Protocol):
    """Authoritative store for documents carrying live attributes."""

    def find(self, identity: Any) -> LiveDocument:
        """Load by primary identity, raising NotFoundError when absent."""
        ...

    def find_by(self, field: str, value: Any) -> LiveDocument:
        """Load the first document whose ``field`` equals ``value``, raising NotFoundError when absent."""
        ...

    def save(self, document: LiveDocument) -> bool:
        """Persist the whole document. False means the write was refused."""
        ...

    def delete(self, document: LiveDocument) -> bool:
        """Remove the document. Deleting an absent document succeeds."""
        ...

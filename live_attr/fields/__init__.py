"""
Live field registry package.

Defines the document base model hosts subclass, the immutable per-type
registry of live attributes, and the closed set of value kinds
(integer, float, other) that drive increment dispatch.
"""

from .models import FieldKind, LiveDocument, LiveField, resolve_kind

__all__ = ["FieldKind", "LiveDocument", "LiveField", "resolve_kind"]

"""
Live attribute registry and document base model.
"""

import types
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping, Optional, Tuple, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, TypeAdapter

from shared.errors import InvalidFieldError, RegistrationError


class FieldKind(str, Enum):
    """Declared value type of a live attribute."""
    INTEGER = "integer"
    FLOAT = "float"
    OTHER = "other"


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """Strip ``None`` from a union annotation, returning (inner, nullable)."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        inner = [arg for arg in args if arg is not type(None)]
        nullable = len(inner) != len(args)
        if len(inner) == 1:
            return inner[0], nullable
        return annotation, nullable
    return annotation, False


def resolve_kind(annotation: Any) -> FieldKind:
    """Map a field annotation onto its increment kind."""
    inner, _ = _unwrap_optional(annotation)
    # bool subclasses int but is not a counter
    if inner is bool:
        return FieldKind.OTHER
    if inner is int:
        return FieldKind.INTEGER
    if inner is float:
        return FieldKind.FLOAT
    return FieldKind.OTHER


@dataclass(frozen=True)
class LiveField:
    """Descriptor of a single live attribute."""
    name: str
    kind: FieldKind
    annotation: Any
    nullable: bool = False
    default_factory: Optional[Callable[[], Any]] = field(default=None, compare=False, repr=False)
    adapter: TypeAdapter = field(default=None, compare=False, repr=False)

    @classmethod
    def from_model_field(cls, name: str, info: Any) -> "LiveField":
        annotation = info.annotation
        _, nullable = _unwrap_optional(annotation)
        return cls(
            name=name,
            kind=resolve_kind(annotation),
            annotation=annotation,
            nullable=nullable,
            default_factory=info.default_factory,
            adapter=TypeAdapter(annotation),
        )

    @property
    def numeric(self) -> bool:
        return self.kind in (FieldKind.INTEGER, FieldKind.FLOAT)

    @property
    def textual(self) -> bool:
        inner, _ = _unwrap_optional(self.annotation)
        return inner is str

    def encode(self, value: Any) -> str:
        """Render a Python value as the raw string kept in Redis."""
        if value is None:
            return ""
        if self.numeric or self.textual:
            return str(value)
        # str Enums and datetimes need their JSON form to decode again
        return self.adapter.dump_json(value).decode("utf-8")

    def decode(self, raw: Any) -> Any:
        """Coerce a raw Redis value into the declared type."""
        if raw is None:
            return None
        if raw == "" and self.nullable and not self.textual:
            return None
        if self.kind is FieldKind.OTHER and not self.textual and isinstance(raw, str):
            return self.adapter.validate_json(raw)
        return self.adapter.validate_python(raw)


class LiveDocument(BaseModel):
    """
    Base for persisted documents carrying live attributes.

    Subclasses declare which of their fields are live and which field
    identifies them in Redis:

        class Article(LiveDocument):
            live_attributes = ("view",)

            id: str
            url: str
            view: int = 0

    The registry is resolved once when the subclass is created and is
    read-only afterwards. Live attributes declared on base classes are
    inherited.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    live_attributes: ClassVar[Tuple[str, ...]] = ()
    primary_key: ClassVar[str] = "id"
    live_key: ClassVar[str] = "id"
    live_namespace: ClassVar[Optional[str]] = None
    live_registry: ClassVar[Mapping[str, LiveField]] = MappingProxyType({})

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)

        names = []
        for base in reversed(cls.__mro__):
            for name in base.__dict__.get("live_attributes", ()):
                if name not in names:
                    names.append(name)

        model_fields = cls.model_fields
        registry = {}
        for name in names:
            if name not in model_fields:
                raise RegistrationError(
                    f"{cls.__name__}.{name} is not a declared field",
                    {"model": cls.__name__, "field": name}
                )
            registry[name] = LiveField.from_model_field(name, model_fields[name])

        if registry and cls.live_key not in model_fields:
            raise RegistrationError(
                f"{cls.__name__} live key {cls.live_key!r} is not a declared field",
                {"model": cls.__name__, "live_key": cls.live_key}
            )

        cls.live_registry = MappingProxyType(registry)

    @classmethod
    def live_fields(cls) -> Tuple[str, ...]:
        """Names of all live attributes, in declaration order."""
        return tuple(cls.live_registry)

    @classmethod
    def is_live(cls, name: str) -> bool:
        return name in cls.live_registry

    @classmethod
    def live_field(cls, name: str) -> LiveField:
        try:
            return cls.live_registry[name]
        except KeyError:
            raise InvalidFieldError(name, {"model": cls.__name__}) from None

    @classmethod
    def namespace(cls) -> str:
        """Redis hash holding this type's cache entries."""
        return cls.live_namespace or cls.__name__

    def primary_identity(self) -> Any:
        """Value of the primary key, used for snapshots and lookups."""
        return getattr(self, type(self).primary_key)

    def live_identity(self) -> Any:
        """Value of the configured live key."""
        return getattr(self, type(self).live_key)

"""
Atomic increments of live attributes.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Type, Union

import redis

from shared.errors import LiveAttrException, TypeMismatchError
from shared.logging import get_logger
from shared.metrics import MetricsCollector
from ..fields.models import FieldKind, LiveDocument, LiveField
from .hash_store import HashStore
from .keys import KeyDeriver

Number = Union[int, float]


@dataclass(frozen=True)
class IncrementResult:
    """Outcome of an increment: the new value or the error that stopped it."""
    value: Optional[Number] = None
    error: Optional[LiveAttrException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Number) -> "IncrementResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: LiveAttrException) -> "IncrementResult":
        return cls(error=error)

    def render(self) -> Union[Number, str]:
        """New value on success, otherwise the error message."""
        if self.ok:
            return self.value
        return self.error.message


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class IncrementEngine:
    """
    Type-aware counter increments seeded from the persisted baseline.

    The first increment of a key writes the baseline with HSETNX so
    concurrent first increments agree on one starting value; all of
    them then apply HINCRBY/HINCRBYFLOAT on top of it.
    """

    def __init__(self, store: HashStore, model: Type[LiveDocument], metrics: Optional[MetricsCollector] = None):
        self.store = store
        self.model = model
        self.metrics = metrics
        self.logger = get_logger("live_attr.increment")

    def incr(
        self,
        identity: Any,
        field: str,
        amount: Any = 1,
        baseline: Optional[Callable[[], Any]] = None
    ) -> IncrementResult:
        """
        Increment ``field`` of the document identified by ``identity``.

        ``baseline`` returns the persisted value and is only called when
        the key is not cached yet. Validation and type errors come back
        in the result; connection errors propagate.
        """
        try:
            live_field = self.model.live_field(field)
            self._check_amount(live_field, amount)

            key = KeyDeriver.derive_key(identity, field)
            if baseline is not None:
                self._seed(key, live_field, baseline)

            if live_field.kind is FieldKind.INTEGER:
                value = self.store.incrby(key, amount)
            else:
                value = self.store.incrbyfloat(key, amount)

        except redis.exceptions.ResponseError as e:
            message = str(e)
            if not message.startswith("ERR"):
                message = f"ERR {message}"
            return self._failed(identity, field, TypeMismatchError(message))
        except LiveAttrException as e:
            return self._failed(identity, field, e)

        self._record("success")
        return IncrementResult.success(value)

    def _check_amount(self, live_field: LiveField, amount: Any) -> None:
        if live_field.kind is FieldKind.INTEGER:
            if not _is_number(amount) or isinstance(amount, float):
                raise TypeMismatchError(TypeMismatchError.NOT_AN_INTEGER)
        elif live_field.kind is FieldKind.FLOAT:
            if not _is_number(amount):
                raise TypeMismatchError(TypeMismatchError.NOT_A_FLOAT)
        else:
            raise TypeMismatchError(TypeMismatchError.NOT_A_NUMBER)

    def _seed(self, key: str, live_field: LiveField, baseline: Callable[[], Any]) -> None:
        if self.store.exists(key):
            return
        value = baseline()
        if value is None:
            return
        won = self.store.setnx(key, live_field.encode(value))
        self.logger.debug("Seeded live attribute", namespace=self.store.namespace, key=key, won=won)

    def _failed(self, identity: Any, field: str, error: LiveAttrException) -> IncrementResult:
        self._record("error")
        self.logger.info(
            "Increment rejected",
            namespace=self.store.namespace,
            identity=str(identity),
            field=field,
            code=error.code,
            error=error.message
        )
        return IncrementResult.failure(error)

    def _record(self, status: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("live_attr_increments_total", status=status)

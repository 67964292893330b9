"""
Test helpers and doubles for live_attr.
"""

import threading
from typing import Any, Dict, List, Optional

from redis.exceptions import DataError, ResponseError


def _encode(value: Any) -> str:
    """Encode a value the way redis-py does before sending it."""
    if value is None or isinstance(value, bool):
        raise DataError(f"Invalid input of type: '{type(value).__name__}'")
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _format_float(value: float) -> str:
    """Format an HINCRBYFLOAT result the way the server stores it."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class InMemoryRedis:
    """
    Thread-safe stand-in for a ``decode_responses=True`` redis-py client.

    Implements only the hash commands the cache engine issues, with the
    server's error replies for non-numeric increments.
    """

    def __init__(self):
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.commands: List[tuple] = []
        self._lock = threading.Lock()

    def _hash(self, name: str) -> Dict[str, str]:
        return self.hashes.setdefault(name, {})

    def _log(self, *command):
        self.commands.append(command)

    def hget(self, name: str, key: str) -> Optional[str]:
        with self._lock:
            self._log("HGET", name, key)
            return self.hashes.get(name, {}).get(str(key))

    def hset(self, name: str, key: str, value: Any) -> int:
        with self._lock:
            self._log("HSET", name, key)
            table = self._hash(name)
            created = str(key) not in table
            table[str(key)] = _encode(value)
            return int(created)

    def hsetnx(self, name: str, key: str, value: Any) -> bool:
        with self._lock:
            self._log("HSETNX", name, key)
            table = self._hash(name)
            if str(key) in table:
                return False
            table[str(key)] = _encode(value)
            return True

    def hexists(self, name: str, key: str) -> bool:
        with self._lock:
            self._log("HEXISTS", name, key)
            return str(key) in self.hashes.get(name, {})

    def hdel(self, name: str, *keys: str) -> int:
        with self._lock:
            self._log("HDEL", name, *keys)
            table = self.hashes.get(name, {})
            removed = 0
            for key in keys:
                if table.pop(str(key), None) is not None:
                    removed += 1
            return removed

    def hmget(self, name: str, keys: List[str]) -> List[Optional[str]]:
        with self._lock:
            self._log("HMGET", name, *keys)
            table = self.hashes.get(name, {})
            return [table.get(str(key)) for key in keys]

    def hincrby(self, name: str, key: str, amount: int = 1) -> int:
        with self._lock:
            self._log("HINCRBY", name, key)
            table = self._hash(name)
            try:
                delta = int(_encode(amount))
            except ValueError:
                raise ResponseError("value is not an integer or out of range") from None
            try:
                current = int(table.get(str(key), "0"))
            except ValueError:
                raise ResponseError("hash value is not an integer") from None
            table[str(key)] = str(current + delta)
            return current + delta

    def hincrbyfloat(self, name: str, key: str, amount: float = 1.0) -> float:
        with self._lock:
            self._log("HINCRBYFLOAT", name, key)
            table = self._hash(name)
            try:
                delta = float(_encode(amount))
            except ValueError:
                raise ResponseError("value is not a valid float") from None
            try:
                current = float(table.get(str(key), "0"))
            except ValueError:
                raise ResponseError("hash value is not a float") from None
            table[str(key)] = _format_float(current + delta)
            return current + delta

    def writes(self) -> List[tuple]:
        """Commands that mutate state, in issue order."""
        mutating = {"HSET", "HSETNX", "HDEL", "HINCRBY", "HINCRBYFLOAT"}
        return [command for command in self.commands if command[0] in mutating]

    def raw(self, name: str, key: str) -> Optional[str]:
        """Peek at a stored value without logging a command."""
        return self.hashes.get(name, {}).get(key)


class DummyMetrics:
    """Minimal metrics collector stub."""

    def __init__(self):
        self.counters = []

    def increment_counter(self, metric_name: str, **labels):
        self.counters.append((metric_name, labels))

    def count(self, metric_name: str, **labels) -> int:
        return sum(
            1 for name, recorded in self.counters
            if name == metric_name and all(recorded.get(k) == v for k, v in labels.items())
        )

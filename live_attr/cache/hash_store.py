"""
Namespaced Redis hash store.
"""

from typing import Any, Iterable, List, Optional, Union

import redis


class HashStore:
    """
    Key-value view of one Redis hash.

    Every type gets its own hash (the namespace); per-field counters and
    whole-document snapshots are hash fields inside it. The client is
    shared and never owned: closing it is the caller's business.
    """

    def __init__(self, client: redis.Redis, namespace: str):
        self.client = client
        self.namespace = namespace

    def get(self, key: str) -> Optional[str]:
        return self.client.hget(self.namespace, key)

    def set(self, key: str, value: Any) -> None:
        self.client.hset(self.namespace, key, value)

    def delete(self, keys: Union[str, Iterable[str]]) -> int:
        """Delete one key or many; absent keys are ignored."""
        if isinstance(keys, str):
            keys = [keys]
        keys = list(keys)
        if not keys:
            return 0
        return self.client.hdel(self.namespace, *keys)

    def exists(self, key: str) -> bool:
        return bool(self.client.hexists(self.namespace, key))

    def setnx(self, key: str, value: Any) -> bool:
        return bool(self.client.hsetnx(self.namespace, key, value))

    def incrby(self, key: str, amount: int) -> int:
        return self.client.hincrby(self.namespace, key, amount)

    def incrbyfloat(self, key: str, amount: float) -> float:
        return self.client.hincrbyfloat(self.namespace, key, amount)

    def mget(self, keys: List[str]) -> List[Optional[str]]:
        """Values aligned to ``keys``; ``None`` where absent."""
        if not keys:
            return []
        return self.client.hmget(self.namespace, keys)

"""
Redis client construction.
"""

from typing import Optional

import redis

from shared.config import LiveAttrConfig, get_config
from shared.logging import get_logger

logger = get_logger("live_attr.redis_client")


def create_redis_client(config: Optional[LiveAttrConfig] = None) -> redis.Redis:
    """
    Build a pooled Redis client from configuration.

    The client is meant to be created once and shared by every
    ``LiveAttrManager``; pooling, timeouts and reconnects are handled by
    redis-py.
    """
    config = config or get_config()
    pool = redis.ConnectionPool.from_url(
        config.redis_url,
        max_connections=config.redis_max_connections,
        socket_timeout=config.redis_socket_timeout,
        socket_connect_timeout=config.redis_socket_connect_timeout,
        decode_responses=True,
    )
    logger.info(
        "Redis client created",
        env=config.env,
        max_connections=config.redis_max_connections
    )
    return redis.Redis(connection_pool=pool)

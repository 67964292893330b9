"""
Shared configuration management for live_attr.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LiveAttrConfig(BaseSettings):
    """Configuration for the live attribute cache."""

    model_config = SettingsConfigDict(
        env_prefix="LIVE_ATTR_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_max_connections: int = Field(default=100)
    redis_socket_timeout: float = Field(default=2.0)
    redis_socket_connect_timeout: float = Field(default=2.0)

    # Prepended to every per-type hash name
    namespace_prefix: str = Field(default="")

    def namespace_for(self, name: str) -> str:
        """Qualify a per-type namespace with the configured prefix."""
        if not self.namespace_prefix:
            return name
        return f"{self.namespace_prefix}:{name}"


def get_config(**overrides: Any) -> LiveAttrConfig:
    """Get configuration, explicit overrides win over the environment."""
    return LiveAttrConfig(**overrides)

"""Cache configuration for neo-loaders."""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .protocols import CacheBackend


class CacheSettings(BaseSettings):
    """Settings for the loader cache store."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_CACHE_",
        case_sensitive=False,
        extra="ignore",
    )

    backend: CacheBackend = Field(default=CacheBackend.MEMORY, description="Cache store backend")

    # Redis configuration
    redis_url: Optional[str] = Field(default=None, description="Redis URL, takes precedence over host/port")
    redis_host: str = Field(default="localhost", description="Redis host")
    redis_port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    redis_password: Optional[str] = Field(default=None, description="Redis password")
    redis_db: int = Field(default=0, ge=0, le=15, description="Redis database number")
    redis_ssl: bool = Field(default=False, description="Use SSL for Redis")
    connection_timeout: int = Field(default=5, ge=1, description="Redis connection timeout")
    command_timeout: int = Field(default=3, ge=1, description="Redis command timeout")

    # Key management
    key_prefix: str = Field(default="neo:loaders:", description="Prefix for keys written to shared stores")

    @field_validator("key_prefix")
    @classmethod
    def validate_key_prefix(cls, v: str) -> str:
        """Reject prefixes containing glob characters used by key scans."""
        if any(char in v for char in "*?[]"):
            raise ValueError(f"Invalid cache key prefix: {v}. Glob characters are not allowed")
        return v

    def to_connection_kwargs(self) -> Dict[str, Any]:
        """Convert to connection arguments for redis.asyncio."""
        kwargs: Dict[str, Any] = {
            "host": self.redis_host,
            "port": self.redis_port,
            "db": self.redis_db,
            "password": self.redis_password,
            "socket_timeout": self.command_timeout,
            "socket_connect_timeout": self.connection_timeout,
            "decode_responses": True,
        }

        # Only add ssl if it's True (Redis asyncio doesn't like ssl=False)
        if self.redis_ssl:
            kwargs["ssl"] = True

        return kwargs

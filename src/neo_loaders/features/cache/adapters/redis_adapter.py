"""Redis cache store for neo-loaders.

Lets several processes (or several loaders in one process) share cached
loader results. Values are JSON encoded; keys are namespaced with the
configured prefix so clearing the store never touches unrelated data.
"""

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..entities.config import CacheSettings
from ....core.exceptions import CacheError, CacheConnectionError

logger = logging.getLogger(__name__)


class RedisCacheMap:
    """Redis-backed cache store."""

    def __init__(self,
                 settings: Optional[CacheSettings] = None,
                 client: Optional[Redis] = None):
        self.settings = settings or CacheSettings()
        self.key_prefix = self.settings.key_prefix
        self.redis_client: Optional[Redis] = client
        self._connected = client is not None
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> Redis:
        """Connect to Redis. Concurrent first calls share one client."""
        if self._connected and self.redis_client is not None:
            return self.redis_client

        async with self._connect_lock:
            if self._connected and self.redis_client is not None:
                return self.redis_client
            return await self._create_client()

    async def _create_client(self) -> Redis:
        try:
            if self.settings.redis_url:
                self.redis_client = Redis.from_url(
                    self.settings.redis_url,
                    decode_responses=True,
                    socket_timeout=self.settings.command_timeout,
                    socket_connect_timeout=self.settings.connection_timeout,
                )
            else:
                self.redis_client = Redis(**self.settings.to_connection_kwargs())

            # Test connection
            await self.redis_client.ping()
            self._connected = True
            logger.info(f"Connected to Redis cache store (prefix={self.key_prefix})")
            return self.redis_client

        except (RedisError, OSError) as e:
            self.redis_client = None
            raise CacheConnectionError(f"Failed to connect to Redis: {e}")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _strip_key(self, full_key: Any) -> str:
        if isinstance(full_key, bytes):
            full_key = full_key.decode("utf-8")
        return full_key[len(self.key_prefix):]

    async def get(self, key: str) -> Optional[Any]:
        """Get value by key."""
        client = await self.connect()

        try:
            data = await client.get(self._make_key(key))
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}")

        if data is None:
            return None
        return json.loads(data)

    async def set(self, key: str, value: Any) -> None:
        """Store value under key."""
        client = await self.connect()

        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Cannot encode value for key {key}: {e}")

        try:
            await client.set(self._make_key(key), payload)
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}")

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        client = await self.connect()

        try:
            result = await client.delete(self._make_key(key))
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}")
        return result > 0

    async def keys(self) -> AsyncIterator[str]:
        """Iterate un-prefixed keys owned by this store."""
        client = await self.connect()

        try:
            async for full_key in client.scan_iter(match=f"{self.key_prefix}*"):
                yield self._strip_key(full_key)
        except RedisError as e:
            raise CacheError(f"Redis scan error: {e}")

    async def clear(self) -> None:
        """Delete all keys under this store's prefix."""
        client = await self.connect()

        try:
            full_keys = [full_key async for full_key in client.scan_iter(match=f"{self.key_prefix}*")]
            if full_keys:
                await client.delete(*full_keys)
        except RedisError as e:
            raise CacheError(f"Redis clear error: {e}")

        logger.debug(f"Redis cache store cleared ({len(full_keys)} keys)")

"""Cache adapters - Redis and in-memory stores."""

from .memory_adapter import MemoryCacheMap
from .redis_adapter import RedisCacheMap
from .factory import create_cache_map

__all__ = [
    "MemoryCacheMap",
    "RedisCacheMap",
    "create_cache_map",
]

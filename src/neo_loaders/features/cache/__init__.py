"""Cache feature for neo-loaders.

Feature-First layout:
- entities/: Cache protocols, key codec and configuration
- adapters/: Redis and in-memory cache stores
"""

from .entities.protocols import CacheMap, CacheBackend
from .entities.config import CacheSettings
from .entities.cache_key import (
    CacheKeyCodec,
    stable_stringify,
    default_cache_params_fn,
    default_cache_key_fn,
)
from .adapters.memory_adapter import MemoryCacheMap
from .adapters.redis_adapter import RedisCacheMap
from .adapters.factory import create_cache_map

__all__ = [
    # Protocols
    "CacheMap",
    "CacheBackend",
    
    # Configuration
    "CacheSettings",
    
    # Keys
    "CacheKeyCodec",
    "stable_stringify",
    "default_cache_params_fn",
    "default_cache_key_fn",
    
    # Adapters
    "MemoryCacheMap",
    "RedisCacheMap",
    "create_cache_map",
]

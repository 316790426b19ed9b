"""Cache store factory."""

import logging
from typing import Optional

from ..entities.config import CacheSettings
from ..entities.protocols import CacheBackend, CacheMap
from .memory_adapter import MemoryCacheMap
from .redis_adapter import RedisCacheMap

logger = logging.getLogger(__name__)


def create_cache_map(settings: Optional[CacheSettings] = None) -> CacheMap:
    """Create the cache store selected by settings.
    
    Args:
        settings: Cache settings, read from the environment when omitted
        
    Returns:
        A store implementing the CacheMap protocol
    """
    settings = settings or CacheSettings()

    if settings.backend == CacheBackend.REDIS:
        logger.info("Using Redis cache store for loaders")
        return RedisCacheMap(settings)

    return MemoryCacheMap()

"""Neo-Loaders - request batching and caching for collection services.

Loaders sit in front of backend collection services, coalescing ``load``
calls into bulk reads and caching every result under a canonical key.

Logging is not configured on import; call ``setup_logging()`` from the
application entry point.
"""

from .__version__ import __version__

from .config import setup_logging, get_logger, LoggingConfig

from .core.exceptions import (
    NeoLoadersError,
    LoaderError,
    CapabilityError,
    SerializationError,
    BackendError,
    CacheError,
    CacheConnectionError,
)

from .features.cache import (
    CacheMap,
    CacheBackend,
    CacheSettings,
    CacheKeyCodec,
    stable_stringify,
    default_cache_params_fn,
    default_cache_key_fn,
    MemoryCacheMap,
    RedisCacheMap,
    create_cache_map,
)

from .features.loaders import (
    AppLoader,
    ServiceLoader,
    LoaderQuery,
    LoaderRequest,
    LoadMethod,
    LoaderSettings,
    CollectionService,
    ServiceProvider,
    get_by_dot_path,
    unique_results,
    unique_results_multi,
)

__all__ = [
    "__version__",
    
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingConfig",
    
    # Exceptions
    "NeoLoadersError",
    "LoaderError",
    "CapabilityError",
    "SerializationError",
    "BackendError",
    "CacheError",
    "CacheConnectionError",
    
    # Cache
    "CacheMap",
    "CacheBackend",
    "CacheSettings",
    "CacheKeyCodec",
    "stable_stringify",
    "default_cache_params_fn",
    "default_cache_key_fn",
    "MemoryCacheMap",
    "RedisCacheMap",
    "create_cache_map",
    
    # Loaders
    "AppLoader",
    "ServiceLoader",
    "LoaderQuery",
    "LoaderRequest",
    "LoadMethod",
    "LoaderSettings",
    "CollectionService",
    "ServiceProvider",
    "get_by_dot_path",
    "unique_results",
    "unique_results_multi",
]

"""Cache entities - protocols, keys and configuration."""

from .protocols import CacheMap, CacheBackend
from .config import CacheSettings
from .cache_key import (
    CacheKeyCodec,
    CacheParamsFn,
    stable_stringify,
    default_cache_params_fn,
    default_cache_key_fn,
)

__all__ = [
    "CacheMap",
    "CacheBackend",
    "CacheSettings",
    "CacheKeyCodec",
    "CacheParamsFn",
    "stable_stringify",
    "default_cache_params_fn",
    "default_cache_key_fn",
]

"""Exceptions module for neo-loaders.

This module provides the exception hierarchy for neo-loaders,
organized by loader concerns and infrastructure concerns.
"""

from .base import NeoLoadersError

from .loader import (
    LoaderError,
    CapabilityError,
    SerializationError,
    BackendError,
)

from .infrastructure import (
    CacheError,
    CacheConnectionError,
)

__all__ = [
    # Base
    "NeoLoadersError",
    
    # Loader Errors
    "LoaderError",
    "CapabilityError",
    "SerializationError",
    "BackendError",
    
    # Infrastructure Errors
    "CacheError",
    "CacheConnectionError",
]

"""Loader exceptions for neo-loaders.

Errors raised while turning loader calls into backend requests.
"""

from .base import NeoLoadersError


class LoaderError(NeoLoadersError):
    """Base class for loader errors."""
    pass


class CapabilityError(LoaderError):
    """Raised when a backend service lacks the method a loader needs."""
    pass


class SerializationError(LoaderError):
    """Raised when a value feeding a cache key cannot be serialized."""
    pass


class BackendError(LoaderError):
    """Base class for failures reported by backend services.
    
    The loaders never wrap backend exceptions; backends may raise
    subclasses of this error so callers can catch them uniformly.
    """
    pass

"""Infrastructure-specific exceptions for neo-loaders.

Errors raised by cache stores talking to external systems.
"""

from .base import NeoLoadersError


class CacheError(NeoLoadersError):
    """Base class for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """Raised when cache connection fails."""
    pass

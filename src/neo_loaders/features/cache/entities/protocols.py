"""Cache protocols for neo-loaders.

This module defines the protocol interface for pluggable cache stores.
Loaders only require a small mapping-like surface, so in-process stores,
remote stores and thin wrappers around either can be used interchangeably.
"""

from abc import abstractmethod
from typing import (
    Protocol,
    runtime_checkable,
    Any,
    AsyncIterator,
    Awaitable,
    Iterable,
    Optional,
    Union,
)
from enum import Enum


class CacheBackend(str, Enum):
    """Supported cache backend types."""
    MEMORY = "memory"
    REDIS = "redis"


@runtime_checkable
class CacheMap(Protocol):
    """Protocol for loader cache stores.

    Every method may be implemented as a plain method or a coroutine;
    loaders await the result when needed. ``get`` returns ``None`` for
    missing keys.
    """

    @abstractmethod
    def get(self, key: str) -> Union[Optional[Any], Awaitable[Optional[Any]]]:
        """Get value by key."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> Any:
        """Store value under key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> Any:
        """Delete key."""
        ...

    @abstractmethod
    def clear(self) -> Any:
        """Delete every key owned by the store."""
        ...

    @abstractmethod
    def keys(self) -> Union[Iterable[str], Awaitable[Iterable[str]], AsyncIterator[str]]:
        """Iterate stored keys."""
        ...

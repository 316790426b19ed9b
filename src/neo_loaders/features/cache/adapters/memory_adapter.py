"""Memory cache store for neo-loaders."""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class MemoryCacheMap:
    """In-process cache store backed by a dict.

    Entries live until deleted or cleared. Values are stored as-is, so
    callers must treat cached results as read-only.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._store: Dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Optional[Any]:
        """Get value by key."""
        return self._store.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Store value under key."""
        self._store[key] = value

    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        if key in self._store:
            del self._store[key]
            return True
        return False

    async def clear(self) -> None:
        """Clear all cache entries."""
        count = len(self._store)
        self._store.clear()
        logger.debug(f"Memory cache cleared ({count} entries)")

    async def keys(self) -> List[str]:
        """Snapshot of stored keys."""
        return list(self._store.keys())

    async def size(self) -> int:
        """Get cache size (number of keys)."""
        return len(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

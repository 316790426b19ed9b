"""Helpers for calling pluggable stores that may be sync or async."""

import inspect
from typing import Any, List


async def maybe_await(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def collect_keys(keys: Any) -> List[Any]:
    """Materialize the result of a store's ``keys()`` call into a list.
    
    Accepts a plain iterable, an awaitable resolving to an iterable,
    or an async iterator.
    """
    if hasattr(keys, "__aiter__"):
        return [key async for key in keys]
    keys = await maybe_await(keys)
    if keys is None:
        return []
    return list(keys)

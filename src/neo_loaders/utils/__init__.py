"""Utility helpers for neo-loaders."""

from .awaitables import maybe_await, collect_keys

__all__ = [
    "maybe_await",
    "collect_keys",
]

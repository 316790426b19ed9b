"""Canonical cache keys for loader requests.

Keys are JSON documents with mapping keys sorted at every level, so two
logically identical requests always produce the same string regardless of
the insertion order of their params. Sequence order is preserved.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Mapping, Optional
from uuid import UUID

from ....core.exceptions import SerializationError

CacheParamsFn = Callable[[Optional[Dict[str, Any]]], Optional[Dict[str, Any]]]

# Param fields that are safe to discriminate cache entries on
CACHE_PARAM_FIELDS = ("provider", "authentication", "user", "query")

SERVICE_NAME_FIELD = "service_name"


def _encode_default(value: Any) -> Any:
    """Encode values the json module does not handle natively."""
    if callable(value):
        raise SerializationError(
            "Cannot stringify non JSON value. The object passed to stable_stringify must be serializable.",
            details={"type": type(value).__name__},
        )
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    raise SerializationError(
        f"Cannot stringify value of type {type(value).__name__}",
        details={"type": type(value).__name__},
    )


def stable_stringify(obj: Any) -> str:
    """Stringify an object with consistent key ordering for cache keys.

    Raises:
        SerializationError: If the object contains callables or other
            values that have no JSON representation.
    """
    try:
        return json.dumps(
            obj,
            sort_keys=True,
            separators=(",", ":"),
            default=_encode_default,
        )
    except SerializationError:
        raise
    except (TypeError, ValueError) as e:
        # Mixed key types or circular references
        raise SerializationError(f"Cannot stringify cache key: {e}") from e


def default_cache_params_fn(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Extract the cache-relevant subset of service params.

    Keeps provider, authentication, user and query. Anything else (hook
    callbacks, transaction handles, ...) is dropped.
    """
    if params is None:
        return None
    return {
        field: params[field]
        for field in CACHE_PARAM_FIELDS
        if params.get(field) is not None
    }


def default_cache_key_fn(key: Any) -> Optional[Hashable]:
    """Convert ids to batch-group memo keys, so ``1`` and ``"1"`` coincide."""
    if key is None:
        return None
    return str(key)


class CacheKeyCodec:
    """Encodes loader requests into collection-tagged cache keys."""

    def __init__(self, service_name: str, cache_params_fn: Optional[CacheParamsFn] = None):
        self.service_name = service_name
        self.cache_params_fn = cache_params_fn or default_cache_params_fn

    def encode(self, fields: Mapping[str, Any], cache_params_fn: Optional[CacheParamsFn] = None) -> str:
        """Build the cache key for a request's fields.

        Args:
            fields: Request fields (id, key, multi, method, params)
            cache_params_fn: Optional override for the params extractor

        Returns:
            Canonical cache key string
        """
        extract = cache_params_fn or self.cache_params_fn
        document = {name: value for name, value in fields.items() if name != "params"}
        cache_params = extract(fields.get("params"))
        # None, {} and params holding only dropped fields share one key
        if cache_params:
            document["params"] = cache_params
        document[SERVICE_NAME_FIELD] = self.service_name
        return stable_stringify(document)

    @staticmethod
    def owner(key: Any) -> Optional[str]:
        """Return the service name a cache key is tagged with, if any."""
        if not isinstance(key, (str, bytes)):
            return None
        try:
            document = json.loads(key)
        except ValueError:
            return None
        if not isinstance(document, dict):
            return None
        return document.get(SERVICE_NAME_FIELD)

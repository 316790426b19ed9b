"""Loader request entities."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class LoadMethod(str, Enum):
    """Loader methods, named after the backend methods they reach."""
    GET = "get"
    GET_RAW = "_get"
    FIND = "find"
    FIND_RAW = "_find"
    LOAD = "load"
    LOAD_RAW = "_load"

    @property
    def is_batched(self) -> bool:
        """Whether requests go through a batch group."""
        return self in (LoadMethod.LOAD, LoadMethod.LOAD_RAW)

    @property
    def bulk_method(self) -> str:
        """Backend method used for batched reads."""
        return "_find" if self is LoadMethod.LOAD_RAW else "find"


def sort_ids(ids: List[Any]) -> List[Any]:
    """Sort ids ascending; unorderable mixes are sorted by string form."""
    try:
        return sorted(ids)
    except TypeError:
        return sorted(ids, key=str)


@dataclass(frozen=True)
class LoaderRequest:
    """Normalized form of any loader call."""

    id: Any = None
    key: Optional[str] = None
    multi: bool = False
    method: LoadMethod = LoadMethod.LOAD
    params: Optional[Dict[str, Any]] = None
    cache_params_fn: Optional[Callable[[Optional[Dict[str, Any]]], Optional[Dict[str, Any]]]] = None

    def normalize(self, default_key: str) -> "LoaderRequest":
        """Fill in defaults and canonicalize multi-id loads."""
        request = self
        if not isinstance(request.method, LoadMethod):
            request = replace(request, method=LoadMethod(request.method))
        if request.key is None:
            request = replace(request, key=default_key)
        if request.method.is_batched and isinstance(request.id, (list, tuple)):
            request = replace(request, id=sort_ids(list(request.id)))
        return request

    def cache_fields(self) -> Dict[str, Any]:
        """Fields identifying the cached result."""
        return {
            "id": self.id,
            "key": self.key,
            "multi": self.multi,
            "method": self.method.value,
            "params": self.params,
        }

    def batch_fields(self) -> Dict[str, Any]:
        """Fields identifying the batch group (everything except the id)."""
        fields = self.cache_fields()
        del fields["id"]
        return fields

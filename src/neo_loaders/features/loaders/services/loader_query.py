"""Chained loader queries.

``loader.key("post_id").select(["body"]).load(1)`` accumulates overrides on
an immutable query and applies them when a terminal method runs. A query can
be reused for any number of terminal calls.
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple, Union

from ..entities.request import LoaderRequest, LoadMethod
from ..utils.projection import project
from ...cache.entities.cache_key import CacheParamsFn

if TYPE_CHECKING:
    from .service_loader import ServiceLoader


@dataclass(frozen=True)
class LoaderQuery:
    """Accumulated lookup key, multiplicity, projection and params extractor."""

    loader: "ServiceLoader"
    key_name: Optional[str] = None
    is_multi: bool = False
    fields: Optional[Tuple[str, ...]] = None
    cache_params_fn: Optional[CacheParamsFn] = None

    def key(self, key: str) -> "LoaderQuery":
        return replace(self, key_name=key, is_multi=False)

    def multi(self, key: str) -> "LoaderQuery":
        return replace(self, key_name=key, is_multi=True)

    def select(self, fields: Union[str, Iterable[str]]) -> "LoaderQuery":
        """Keep only fields; a single field name may be passed as a string."""
        if isinstance(fields, str):
            fields = [fields]
        return replace(self, fields=tuple(fields))

    def params(self, cache_params_fn: CacheParamsFn) -> "LoaderQuery":
        return replace(self, cache_params_fn=cache_params_fn)

    async def _run(self,
                   method: LoadMethod,
                   id: Any = None,
                   params: Optional[Dict[str, Any]] = None,
                   cache_params_fn: Optional[CacheParamsFn] = None) -> Any:
        request = LoaderRequest(
            id=id,
            key=self.key_name,
            multi=self.is_multi,
            method=method,
            params=params,
            cache_params_fn=cache_params_fn or self.cache_params_fn,
        )
        result = await self.loader.exec(request)
        return project(self.fields, result, self.loader.id_field, self.key_name)

    async def get(self, id: Any, params=None, cache_params_fn=None):
        return await self._run(LoadMethod.GET, id, params, cache_params_fn)

    async def get_raw(self, id: Any, params=None, cache_params_fn=None):
        return await self._run(LoadMethod.GET_RAW, id, params, cache_params_fn)

    async def find(self, params=None, cache_params_fn=None):
        return await self._run(LoadMethod.FIND, None, params, cache_params_fn)

    async def find_raw(self, params=None, cache_params_fn=None):
        return await self._run(LoadMethod.FIND_RAW, None, params, cache_params_fn)

    async def load(self, id: Any, params=None, cache_params_fn=None):
        return await self._run(LoadMethod.LOAD, id, params, cache_params_fn)

    async def load_raw(self, id: Any, params=None, cache_params_fn=None):
        return await self._run(LoadMethod.LOAD_RAW, id, params, cache_params_fn)

    _get = get_raw
    _find = find_raw
    _load = load_raw

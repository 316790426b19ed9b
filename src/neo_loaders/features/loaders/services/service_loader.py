"""Service loader - batching and caching in front of one collection service."""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from strawberry.dataloader import DataLoader

from .batch_registry import (
    BatchGroupRegistry,
    DEFAULT_STRIPPED_QUERY_OPERATORS,
    create_batch_group,
)
from .loader_query import LoaderQuery
from ..entities.protocols import ServiceProvider, get_service_id_field
from ..entities.request import LoaderRequest, LoadMethod
from ...cache.adapters.memory_adapter import MemoryCacheMap
from ...cache.entities.cache_key import (
    CacheKeyCodec,
    CacheParamsFn,
    default_cache_key_fn,
)
from ...cache.entities.protocols import CacheMap
from ....utils.awaitables import collect_keys, maybe_await

logger = logging.getLogger(__name__)

Params = Optional[Dict[str, Any]]


class ServiceLoader:
    """Loader for a single service that batches and caches requests.

    ``load`` style calls are coalesced into bulk ``find`` reads, ``get`` and
    ``find`` calls go straight to the service. Every result is cached under
    a canonical key tagged with the service name.
    """

    def __init__(self,
                 app: ServiceProvider,
                 service_name: str,
                 cache_params_fn: Optional[CacheParamsFn] = None,
                 cache_map: Optional[CacheMap] = None,
                 stripped_query_operators: Sequence[str] = DEFAULT_STRIPPED_QUERY_OPERATORS,
                 **loader_options: Any):
        """
        Initialize the service loader.

        Args:
            app: Application exposing services by name
            service_name: Name of the service to load from
            cache_params_fn: Extracts cache-relevant params
            cache_map: Cache store, a private MemoryCacheMap by default
            stripped_query_operators: Operators removed from batched queries
            **loader_options: DataLoader options (max_batch_size, cache, cache_key_fn)
        """
        self.app = app
        self.service_name = service_name
        self.service = app.service(service_name)
        self.id_field = get_service_id_field(self.service)
        self.cache_map: CacheMap = cache_map if cache_map is not None else MemoryCacheMap()
        self.codec = CacheKeyCodec(service_name, cache_params_fn)
        self.stripped_query_operators = tuple(stripped_query_operators)
        self.loader_options: Dict[str, Any] = {
            "cache_key_fn": default_cache_key_fn,
            **loader_options,
        }
        self.batch_groups = BatchGroupRegistry()
        self._pending: Dict[str, "asyncio.Future[Any]"] = {}

    @property
    def cache_params_fn(self) -> CacheParamsFn:
        return self.codec.cache_params_fn

    # Request execution

    async def exec(self, request: Optional[LoaderRequest] = None, **options: Any) -> Any:
        """Resolve a request against the cache, the batch groups or the service.

        Identical requests issued while one is in flight share its result.
        The work runs in its own task and is never cancelled by callers.

        Raises:
            SerializationError: If the request cannot be turned into a cache key
            CapabilityError: If a batch group cannot be created for the service
        """
        if request is None:
            request = LoaderRequest(**options)
        elif options:
            request = replace(request, **options)
        request = request.normalize(self.id_field)

        cache_key = self.stringify_key(request.cache_fields(), request.cache_params_fn)

        task = self._pending.get(cache_key)
        if task is None:
            task = asyncio.ensure_future(self._resolve(request, cache_key))
            self._pending[cache_key] = task
            task.add_done_callback(lambda done: self._settle(cache_key, done))

        return await asyncio.shield(task)

    def _settle(self, cache_key: str, task: "asyncio.Future[Any]") -> None:
        if self._pending.get(cache_key) is task:
            del self._pending[cache_key]
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Request failed for {self.service_name}: {task.exception()!r}")

    async def _resolve(self, request: LoaderRequest, cache_key: str) -> Any:
        cached = await maybe_await(self.cache_map.get(cache_key))
        if cached is not None:
            logger.debug(f"Cache hit for {self.service_name}: {cache_key}")
            return cached

        logger.debug(f"Cache miss for {self.service_name}: {cache_key}")
        if request.method.is_batched:
            result = await self._load_batched(request)
        else:
            result = await self._call_service(request)

        await maybe_await(self.cache_map.set(cache_key, result))
        return result

    async def _call_service(self, request: LoaderRequest) -> Any:
        method = request.method
        params = request.params or {}

        if method is LoadMethod.GET:
            return await self.service.get(request.id, params)
        elif method is LoadMethod.GET_RAW:
            return await self.service._get(request.id, params)
        elif method is LoadMethod.FIND:
            return await self.service.find(params)
        elif method is LoadMethod.FIND_RAW:
            return await self.service._find(params)

        raise ValueError(f"Method {method.value} is not a direct service call")

    async def _load_batched(self, request: LoaderRequest) -> Any:
        shape_key = self.stringify_key(request.batch_fields(), request.cache_params_fn)
        group = self.batch_groups.get_or_create(shape_key, lambda: self._create_group(request))

        ids = request.id if isinstance(request.id, list) else [request.id]
        try:
            if isinstance(request.id, list):
                result = await group.load_many(request.id)
                values = list(result)
            else:
                result = await group.load(request.id)
                values = [result]
        except Exception:
            # Failed ids must reach the service again on retry
            group.clear_many(ids)
            raise

        # Unmatched ids are not memoized, later loads ask the service again
        unmatched = [id for id, value in zip(ids, values) if value is None]
        if unmatched:
            group.clear_many(unmatched)
        return result

    def _create_group(self, request: LoaderRequest) -> DataLoader:
        return create_batch_group(
            self.service,
            key=request.key,
            multi=request.multi,
            method=request.method,
            params=request.params,
            stripped_query_operators=self.stripped_query_operators,
            **self.loader_options,
        )

    def stringify_key(self, fields: Dict[str, Any], cache_params_fn: Optional[CacheParamsFn] = None) -> str:
        """Build the cache key for request fields."""
        return self.codec.encode(fields, cache_params_fn)

    # Terminal methods

    def get(self, id: Any, params: Params = None, cache_params_fn: Optional[CacheParamsFn] = None):
        """Get a record by id through the service's hooked ``get``."""
        return self.exec(method=LoadMethod.GET, id=id, params=params, cache_params_fn=cache_params_fn)

    def get_raw(self, id: Any, params: Params = None, cache_params_fn: Optional[CacheParamsFn] = None):
        """Get a record by id through the unhooked ``_get``."""
        return self.exec(method=LoadMethod.GET_RAW, id=id, params=params, cache_params_fn=cache_params_fn)

    def find(self, params: Params = None, cache_params_fn: Optional[CacheParamsFn] = None):
        """Find records through the service's hooked ``find``."""
        return self.exec(method=LoadMethod.FIND, params=params, cache_params_fn=cache_params_fn)

    def find_raw(self, params: Params = None, cache_params_fn: Optional[CacheParamsFn] = None):
        """Find records through the unhooked ``_find``."""
        return self.exec(method=LoadMethod.FIND_RAW, params=params, cache_params_fn=cache_params_fn)

    def load(self, id: Any, params: Params = None, cache_params_fn: Optional[CacheParamsFn] = None):
        """Load one id or a list of ids, batched into ``find`` calls."""
        return self.exec(method=LoadMethod.LOAD, id=id, params=params, cache_params_fn=cache_params_fn)

    def load_raw(self, id: Any, params: Params = None, cache_params_fn: Optional[CacheParamsFn] = None):
        """Load one id or a list of ids, batched into ``_find`` calls."""
        return self.exec(method=LoadMethod.LOAD_RAW, id=id, params=params, cache_params_fn=cache_params_fn)

    # Names matching the service's unhooked methods
    _get = get_raw
    _find = find_raw
    _load = load_raw

    # Chained queries

    def query(self) -> LoaderQuery:
        """Start an empty chained query."""
        return LoaderQuery(loader=self)

    def key(self, key: str) -> LoaderQuery:
        """Load by an alternate field, expecting one record per id."""
        return self.query().key(key)

    def multi(self, key: str) -> LoaderQuery:
        """Load by an alternate field, returning every matching record per id."""
        return self.query().multi(key)

    def select(self, fields: Union[str, Iterable[str]]) -> LoaderQuery:
        """Trim results to fields (plus the primary and lookup keys)."""
        return self.query().select(fields)

    def params(self, cache_params_fn: CacheParamsFn) -> LoaderQuery:
        """Use a different cache-params extractor for the chained query."""
        return self.query().params(cache_params_fn)

    # Invalidation

    async def clear(self) -> "ServiceLoader":
        """Drop batch groups and every cache entry tagged with this service.

        Safe on stores shared between loaders: entries of other services
        are left untouched.
        """
        self.batch_groups.clear()

        keys = await collect_keys(self.cache_map.keys())
        owned: List[str] = [key for key in keys if self.codec.owner(key) == self.service_name]
        for key in owned:
            await maybe_await(self.cache_map.delete(key))

        logger.info(f"Cleared {len(owned)} cache entries for {self.service_name}")
        return self

"""Application level registry of service loaders."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Type

from .service_loader import ServiceLoader
from ..entities.config import LoaderSettings
from ..entities.protocols import ServiceProvider
from ...cache.adapters.factory import create_cache_map
from ...cache.entities.cache_key import CacheParamsFn
from ...cache.entities.config import CacheSettings
from ...cache.entities.protocols import CacheMap

logger = logging.getLogger(__name__)


class AppLoader:
    """Creates one ServiceLoader per service on first use and keeps it.

    Per-service configuration in ``services`` overrides the defaults given
    here, including the loader class::

        loader = AppLoader(app, services={"users": {"max_batch_size": 50}})
        user = await loader.service("users").load(1)
    """

    def __init__(self,
                 app: ServiceProvider,
                 services: Optional[Mapping[str, Dict[str, Any]]] = None,
                 loader_class: Type[ServiceLoader] = ServiceLoader,
                 cache_params_fn: Optional[CacheParamsFn] = None,
                 cache_map: Optional[CacheMap] = None,
                 **loader_options: Any):
        self.app = app
        self.services: Dict[str, Dict[str, Any]] = dict(services or {})
        self.loader_options: Dict[str, Any] = {
            "loader_class": loader_class,
            "cache_params_fn": cache_params_fn,
            "cache_map": cache_map,
            **loader_options,
        }
        self.loaders: Dict[str, ServiceLoader] = {}

    @classmethod
    def from_settings(cls,
                      app: ServiceProvider,
                      loader_settings: Optional[LoaderSettings] = None,
                      cache_settings: Optional[CacheSettings] = None,
                      **kwargs: Any) -> "AppLoader":
        """Create an AppLoader wired from environment driven settings.

        All services share the cache store built from ``cache_settings``.
        """
        loader_settings = loader_settings or LoaderSettings()
        cache_map = create_cache_map(cache_settings)
        options = {**loader_settings.to_loader_options(), **kwargs}
        options.setdefault("cache_map", cache_map)
        return cls(app, **options)

    def service(self, service_name: str) -> ServiceLoader:
        """Get or create the loader for a service."""
        loader = self.loaders.get(service_name)
        if loader is not None:
            return loader

        options = {**self.loader_options, **self.services.get(service_name, {})}
        loader_class = options.pop("loader_class")
        loader = loader_class(self.app, service_name, **options)
        self.loaders[service_name] = loader
        logger.debug(f"Created {loader_class.__name__} for service '{service_name}'")
        return loader

    async def clear(self) -> "AppLoader":
        """Clear every loader's cache entries and forget all loaders."""
        await asyncio.gather(*(loader.clear() for loader in self.loaders.values()))
        logger.info(f"Cleared {len(self.loaders)} service loaders")
        self.loaders.clear()
        return self

"""Loaders feature for neo-loaders.

Feature-First layout:
- entities/: Loader requests, backend protocols and configuration
- services/: ServiceLoader, AppLoader, chained queries and batch groups
- utils/: Result demultiplexing and projection helpers
"""

from .entities import (
    LoadMethod,
    LoaderRequest,
    CollectionService,
    ServiceProvider,
    LoaderSettings,
)
from .services import (
    AppLoader,
    ServiceLoader,
    LoaderQuery,
    BatchGroupRegistry,
    create_batch_group,
)
from .utils import (
    get_by_dot_path,
    unique_keys,
    unique_results,
    unique_results_multi,
    project,
)

__all__ = [
    # Entities
    "LoadMethod",
    "LoaderRequest",
    "CollectionService",
    "ServiceProvider",
    "LoaderSettings",
    
    # Services
    "AppLoader",
    "ServiceLoader",
    "LoaderQuery",
    "BatchGroupRegistry",
    "create_batch_group",
    
    # Utils
    "get_by_dot_path",
    "unique_keys",
    "unique_results",
    "unique_results_multi",
    "project",
]

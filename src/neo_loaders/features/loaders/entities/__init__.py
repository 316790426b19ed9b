"""Loader entities - requests, backend protocols and configuration."""

from .request import LoadMethod, LoaderRequest, sort_ids
from .protocols import (
    CollectionService,
    ServiceProvider,
    ServiceResult,
    get_service_id_field,
)
from .config import LoaderSettings

__all__ = [
    "LoadMethod",
    "LoaderRequest",
    "sort_ids",
    "CollectionService",
    "ServiceProvider",
    "ServiceResult",
    "get_service_id_field",
    "LoaderSettings",
]

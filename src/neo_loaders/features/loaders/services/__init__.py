"""Loader services."""

from .batch_registry import (
    BatchGroupRegistry,
    build_batch_params,
    create_batch_group,
)
from .loader_query import LoaderQuery
from .service_loader import ServiceLoader
from .app_loader import AppLoader

__all__ = [
    "BatchGroupRegistry",
    "build_batch_params",
    "create_batch_group",
    "LoaderQuery",
    "ServiceLoader",
    "AppLoader",
]

"""Loader utilities - result demultiplexing and field projection."""

from .results import (
    get_by_dot_path,
    unwrap_records,
    unique_keys,
    unique_results,
    unique_results_multi,
)
from .projection import project, projection_fields

__all__ = [
    "get_by_dot_path",
    "unwrap_records",
    "unique_keys",
    "unique_results",
    "unique_results_multi",
    "project",
    "projection_fields",
]

"""Batch groups - one DataLoader per request shape.

A batch group collects the ids requested for one combination of lookup key,
multiplicity, method and params, and resolves them with a single bulk read
against the backend service.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from strawberry.dataloader import DataLoader

from ..entities.request import LoadMethod
from ..utils.results import unique_keys, unique_results, unique_results_multi
from ....core.exceptions import CapabilityError

logger = logging.getLogger(__name__)

DEFAULT_STRIPPED_QUERY_OPERATORS: Tuple[str, ...] = ("$limit", "$skip")


def build_batch_params(params: Optional[Dict[str, Any]],
                       key: str,
                       keys: List[Any],
                       stripped_query_operators: Sequence[str] = DEFAULT_STRIPPED_QUERY_OPERATORS) -> Dict[str, Any]:
    """Build the params for one bulk read selecting ``key in keys``."""
    params = params or {}
    query = dict(params.get("query") or {})

    stripped = [operator for operator in stripped_query_operators if operator in query]
    for operator in stripped:
        del query[operator]
    if stripped:
        logger.warning(f"Stripped pagination operators {stripped} from batched query on '{key}'")

    query[key] = {"$in": keys}
    return {
        **params,
        "paginate": False,
        "query": query,
    }


def create_batch_group(service: Any,
                       key: str,
                       multi: bool,
                       method: LoadMethod,
                       params: Optional[Dict[str, Any]] = None,
                       stripped_query_operators: Sequence[str] = DEFAULT_STRIPPED_QUERY_OPERATORS,
                       **loader_options: Any) -> DataLoader:
    """Create a DataLoader resolving ids with one bulk read per batch.

    Raises:
        CapabilityError: If the service lacks the bulk read method the
            loader method maps to (``find`` for load, ``_find`` for _load).
    """
    service_method = method.bulk_method
    method_fn = getattr(service, service_method, None)
    if not callable(method_fn):
        raise CapabilityError(
            f"Cannot create a loader for a service that does not have a {service_method} method.",
            details={"method": service_method, "key": key},
        )

    get_results = unique_results_multi if multi else unique_results

    async def load_fn(keys: List[Any]) -> List[Any]:
        batch_keys = unique_keys(keys)
        logger.debug(f"Dispatching batch of {len(batch_keys)} keys on '{key}' via {service_method}")
        result = await method_fn(build_batch_params(params, key, batch_keys, stripped_query_operators))
        return get_results(keys, result, key)

    return DataLoader(load_fn=load_fn, **loader_options)


class BatchGroupRegistry:
    """Registry of batch groups keyed by canonical request shape."""

    def __init__(self):
        self._groups: Dict[str, DataLoader] = {}

    def get(self, shape_key: str) -> Optional[DataLoader]:
        """Get the group for a shape, if created."""
        return self._groups.get(shape_key)

    def get_or_create(self, shape_key: str, factory: Callable[[], DataLoader]) -> DataLoader:
        """Get the group for a shape, creating it on first use."""
        group = self._groups.get(shape_key)
        if group is None:
            group = factory()
            self._groups[shape_key] = group
            logger.debug(f"Created batch group {shape_key}")
        return group

    def clear(self) -> None:
        """Drop every group. Batches already dispatched still complete."""
        self._groups.clear()

    def values(self) -> List[DataLoader]:
        return list(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __contains__(self, shape_key: object) -> bool:
        return shape_key in self._groups

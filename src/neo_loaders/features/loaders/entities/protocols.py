"""Loader protocols for neo-loaders.

Loaders sit in front of collection services. These protocols describe the
small surface the loaders rely on; any backend implementing it can be used.
"""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable

ServiceResult = Union[List[Dict[str, Any]], Dict[str, Any]]

DEFAULT_ID_FIELD = "id"


@runtime_checkable
class CollectionService(Protocol):
    """Protocol for backend collection services.

    ``find`` honors ``params["paginate"] = False`` and query filters of the
    form ``{field: {"$in": [...]}}``. Services may also expose unhooked
    ``_get`` and ``_find`` variants with the same signatures.
    """

    @abstractmethod
    async def get(self, id: Any, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Get a single record by primary key."""
        ...

    @abstractmethod
    async def find(self, params: Optional[Dict[str, Any]] = None) -> ServiceResult:
        """Find records, as a list or a ``{"data": [...]}`` page."""
        ...


@runtime_checkable
class ServiceProvider(Protocol):
    """Protocol for applications exposing collection services by name."""

    @abstractmethod
    def service(self, name: str) -> CollectionService:
        """Return the service registered under name."""
        ...


def get_service_id_field(service: Any) -> str:
    """Discover the primary key field a service is configured with."""
    options = getattr(service, "options", None)
    if isinstance(options, Mapping):
        id_field = options.get("id")
    else:
        id_field = getattr(options, "id", None)

    if not id_field:
        id_field = getattr(service, "id", None)

    return id_field if isinstance(id_field, str) and id_field else DEFAULT_ID_FIELD

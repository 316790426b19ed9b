"""Helpers mapping bulk service results back to requested keys.

Keys are compared by their string form, so an id requested as ``"1"``
matches a record whose field holds ``1``.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..entities.protocols import ServiceResult

_MISSING = object()


def get_by_dot_path(obj: Any, path: str) -> Any:
    """Get a value from nested mappings using dot notation.

    ``get_by_dot_path(record, "author.id")`` returns ``record["author"]["id"]``
    or ``None`` when any segment is missing.
    """
    current = obj
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def unwrap_records(result: ServiceResult) -> List[Any]:
    """Return the record list from a bare list or a ``{"data": [...]}`` page."""
    if isinstance(result, dict) and "data" in result:
        return list(result["data"] or [])
    if result is None:
        return []
    return list(result)


def unique_keys(keys: Iterable[Any]) -> List[Any]:
    """Remove duplicate keys while preserving order."""
    found = set()
    unique = []
    for key in keys:
        key_str = str(key)
        if key_str not in found:
            found.add(key_str)
            unique.append(key)
    return unique


def unique_results(keys: Sequence[Any],
                   result: ServiceResult,
                   key: str = "id",
                   default_value: Optional[Any] = None) -> List[Optional[Any]]:
    """Map service results back to requested keys in order.

    Returns one result per key: the first record matching it, or
    ``default_value``.
    """
    found: Dict[str, Any] = {}
    for item in unwrap_records(result):
        found.setdefault(str(get_by_dot_path(item, key)), item)

    return [found.get(str(requested), default_value) for requested in keys]


def unique_results_multi(keys: Sequence[Any],
                         result: ServiceResult,
                         key: str = "id",
                         default_value: Optional[Any] = None) -> List[Optional[List[Any]]]:
    """Map service results back to requested keys in order.

    Returns the list of all records matching each key, or ``default_value``.
    """
    found: Dict[str, List[Any]] = {}
    for item in unwrap_records(result):
        found.setdefault(str(get_by_dot_path(item, key)), []).append(item)

    results = []
    for requested in keys:
        matches = found.get(str(requested), _MISSING)
        results.append(default_value if matches is _MISSING else list(matches))
    return results

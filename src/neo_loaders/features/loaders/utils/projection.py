"""Field projection for loader results.

Results may be shared by many callers through the cache, so projection
always builds new containers and never touches its input.
"""

from typing import Any, Iterable, List, Optional, Set


def projection_fields(fields: Iterable[str], id_field: str, key: Optional[str] = None) -> Set[str]:
    """Selected fields plus the primary key and the lookup key's root field."""
    selected = set(fields)
    selected.add(id_field)
    if key:
        selected.add(key.split(".", 1)[0])
    return selected


def _trim_record(record: Any, selected: Set[str]) -> Any:
    if not isinstance(record, dict):
        return record
    return {name: value for name, value in record.items() if name in selected}


def _trim_list(records: List[Any], selected: Set[str]) -> List[Any]:
    trimmed = []
    for record in records:
        if isinstance(record, list):
            trimmed.append([_trim_record(item, selected) for item in record])
        else:
            trimmed.append(_trim_record(record, selected))
    return trimmed


def project(fields: Optional[Iterable[str]],
            result: Any,
            id_field: str = "id",
            key: Optional[str] = None) -> Any:
    """Trim a loader result to the selected fields, preserving its shape.

    Args:
        fields: Field names to keep; ``None`` returns the result unchanged
        result: A record, a list of records, a list of record lists
            (multi-match loads) or a ``{"data": [...]}`` page
        id_field: Primary key field, always kept
        key: Active lookup key, always kept

    Returns:
        A trimmed copy of result
    """
    if fields is None or result is None:
        return result

    selected = projection_fields(fields, id_field, key)

    if isinstance(result, list):
        return _trim_list(result, selected)

    if isinstance(result, dict) and isinstance(result.get("data"), list):
        page = dict(result)
        page["data"] = _trim_list(result["data"], selected)
        return page

    return _trim_record(result, selected)

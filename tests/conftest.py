"""Pytest configuration and fixtures for neo-loaders tests."""

import copy
from typing import Any, Dict, List, Optional

import pytest

from neo_loaders.core.exceptions import BackendError


POSTS = {
    1: {"id": 1, "body": "John post", "user_id": 101, "star_ids": [102, 103, 104], "author": {"user_id": 101}},
    2: {"id": 2, "body": "Marshall post", "user_id": 102, "star_ids": [101, 103, 104], "author": {"user_id": 102}},
    3: {"id": 3, "body": "Barbara post", "user_id": 103, "author": {"user_id": 103}},
    4: {"id": 4, "body": "Aubree post", "user_id": 104, "author": {"user_id": 104}},
}

COMMENTS = {
    11: {"id": 11, "text": "John post Marshall comment 11", "post_id": 1, "user_id": 102},
    12: {"id": 12, "text": "John post Marshall comment 12", "post_id": 1, "user_id": 102},
    13: {"id": 13, "text": "John post Marshall comment 13", "post_id": 1, "user_id": 102},
    14: {"id": 14, "text": "Marshall post John comment 14", "post_id": 2, "user_id": 101},
    15: {"id": 15, "text": "Marshall post John comment 15", "post_id": 2, "user_id": 101},
    16: {"id": 16, "text": "Barbara post John comment 16", "post_id": 3, "user_id": 101},
    17: {"id": 17, "text": "Aubree post Marshall comment 17", "post_id": 4, "user_id": 102},
}

USERS = {
    101: {"id": 101, "name": "John"},
    102: {"id": 102, "name": "Marshall"},
    103: {"id": 103, "name": "Barbara"},
    104: {"id": 104, "name": "Aubree"},
}


def _field(record: Dict[str, Any], path: str) -> Any:
    value: Any = record
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def _matches(record: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for name, condition in query.items():
        if name.startswith("$"):
            continue
        value = _field(record, name)
        if isinstance(condition, dict) and "$in" in condition:
            if str(value) not in {str(item) for item in condition["$in"]}:
                return False
        elif value != condition:
            return False
    return True


class FakeService:
    """In-memory collection service recording every backend call.

    ``get`` and ``find`` run the ``params["callback"]`` hook, the raw
    ``_get`` and ``_find`` variants do not.
    """

    def __init__(self, store: Dict[Any, Dict[str, Any]], id_field: str = "id",
                 paginate: Optional[Dict[str, int]] = None):
        self.store = copy.deepcopy(store)
        self.options = {"id": id_field, "paginate": paginate}
        self.calls: List[tuple] = []
        self.hook_calls = 0
        self.fail_with: Optional[Exception] = None

    async def _run_hooks(self, method: str, params: Optional[Dict[str, Any]]) -> None:
        callback = (params or {}).get("callback")
        if callback is not None:
            self.hook_calls += 1
            await callback(method, params)

    def _raise_pending_failure(self) -> None:
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    def _lookup(self, id: Any) -> Dict[str, Any]:
        for record in self.store.values():
            if str(record.get(self.options["id"])) == str(id):
                return copy.deepcopy(record)
        raise BackendError(f"No record found for id '{id}'")

    def _query(self, params: Optional[Dict[str, Any]]) -> Any:
        params = params or {}
        query = params.get("query") or {}
        records = [copy.deepcopy(record) for record in self.store.values() if _matches(record, query)]

        for name, direction in (query.get("$sort") or {}).items():
            records.sort(key=lambda record: _field(record, name), reverse=direction < 0)

        total = len(records)
        skip = query.get("$skip", 0)
        records = records[skip:]
        if "$limit" in query:
            records = records[:query["$limit"]]

        paginate = self.options["paginate"]
        if paginate and params.get("paginate") is not False:
            limit = query.get("$limit", paginate["default"])
            return {"total": total, "limit": limit, "skip": skip, "data": records[:limit]}
        return records

    async def get(self, id: Any, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append(("get", id, params))
        await self._run_hooks("get", params)
        self._raise_pending_failure()
        return self._lookup(id)

    async def _get(self, id: Any, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self.calls.append(("_get", id, params))
        self._raise_pending_failure()
        return self._lookup(id)

    async def find(self, params: Optional[Dict[str, Any]] = None) -> Any:
        self.calls.append(("find", params))
        await self._run_hooks("find", params)
        self._raise_pending_failure()
        return self._query(params)

    async def _find(self, params: Optional[Dict[str, Any]] = None) -> Any:
        self.calls.append(("_find", params))
        self._raise_pending_failure()
        return self._query(params)

    def calls_to(self, method: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == method]


class GetOnlyService:
    """Service without bulk read methods."""

    options = {"id": "id"}

    async def get(self, id: Any, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {"id": id}


class FakeApp:
    """Application exposing services by name."""

    def __init__(self):
        self.services: Dict[str, Any] = {
            "posts": FakeService(POSTS),
            "comments": FakeService(COMMENTS),
            "users": FakeService(USERS, paginate={"default": 10, "max": 50}),
            "get-only": GetOnlyService(),
        }

    def service(self, name: str) -> Any:
        return self.services[name]


@pytest.fixture
def app():
    """Fresh fake application with posts, comments and users services."""
    return FakeApp()


@pytest.fixture
def posts_service(app):
    return app.service("posts")


@pytest.fixture
def comments_service(app):
    return app.service("comments")

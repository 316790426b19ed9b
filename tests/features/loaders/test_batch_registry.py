"""Tests for batch groups."""

import asyncio

import pytest
from strawberry.dataloader import DataLoader

from neo_loaders.core.exceptions import CapabilityError
from neo_loaders.features.cache.entities.cache_key import default_cache_key_fn
from neo_loaders.features.loaders.entities.request import LoadMethod
from neo_loaders.features.loaders.services.batch_registry import (
    BatchGroupRegistry,
    build_batch_params,
    create_batch_group,
)


class TestBuildBatchParams:
    """Test bulk read params."""

    def test_adds_in_filter_and_disables_pagination(self):
        params = build_batch_params(None, "id", [1, 2])

        assert params == {"paginate": False, "query": {"id": {"$in": [1, 2]}}}

    def test_merges_caller_params(self):
        """Test caller params and query filters are kept."""
        original = {"user": {"id": 1}, "query": {"user_id": 101}}

        params = build_batch_params(original, "post_id", [1])

        assert params == {
            "user": {"id": 1},
            "paginate": False,
            "query": {"user_id": 101, "post_id": {"$in": [1]}},
        }
        assert original == {"user": {"id": 1}, "query": {"user_id": 101}}

    def test_strips_configured_operators(self):
        params = build_batch_params(
            {"query": {"$limit": 5, "$skip": 10, "$sort": {"id": 1}}},
            "id",
            [1],
            stripped_query_operators=("$limit",),
        )

        assert params["query"] == {"$skip": 10, "$sort": {"id": 1}, "id": {"$in": [1]}}


class TestCreateBatchGroup:
    """Test batch group creation and execution."""

    def test_requires_bulk_read_method(self, app):
        """Test a missing find method is reported at creation time."""
        with pytest.raises(CapabilityError) as exc_info:
            create_batch_group(app.service("get-only"), key="id", multi=False, method=LoadMethod.LOAD)

        assert exc_info.value.details == {"method": "find", "key": "id"}

    @pytest.mark.asyncio
    async def test_returns_a_data_loader(self, app):
        group = create_batch_group(
            app.service("posts"),
            key="id",
            multi=False,
            method=LoadMethod.LOAD_RAW,
            max_batch_size=3,
        )

        assert isinstance(group, DataLoader)
        assert group.max_batch_size == 3

    @pytest.mark.asyncio
    async def test_one_bulk_read_per_batch(self, app, posts_service):
        """Test keys loaded together are resolved by a single read."""
        group = create_batch_group(
            posts_service,
            key="id",
            multi=False,
            method=LoadMethod.LOAD,
            cache_key_fn=default_cache_key_fn,
        )

        results = await asyncio.gather(group.load(3), group.load(1), group.load("3"))

        assert [post["id"] for post in results] == [3, 1, 3]
        finds = posts_service.calls_to("find")
        assert len(finds) == 1
        assert finds[0][1]["query"] == {"id": {"$in": [3, 1]}}

    @pytest.mark.asyncio
    async def test_duplicate_keys_without_memo(self, app, posts_service):
        """Test duplicate keys are deduplicated in the read when memoizing is off."""
        group = create_batch_group(posts_service, key="id", multi=False, method=LoadMethod.LOAD, cache=False)

        results = await group.load_many([1, 1, 2])

        assert [post["id"] for post in results] == [1, 1, 2]
        assert posts_service.calls_to("find")[0][1]["query"] == {"id": {"$in": [1, 2]}}

    @pytest.mark.asyncio
    async def test_multi_match_group(self, app, comments_service):
        group = create_batch_group(comments_service, key="post_id", multi=True, method=LoadMethod.LOAD_RAW)

        results = await group.load_many([4, 99])

        assert results == [[await comments_service.get(17)], None]
        assert len(comments_service.calls_to("_find")) == 1


class TestBatchGroupRegistry:
    """Test the batch group registry."""

    def test_get_or_create(self):
        registry = BatchGroupRegistry()
        created = []

        def factory():
            group = object()
            created.append(group)
            return group

        first = registry.get_or_create("shape", factory)
        second = registry.get_or_create("shape", factory)

        assert first is second
        assert len(created) == 1
        assert registry.get("shape") is first
        assert "shape" in registry
        assert list(registry) == ["shape"]
        assert len(registry) == 1

    def test_factory_errors_do_not_register(self):
        registry = BatchGroupRegistry()

        def factory():
            raise CapabilityError("no find")

        with pytest.raises(CapabilityError):
            registry.get_or_create("shape", factory)

        assert registry.get("shape") is None
        assert len(registry) == 0

    def test_clear(self):
        registry = BatchGroupRegistry()
        registry.get_or_create("a", object)
        registry.get_or_create("b", object)

        registry.clear()

        assert len(registry) == 0
        assert registry.values() == []

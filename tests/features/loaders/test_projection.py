"""Tests for result projection."""

import copy

from neo_loaders.features.loaders.utils.projection import project, projection_fields


POST = {"id": 1, "body": "x", "user_id": 9}


class TestProjection:
    """Test shape preserving field selection."""

    def test_keeps_primary_key(self):
        assert project(["body"], POST) == {"id": 1, "body": "x"}

    def test_custom_primary_key(self):
        record = {"_id": "a", "body": "x", "user_id": 9}

        assert project(["body"], record, id_field="_id") == {"_id": "a", "body": "x"}

    def test_keeps_lookup_key_root(self):
        assert projection_fields(["body"], "id", "author.id") == {"body", "id", "author"}

    def test_no_fields_returns_result_unchanged(self):
        assert project(None, POST) is POST
        assert project(["body"], None) is None

    def test_list(self):
        result = project(["body"], [POST, {"id": 2, "body": "y", "user_id": 8}])

        assert result == [{"id": 1, "body": "x"}, {"id": 2, "body": "y"}]

    def test_nested_lists(self):
        comments = [[{"id": 11, "text": "a", "post_id": 1}], None]

        result = project(["text"], comments, key="post_id")

        assert result == [[{"id": 11, "text": "a", "post_id": 1}], None]

    def test_page(self):
        page = {"total": 1, "limit": 10, "skip": 0, "data": [POST]}

        result = project(["user_id"], page)

        assert result == {"total": 1, "limit": 10, "skip": 0, "data": [{"id": 1, "user_id": 9}]}

    def test_does_not_mutate_input(self):
        page = {"total": 1, "data": [copy.deepcopy(POST)]}
        snapshot = copy.deepcopy(page)

        project(["body"], page)
        project(["body"], page["data"])

        assert page == snapshot

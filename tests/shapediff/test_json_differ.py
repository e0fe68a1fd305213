"""Tests for JSON-only diffing through a pydantic codec."""

from datetime import datetime, timezone
from typing import Optional

import jsonpatch
import pytest
from pydantic import BaseModel
from shapediff import JsonDiffer, inverse


class Event(BaseModel):
    name: str
    at: datetime


class Counter(BaseModel):
    values: list[int]
    limit: Optional[int] = None


def expect_patch(differ, from_, to):
    patch = differ.compare(from_, to)
    # from -> to
    assert differ.apply(patch, from_) == to
    # to -> from
    assert differ.apply(inverse(patch), to) == from_


class TestJsonDiffer:
    """Tests for JsonDiffer."""

    def test_dict_of_numbers(self):
        expect_patch(JsonDiffer(dict[str, int]), {"a": 1}, {"a": 2})

    def test_datetime_field(self):
        differ = JsonDiffer(Event)
        expect_patch(
            differ,
            Event(name="start", at=datetime(1970, 1, 1, tzinfo=timezone.utc)),
            Event(name="start", at=datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)),
        )

    def test_list_field(self):
        expect_patch(JsonDiffer(Counter), Counter(values=[1, 2, 3]), Counter(values=[1, 4, 3]))

    def test_optional_field(self):
        differ = JsonDiffer(Counter)
        expect_patch(differ, Counter(values=[]), Counter(values=[], limit=2))
        expect_patch(differ, Counter(values=[], limit=1), Counter(values=[], limit=2))

    def test_patch_is_standard_json_patch(self):
        patch = JsonDiffer(dict[str, int]).compare({"a": 1}, {"a": 2})
        assert patch.patch == [{"op": "replace", "path": "/a", "value": 2}]
        assert patch.inverse == [{"op": "replace", "path": "/a", "value": 1}]

    def test_inverse_swaps(self):
        patch = JsonDiffer(list[int]).compare([1], [1, 2])
        assert inverse(inverse(patch)) == patch
        assert inverse(patch).patch == patch.inverse

    def test_scalar_root_rejected(self):
        with pytest.raises(ValueError, match="object or array"):
            JsonDiffer(int).compare(1, 2)

    def test_mismatched_patch_raises(self):
        differ = JsonDiffer(dict[str, int])
        patch = differ.compare({"a": 1}, {})
        with pytest.raises(jsonpatch.JsonPatchException):
            differ.apply(patch, {"b": 1})


ALLOWED_OPS = {"add", "remove", "replace"}


class TestMoveFreeDocuments:
    """Tests that documents only carry add, remove and replace."""

    def test_renamed_key(self):
        patch = JsonDiffer(dict[str, int]).compare({"a": 1}, {"b": 1})
        assert patch.patch == [
            {"op": "remove", "path": "/a"},
            {"op": "add", "path": "/b", "value": 1},
        ]
        assert patch.inverse == [
            {"op": "remove", "path": "/b"},
            {"op": "add", "path": "/a", "value": 1},
        ]

    @pytest.mark.parametrize(
        "from_, to",
        [
            ({"a": {"x": [1, 2]}, "b": {}}, {"a": {}, "b": {"y": [1, 2]}}),
            ({"a": [1, 2, 3]}, {"a": [3, 1, 2]}),
            ({"a": [{"k": 1}, {"k": 2}]}, {"a": [{"k": 2}], "b": {"k": 1}}),
        ],
    )
    def test_moved_values(self, from_, to):
        differ = JsonDiffer(dict[str, object])
        patch = differ.compare(from_, to)
        assert {entry["op"] for entry in patch.patch} <= ALLOWED_OPS
        assert {entry["op"] for entry in patch.inverse} <= ALLOWED_OPS
        assert jsonpatch.apply_patch(from_, patch.patch) == to
        assert jsonpatch.apply_patch(to, patch.inverse) == from_

    def test_expanded_value_is_a_copy(self):
        from_ = {"a": {"x": 1}}
        patch = JsonDiffer(dict[str, object]).compare(from_, {"b": {"x": 1}})
        added = [entry for entry in patch.patch if entry["op"] == "add"]
        assert added and added[0]["value"] is not from_["a"]
        assert from_ == {"a": {"x": 1}}

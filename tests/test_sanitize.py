"""Tests for the response sanitizer."""

import datetime

import pytest

from tools.common import ABSENT, ValueKind, collect_sanitized, sanitize, value_kind


SAMPLES = [
    None,
    "text",
    0,
    3.5,
    True,
    [],
    {},
    [1, {"a": 1}, "s", None],
    [1, {"a": {"nested": 1}}, "s", None],
    [[{"a": {}}], [1, [2, {"b": 3}]]],
    {"a": {"nested": 1}, "b": "x"},
    {"tags": ["a", "b"], "groups": ["a", {"x": 1}], "empty": [], "n": None},
    ({"id": 1}, {"links": {"self": "x"}}),
    {"when": datetime.datetime(2024, 1, 1)},
    datetime.date(2024, 1, 1),
]


class TestValueKind:
    @pytest.mark.parametrize("value,kind", [
        (ABSENT, ValueKind.ABSENT),
        (None, ValueKind.NULL),
        ("s", ValueKind.PRIMITIVE),
        (1, ValueKind.PRIMITIVE),
        (1.5, ValueKind.PRIMITIVE),
        (False, ValueKind.PRIMITIVE),
        ([1], ValueKind.SEQUENCE),
        ((1,), ValueKind.SEQUENCE),
        ({"a": 1}, ValueKind.MAPPING),
        (object(), ValueKind.OTHER),
    ])
    def test_kinds(self, value, kind):
        assert value_kind(value) is kind


class TestSanitize:
    def test_none_passes_through(self):
        assert sanitize(None) is None

    def test_absent_passes_through(self):
        assert sanitize(ABSENT) is ABSENT

    @pytest.mark.parametrize("value", ["x", 42, 1.25, True, False, 0, ""])
    def test_primitives_unchanged(self, value):
        assert sanitize(value) == value

    def test_nested_mapping_value_dropped(self):
        assert sanitize({"a": {"nested": 1}, "b": "x"}) == {"b": "x"}

    def test_mapping_with_nothing_left_is_absent(self):
        result = sanitize({"a": {"nested": 1}})
        assert result is ABSENT
        assert result != {}

    def test_empty_mapping_is_absent(self):
        assert sanitize({}) is ABSENT

    def test_null_values_kept_in_mapping(self):
        assert sanitize({"activated": None}) == {"activated": None}

    def test_sequence_drops_elements_that_sanitize_to_absent(self):
        assert sanitize([1, {"a": {"nested": 1}}, "s", None]) == [1, "s", None]

    def test_sequence_keeps_mapping_elements_with_primitive_fields(self):
        assert sanitize([1, {"a": 1}, "s", None]) == [1, {"a": 1}, "s", None]

    def test_sequence_recurses_into_elements(self):
        value = [{"id": "1", "profile": {"name": "x"}}, {"profile": {"name": "y"}}, "z"]
        assert sanitize(value) == [{"id": "1"}, "z"]

    def test_array_of_primitives_kept_verbatim(self):
        assert sanitize({"tags": ["a", "b"]}) == {"tags": ["a", "b"]}

    def test_array_with_nulls_kept(self):
        assert sanitize({"tags": ["a", None]}) == {"tags": ["a", None]}

    def test_array_containing_object_drops_key(self):
        assert sanitize({"tags": ["a", {"x": 1}]}) is ABSENT
        assert sanitize({"tags": ["a", {"x": 1}], "id": 7}) == {"id": 7}

    def test_empty_array_value_kept(self):
        assert sanitize({"tags": []}) == {"tags": []}

    def test_key_order_preserved(self):
        result = sanitize({"z": 1, "nested": {}, "a": 2, "m": "x"})
        assert list(result) == ["z", "a", "m"]

    def test_unknown_objects_dropped(self):
        assert sanitize(datetime.date(2024, 1, 1)) is ABSENT
        assert sanitize({"when": datetime.date(2024, 1, 1), "id": 1}) == {"id": 1}
        assert sanitize([datetime.date(2024, 1, 1), 1]) == [1]

    def test_does_not_mutate_input(self, sample_user):
        before = repr(sample_user)
        sanitize(sample_user)
        assert repr(sample_user) == before

    def test_okta_user_record(self, sample_user):
        assert sanitize(sample_user) == {
            "id": "00u1abcd",
            "status": "ACTIVE",
            "created": "2024-01-01T00:00:00.000Z",
            "activated": None,
        }

    @pytest.mark.parametrize("value", SAMPLES)
    def test_idempotent(self, value):
        once = sanitize(value)
        assert sanitize(once) == once

    @pytest.mark.parametrize("value", SAMPLES)
    def test_total(self, value):
        sanitize(value)


async def _records(*items):
    for item in items:
        yield item


class TestCollectSanitized:
    @pytest.mark.asyncio
    async def test_drops_records_with_nothing_safe(self):
        result = await collect_sanitized(_records(
            {"id": "a", "profile": {"n": 1}},
            {"profile": {"n": 2}},
            {"id": "c"},
        ))
        assert result == [{"id": "a"}, {"id": "c"}]

    @pytest.mark.asyncio
    async def test_empty_listing(self):
        assert await collect_sanitized(_records()) == []

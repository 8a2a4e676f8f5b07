"""
Tests for mixin and the schema deep merge.

Deep merge follows kubectl-style semantics:
- Mappings are recursively merged
- Lists are replaced (not concatenated)
- Scalars use last-wins
- None can override non-None
"""

import pytest

from docschema import deep_merge, merge_all, mixin, validate


class TestMixin:
    def test_later_sources_win(self):
        assert mixin({}, {"a": 1, "b": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_target_modified_in_place(self):
        target = {"a": 1}
        result = mixin(target, {"b": 2})
        assert result is target
        assert target == {"a": 1, "b": 2}

    def test_none_sources_skipped(self):
        assert mixin({"a": 1}, None, {"b": 2}, None) == {"a": 1, "b": 2}

    def test_shallow(self):
        nested = {"x": 1}
        result = mixin({}, {"n": nested})
        assert result["n"] is nested

    def test_non_mapping_source(self):
        with pytest.raises(TypeError, match="mixin non-mapping"):
            mixin({}, [("a", 1)])


class TestDeepMerge:
    def test_merge_nested_objects(self):
        base = {"a": 1, "b": {"x": 10, "y": 20}}
        overlay = {"b": {"y": 30, "z": 40}, "c": 3}
        assert deep_merge(base, overlay) == {"a": 1, "b": {"x": 10, "y": 30, "z": 40}, "c": 3}

    def test_array_replacement(self):
        assert deep_merge({"enum": [1, 2, 3]}, {"enum": [4]}) == {"enum": [4]}

    def test_none_overrides(self):
        assert deep_merge({"required": True}, {"required": None}) == {"required": None}

    def test_none_overlay(self):
        assert deep_merge({"a": 1}, None) is None

    def test_none_base(self):
        overlay = {"a": {"b": 1}}
        result = deep_merge(None, overlay)
        assert result == overlay
        assert result is not overlay

    def test_inputs_not_mutated(self):
        base = {"a": {"b": 1}}
        overlay = {"a": {"c": 2}}
        deep_merge(base, overlay)
        assert base == {"a": {"b": 1}}
        assert overlay == {"a": {"c": 2}}


class TestMergeAll:
    def test_layers_in_order(self):
        layers = [
            {"properties": {"town": {"type": "string"}}},
            None,
            {"properties": {"town": {"required": True}}, "additionalProperties": False},
        ]
        assert merge_all(layers) == {
            "properties": {"town": {"type": "string", "required": True}},
            "additionalProperties": False,
        }

    def test_empty(self):
        assert merge_all([]) == {}
        assert merge_all([None]) == {}

    def test_merged_schema_validates(self):
        base = {"properties": {"town": {"type": "string"}}}
        strict = {"properties": {"town": {"required": True}}}
        assert not validate({}, merge_all([base, strict])).valid
        assert validate({}, base).valid

    def test_tightening_one_property_keeps_siblings(self):
        base = {
            "properties": {
                "town": {"type": "string"},
                "fruit": {"enum": ["orange", "cigar"]},
            }
        }
        variant = deep_merge(base, {"properties": {"town": {"maxLength": 3}}})
        assert variant["properties"]["fruit"] == {"enum": ["orange", "cigar"]}
        result = validate({"town": "Auckland", "fruit": "apple"}, variant)
        assert sorted(e.attribute for e in result.errors) == ["enum", "maxLength"]
        assert base["properties"]["town"] == {"type": "string"}

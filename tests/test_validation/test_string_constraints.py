"""
Tests for string constraints: minLength, maxLength and pattern.
"""

import re

import pytest

from docschema import validate


def schema_for(**constraints):
    return {"properties": {"field": dict(type="string", **constraints)}}


class TestLength:
    """Tests for minLength / maxLength."""

    def test_max_length_pass(self):
        assert validate({"field": "abc"}, schema_for(maxLength=3)).valid

    def test_max_length_fail(self):
        result = validate({"field": "abcd"}, schema_for(maxLength=3))
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.attribute == "maxLength"
        assert error.expected == 3
        # actual is the measured length
        assert error.actual == 4
        assert error.message == "is too long (maximum is 3 characters)"

    def test_min_length_pass(self):
        assert validate({"field": "abc"}, schema_for(minLength=3)).valid

    def test_min_length_fail(self):
        result = validate({"field": "ab"}, schema_for(minLength=3))
        error = result.errors[0]
        assert error.attribute == "minLength"
        assert error.actual == 2
        assert error.message == "is too short (minimum is 3 characters)"

    def test_both_bounds_reported(self):
        # contradictory bounds produce two independent violations
        result = validate({"field": "abcd"}, schema_for(minLength=5, maxLength=3))
        assert [e.attribute for e in result.errors] == ["minLength", "maxLength"]

    def test_length_counts_characters(self):
        assert validate({"field": "日本語"}, schema_for(maxLength=3)).valid


class TestPattern:
    """Tests for pattern."""

    def test_pattern_pass(self):
        assert validate({"field": "abc123"}, schema_for(pattern="^[a-z]+\\d+$")).valid

    def test_pattern_fail(self):
        result = validate({"field": "123abc"}, schema_for(pattern="^[a-z]+\\d+$"))
        error = result.errors[0]
        assert error.attribute == "pattern"
        assert error.actual == "123abc"
        assert error.message == "invalid input"

    def test_pattern_is_searched_not_anchored(self):
        assert validate({"field": "xx-yy"}, schema_for(pattern="-")).valid

    def test_compiled_pattern_accepted(self):
        pattern = re.compile(r"^\d{3}$")
        assert validate({"field": "123"}, schema_for(pattern=pattern)).valid
        assert not validate({"field": "1234"}, schema_for(pattern=pattern)).valid

    def test_malformed_pattern_raises(self):
        with pytest.raises(re.error):
            validate({"field": "x"}, schema_for(pattern="(unclosed"))

    def test_pattern_ignored_for_non_strings(self):
        schema = {"properties": {"field": {"type": "number", "pattern": "^x$"}}}
        assert validate({"field": 3}, schema).valid

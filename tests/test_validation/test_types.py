"""
Tests for type checking and type lists.
"""

from datetime import date, datetime

import pytest

from docschema import validate
from docschema.validation.validators import describe_type, infer_type, resolve_type


def check(value, type_spec, **options):
    schema = {"properties": {"field": {"type": type_spec}}}
    return validate({"field": value}, schema, **options)


class TestSingleTypes:
    """Each built-in type name accepts its values and rejects others."""

    @pytest.mark.parametrize(
        "type_name, good, bad",
        [
            ("string", "hello", 42),
            ("number", 42.5, "42"),
            ("integer", 42, 42.5),
            ("array", [1, 2], {"a": 1}),
            ("object", {"a": 1}, [1, 2]),
            ("boolean", False, 0),
            ("null", None, 0),
            ("date", datetime(2012, 1, 1), "2012-01-01"),
            ("any", "anything", None),
        ],
    )
    def test_type(self, type_name, good, bad):
        assert check(good, type_name).valid
        if type_name == "any":
            # any accepts every present value, including None
            assert check(bad, type_name).valid
            return
        result = check(bad, type_name)
        assert not result.valid
        assert result.errors[0].attribute == "type"
        assert result.errors[0].property == "field"

    def test_big_integer(self):
        assert check(10000000000, "integer").valid
        assert not check(10000000000.5, "integer").valid

    def test_integral_float_is_integer(self):
        assert check(3.0, "integer").valid

    def test_bool_is_not_number(self):
        assert not check(True, "number").valid
        assert not check(False, "integer").valid

    def test_plain_date_is_date(self):
        assert check(date(2020, 5, 17), "date").valid

    def test_tuple_is_array(self):
        assert check((1, 2), "array").valid

    def test_type_name_is_case_insensitive(self):
        assert check(4, "Number").valid
        assert check("x", " STRING ").valid

    def test_unknown_type_name_never_matches(self):
        result = check("x", "widget")
        assert not result.valid
        assert result.errors[0].attribute == "type"


class TestTypeLists:
    """A list of type names matches if any entry matches."""

    def test_first_matching_type_wins(self):
        assert check("x", ["number", "string"]).valid
        assert check(4, ["number", "string"]).valid

    def test_no_type_matches(self):
        result = check(True, ["number", "string"])
        assert not result.valid
        assert result.errors[0].expected == ["number", "string"]
        assert result.errors[0].message == "must be of number,string type"

    def test_nullable_string_with_format(self):
        schema = {"properties": {"site": {"type": ["string", "null"], "format": "url"}}}
        assert validate({"site": None}, schema).valid
        assert validate({"site": "http://test.com/"}, schema).valid
        assert not validate({"site": "hello"}, schema).valid


class TestTypeErrorRecord:
    """The type violation reports the inferred type of the value."""

    def test_actual_is_type_name(self):
        result = check(42, "string")
        error = result.errors[0]
        assert error.expected == "string"
        assert error.actual == "number"
        assert error.message == "must be of string type"

    def test_null_actual(self):
        assert check(None, "string").errors[0].actual == "null"

    def test_type_error_skips_other_constraints(self):
        schema = {"properties": {"field": {"type": "string", "minLength": 10}}}
        result = validate({"field": 4}, schema)
        assert [e.attribute for e in result.errors] == ["type"]


class TestTypeHelpers:
    def test_infer_type(self):
        assert infer_type("a") == "string"
        assert infer_type(True) == "boolean"
        assert infer_type(1) == "number"
        assert infer_type(1.5) == "number"
        assert infer_type([]) == "array"
        assert infer_type({}) == "object"
        assert infer_type(None) is None

    def test_describe_type(self):
        assert describe_type(None) == "null"
        assert describe_type(datetime(2020, 1, 1)) == "date"
        assert describe_type(object()) == "object"
        assert describe_type({1, 2}) == "set"

    def test_resolve_type_undeclared(self):
        assert resolve_type("x", None) == (True, None)

    def test_resolve_type_returns_matching_name(self):
        assert resolve_type(1, ["string", "integer"]) == (True, "integer")
        assert resolve_type(1.5, ["string", "integer"]) == (False, None)


class TestUntypedValues:
    """Without a declared type, constraints follow the value's own type."""

    def test_string_constraints_apply(self):
        schema = {"properties": {"field": {"maxLength": 3}}}
        assert not validate({"field": "toolong"}, schema).valid

    def test_numeric_constraints_apply(self):
        schema = {"properties": {"field": {"minimum": 10}}}
        assert not validate({"field": 2}, schema).valid

    def test_inapplicable_constraints_ignored(self):
        schema = {"properties": {"field": {"maxLength": 3}}}
        assert validate({"field": 12345}, schema).valid

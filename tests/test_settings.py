"""
Tests for ValidationOptions and option resolution.
"""

import logging

import pytest

from docschema import ValidationOptions, default_options, resolve_options, validate


class TestValidationOptions:
    def test_defaults(self):
        options = ValidationOptions()
        assert options.validate_formats is True
        assert options.validate_formats_strict is False
        assert options.validate_format_extensions is True
        assert options.cast is False
        assert options.additional_properties is True
        assert options.cast_source is False
        assert options.apply_default_value is False
        assert options.validate_default_value is False
        assert options.exit_on_first_error is False
        assert options.fail_on_first_error is False

    def test_aliases(self):
        options = ValidationOptions.model_validate({"castSource": True, "failOnFirstError": True})
        assert options.cast_source is True
        assert options.fail_on_first_error is True

    def test_stops_on_first_error(self):
        assert not ValidationOptions().stops_on_first_error
        assert ValidationOptions(exit_on_first_error=True).stops_on_first_error
        assert ValidationOptions(fail_on_first_error=True).stops_on_first_error


class TestResolveOptions:
    def test_none(self):
        assert resolve_options() == default_options

    def test_mapping_either_spelling(self):
        options = resolve_options({"cast": True, "castSource": True})
        assert options.cast and options.cast_source
        assert options.validate_formats

    def test_overrides_win(self):
        options = resolve_options({"cast": True}, cast=False)
        assert options.cast is False

    def test_model_instance_only_explicit_fields(self):
        options = resolve_options(ValidationOptions(cast=True))
        assert options.cast is True
        assert options.validate_formats is True

    def test_returns_fresh_instance(self):
        options = resolve_options()
        options.cast = True
        assert default_options.cast is False

    def test_unknown_option_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="docschema.settings"):
            options = resolve_options({"applyDefaultValueIfRequired": True})
        assert "applyDefaultValueIfRequired" in caplog.text
        assert options == default_options

    def test_bad_options_type(self):
        with pytest.raises(TypeError):
            resolve_options(["cast"])


class TestDefaultOptions:
    def test_changing_defaults_affects_later_calls(self):
        schema = {"properties": {"n": {"type": "integer"}}}
        default_options.cast = True
        try:
            assert validate({"n": "5"}, schema).valid
        finally:
            default_options.cast = False
        assert not validate({"n": "5"}, schema).valid

    def test_caller_options_do_not_leak(self):
        schema = {"properties": {"n": {"type": "integer"}}}
        validate({"n": "5"}, schema, cast=True)
        assert not validate({"n": "5"}, schema).valid

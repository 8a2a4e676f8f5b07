"""
Validation options.

Pydantic model for the flat set of boolean switches that control a
validation pass. Field names are snake_case; the camelCase spellings
(``validateFormats``, ``failOnFirstError``, ...) are accepted as aliases so
options written for JSON/YAML configuration can be passed unchanged.

Example:
    >>> opts = resolve_options({"cast": True, "castSource": True})
    >>> opts.cast, opts.cast_source, opts.validate_formats
    (True, True, True)
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .merge import mixin

logger = logging.getLogger(__name__)


class ValidationOptions(BaseModel):
    """
    Options controlling one validation pass.

    Attributes:
        validate_formats: Enforce ``format`` constraints
        validate_formats_strict: Treat unknown format names as violations
        validate_format_extensions: Consult the extension formats first
        cast: Coerce values to the declared type before checking
        additional_properties: Fallback for schemas without ``additionalProperties``
        cast_source: Write coerced values back into the document
        apply_default_value: Fill absent properties from ``default``
        validate_default_value: Check declared defaults against their schema
        exit_on_first_error: Stop at the first violation and return it
        fail_on_first_error: Stop at the first violation and raise ValidatorError
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    validate_formats: bool = Field(True, alias="validateFormats")
    validate_formats_strict: bool = Field(False, alias="validateFormatsStrict")
    validate_format_extensions: bool = Field(True, alias="validateFormatExtensions")
    cast: bool = Field(False, alias="cast")
    additional_properties: bool = Field(True, alias="additionalProperties")
    cast_source: bool = Field(False, alias="castSource")
    apply_default_value: bool = Field(False, alias="applyDefaultValue")
    validate_default_value: bool = Field(False, alias="validateDefaultValue")
    exit_on_first_error: bool = Field(False, alias="exitOnFirstError")
    fail_on_first_error: bool = Field(False, alias="failOnFirstError")

    @property
    def stops_on_first_error(self) -> bool:
        return self.exit_on_first_error or self.fail_on_first_error


# Process-wide defaults. Assigning attributes here changes the baseline for
# every later validate() call that does not override them.
default_options = ValidationOptions()

_ALIASES = {
    info.alias: name
    for name, info in ValidationOptions.model_fields.items()
    if info.alias
}


def _normalize_keys(options: Mapping) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in options.items():
        name = _ALIASES.get(key, key)
        if name not in ValidationOptions.model_fields:
            logger.warning("Ignoring unknown validation option %r", key)
            continue
        normalized[name] = value
    return normalized


def resolve_options(
    options: Union[ValidationOptions, Mapping, None] = None,
    **overrides: Any,
) -> ValidationOptions:
    """
    Overlay caller options on the defaults.

    Args:
        options: ValidationOptions instance or mapping (either key spelling)
        **overrides: Individual options, applied last

    Returns:
        A fresh ValidationOptions private to the caller
    """
    if isinstance(options, ValidationOptions):
        given = options.model_dump(exclude_unset=True)
    elif options is None or isinstance(options, Mapping):
        given = _normalize_keys(options or {})
    else:
        raise TypeError(
            f"options must be a mapping or ValidationOptions, got {type(options).__name__}"
        )

    merged = mixin(
        default_options.model_dump(),
        given,
        _normalize_keys(overrides),
    )
    return ValidationOptions.model_validate(merged)

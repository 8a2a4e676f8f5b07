"""
Document validation against declarative schemas.

Walks a document (nested dicts/lists from JSON, YAML or Python) against a
schema mapping and reports every violation:
- Type checks with type lists (string, number, integer, array, object, ...)
- Required properties, enums and dependencies
- String, numeric and array constraints
- Formats (email, url, color, ...) and custom conform predicates
- Optional coercion, default filling and value filters

Usage with a YAML schema:
    properties:
      title:
        type: string
        required: true
        maxLength: 140
      count:
        type: integer
        minimum: 0

Example:
    >>> from docschema.validation import validate
    >>> result = validate({"title": "Hello", "count": -1}, schema)
    >>> result.valid
    False
    >>> [e.attribute for e in result.errors]
    ['minimum']
"""

from .schema import MISSING, Attribute, Schema
from .validators import Validator, validate
from .errors import ValidationError, ValidationResult

__all__ = [
    "MISSING",
    "Attribute",
    "Schema",
    "Validator",
    "validate",
    "ValidationError",
    "ValidationResult",
]

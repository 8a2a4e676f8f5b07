"""
docschema: structural validation of JSON-like documents.

Example:
    >>> import docschema
    >>> schema = {"properties": {"town": {"type": "string", "required": True}}}
    >>> docschema.validate({"town": "Auckland"}, schema).valid
    True
"""

__version__ = "0.3.0"

# Core exceptions (no third-party imports)
from .exceptions import SchemaError, ValidatorError

from .merge import deep_merge, merge_all, mixin
from .settings import ValidationOptions, default_options, resolve_options
from .registry import DEFAULT_MESSAGES, Registry, default_registry
from .validation import (
    MISSING,
    Attribute,
    Schema,
    ValidationError,
    ValidationResult,
    Validator,
    validate,
)

__all__ = [
    "__version__",
    "SchemaError",
    "ValidatorError",
    "deep_merge",
    "merge_all",
    "mixin",
    "ValidationOptions",
    "default_options",
    "resolve_options",
    "DEFAULT_MESSAGES",
    "Registry",
    "default_registry",
    "MISSING",
    "Attribute",
    "Schema",
    "ValidationError",
    "ValidationResult",
    "Validator",
    "validate",
]

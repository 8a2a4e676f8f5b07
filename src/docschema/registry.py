"""
Format, filter and message registries.

A Registry bundles the four caller-extensible tables the engine consults:

- formats: core format specs (name -> pattern or predicate)
- format_extensions: formats consulted first when extensions are enabled
- filters: name -> transform, used when a schema's ``filter`` is a string
- messages: constraint attribute -> default message template

``default_registry`` is the process-wide instance used by ``validate()``
when no registry is passed. Registration is not synchronized: register
formats and filters during setup, before validating from several threads.

Example:
    >>> from docschema import default_registry
    >>> default_registry.register_filter("trim", str.strip)
    >>> @default_registry.register_format("even")
    ... def _even(value):
    ...     return len(value) % 2 == 0
"""

import logging
from typing import Any, Callable, Dict, Optional

from .formats import CORE_FORMATS, FORMAT_EXTENSIONS, FormatSpec

logger = logging.getLogger(__name__)

FilterFunc = Callable[[Any], Any]

DEFAULT_MESSAGES: Dict[str, str] = {
    "required": "is required",
    "minLength": "is too short (minimum is %{expected} characters)",
    "maxLength": "is too long (maximum is %{expected} characters)",
    "pattern": "invalid input",
    "minimum": "must be greater than or equal to %{expected}",
    "maximum": "must be less than or equal to %{expected}",
    "exclusiveMinimum": "must be greater than %{expected}",
    "exclusiveMaximum": "must be less than %{expected}",
    "divisibleBy": "must be divisible by %{expected}",
    "minItems": "must contain more than %{expected} items",
    "maxItems": "must contain less than %{expected} items",
    "uniqueItems": "must hold a unique set of values",
    "format": "is not a valid %{expected}",
    "conform": "must conform to given constraint",
    "type": "must be of %{expected} type",
    "enum": "must be present in given enumerator",
}

FALLBACK_MESSAGE = "no default message"


class Registry:
    """
    Tables of formats, extension formats, filters and message templates.

    Attributes:
        formats: Core format table
        format_extensions: Extension format table
        filters: Filter table (empty by default)
        messages: Default message templates keyed by attribute
    """

    def __init__(
        self,
        formats: Optional[Dict[str, FormatSpec]] = None,
        format_extensions: Optional[Dict[str, FormatSpec]] = None,
        filters: Optional[Dict[str, FilterFunc]] = None,
        messages: Optional[Dict[str, str]] = None,
    ):
        self.formats: Dict[str, FormatSpec] = dict(CORE_FORMATS if formats is None else formats)
        self.format_extensions: Dict[str, FormatSpec] = dict(
            FORMAT_EXTENSIONS if format_extensions is None else format_extensions
        )
        self.filters: Dict[str, FilterFunc] = dict(filters or {})
        self.messages: Dict[str, str] = dict(DEFAULT_MESSAGES if messages is None else messages)

    def register_format(self, name: str, spec: Optional[FormatSpec] = None, extension: bool = False):
        """
        Add or override a format.

        Usable directly (``register_format("zip", re.compile(...))``) or as a
        decorator on a predicate.
        """
        def _register(value: FormatSpec) -> FormatSpec:
            table = self.format_extensions if extension else self.formats
            table[name] = value
            logger.debug("Registered %sformat %r", "extension " if extension else "", name)
            return value

        if spec is None:
            return _register
        _register(spec)
        return None

    def register_filter(self, name: str, func: Optional[FilterFunc] = None):
        """Add or override a filter. Usable directly or as a decorator."""
        def _register(value: FilterFunc) -> FilterFunc:
            self.filters[name] = value
            logger.debug("Registered filter %r", name)
            return value

        if func is None:
            return _register
        _register(func)
        return None

    def resolve_format(self, name: str, use_extensions: bool = True) -> Optional[FormatSpec]:
        """Look up a format, extensions first when enabled. Returns None on a miss."""
        spec = None
        if use_extensions:
            spec = self.format_extensions.get(name)
        if spec is None:
            spec = self.formats.get(name)
        return spec

    def resolve_filter(self, name: str) -> Optional[FilterFunc]:
        return self.filters.get(name)

    def message_for(self, attribute: str) -> str:
        return self.messages.get(attribute) or FALLBACK_MESSAGE

    def copy(self) -> "Registry":
        """Independent registry with the same entries."""
        return Registry(
            formats=self.formats,
            format_extensions=self.format_extensions,
            filters=self.filters,
            messages=self.messages,
        )

    def __repr__(self) -> str:
        return (
            f"Registry(formats={len(self.formats)}, "
            f"format_extensions={len(self.format_extensions)}, "
            f"filters={len(self.filters)})"
        )


default_registry = Registry()

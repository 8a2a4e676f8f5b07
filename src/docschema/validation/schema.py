"""
Schema model for document validation.

Defines the recursive structure the engine walks:
- Attribute: closed enumeration of constraint kinds
- Schema: typed wrapper over a schema mapping

A schema is written as a plain mapping (from Python, JSON or YAML):

    properties:
      title:
        type: string
        maxLength: 140
        required: true
      tags:
        type: array
        uniqueItems: true
        items:
          type: string
    patternProperties:
      "^_":
        type: boolean
    additionalProperties: false

``Schema`` keeps that mapping in ``raw`` (unknown keys such as
``conditions`` are preserved untouched) and wraps every nested schema.
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Pattern, Union

from ..exceptions import SchemaError


class _Missing:
    """Marker for an absent property (distinct from a present ``None``)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class Attribute(str, Enum):
    """Every constraint kind a violation can be reported against."""

    TYPE = "type"
    REQUIRED = "required"
    ENUM = "enum"
    DEPENDENCIES = "dependencies"
    CONFORM = "conform"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"
    FORMAT = "format"
    MINIMUM = "minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MINIMUM = "exclusiveMinimum"
    EXCLUSIVE_MAXIMUM = "exclusiveMaximum"
    DIVISIBLE_BY = "divisibleBy"
    ITEMS = "items"
    MIN_ITEMS = "minItems"
    MAX_ITEMS = "maxItems"
    UNIQUE_ITEMS = "uniqueItems"
    ADDITIONAL_PROPERTIES = "additionalProperties"
    FILTER = "filter"


RequiredSpec = Union[bool, Callable[[Any, str], bool]]


def _wrap(value: Any, key: str) -> "Schema":
    if isinstance(value, Schema):
        return value
    if isinstance(value, Mapping):
        return Schema(value)
    raise SchemaError(f"Invalid '{key}' entry: expected a schema mapping, got {type(value).__name__}")


def _wrap_map(value: Any, key: str) -> Dict[str, "Schema"]:
    if not isinstance(value, Mapping):
        raise SchemaError(f"Invalid '{key}': expected a mapping, got {type(value).__name__}")
    return {name: _wrap(sub, f"{key}.{name}") for name, sub in value.items()}


class Schema:
    """
    Typed view of one schema level.

    Attributes:
        raw: The original mapping
        types: Candidate type names, lowercased and trimmed (None = undeclared)
        properties: Named sub-schemas, in declaration order
        pattern_properties: Regex source -> sub-schema
        additional_properties: True/False, a Schema, or None when undeclared
        items: Sub-schema applied to every array element
        dependencies: Property name, list of names, or a Schema
        required: Bool or predicate(document, property)
        default: Default value, or MISSING
    """

    def __init__(self, definition: Optional[Mapping] = None):
        if definition is None:
            definition = {}
        if isinstance(definition, Schema):
            definition = definition.raw
        if not isinstance(definition, Mapping):
            raise SchemaError(f"Schema must be a mapping, got {type(definition).__name__}")

        self.raw = definition

        declared = definition.get("type")
        if declared is None:
            self.types: Optional[List[str]] = None
        elif isinstance(declared, str):
            self.types = [declared.strip().lower()]
        elif isinstance(declared, (list, tuple)):
            self.types = [str(t).strip().lower() for t in declared]
        else:
            raise SchemaError(f"Invalid 'type': expected a name or list of names, got {declared!r}")

        self.properties: Optional[Dict[str, Schema]] = None
        if "properties" in definition:
            self.properties = _wrap_map(definition["properties"], "properties")

        self.pattern_properties: Optional[Dict[str, Schema]] = None
        if "patternProperties" in definition:
            self.pattern_properties = _wrap_map(definition["patternProperties"], "patternProperties")

        self.additional_properties: Union[bool, Schema, None] = None
        if "additionalProperties" in definition:
            extra = definition["additionalProperties"]
            self.additional_properties = extra if isinstance(extra, bool) else _wrap(extra, "additionalProperties")

        self.items: Optional[Schema] = None
        if "items" in definition:
            self.items = _wrap(definition["items"], "items")

        self.dependencies: Union[str, List[str], Schema, None] = None
        if "dependencies" in definition:
            deps = definition["dependencies"]
            if isinstance(deps, str):
                self.dependencies = deps
            elif isinstance(deps, (list, tuple)):
                self.dependencies = list(deps)
            else:
                self.dependencies = _wrap(deps, "dependencies")

        enum = definition.get("enum")
        if enum is not None and not isinstance(enum, (list, tuple)):
            raise SchemaError(f"Invalid 'enum': expected a list of values, got {enum!r}")

        self.required: RequiredSpec = definition.get("required", False)
        self.default: Any = definition.get("default", MISSING)
        self.messages: Dict[str, str] = definition.get("messages") or {}
        self.message: Optional[str] = definition.get("message")

    @classmethod
    def coerce(cls, value: Union["Schema", Mapping, None]) -> "Schema":
        """Return ``value`` if it is already a Schema, otherwise wrap it."""
        if isinstance(value, Schema):
            return value
        return cls(value)

    def __contains__(self, key: str) -> bool:
        return key in self.raw

    def get(self, key: str, default: Any = None) -> Any:
        """Raw value of a constraint (used as ``expected`` in error records)."""
        return self.raw.get(key, default)

    @property
    def is_empty(self) -> bool:
        return not self.raw

    @property
    def declares_object(self) -> bool:
        """True when the schema describes the members of an object value."""
        return (
            self.properties is not None
            or self.pattern_properties is not None
            or self.additional_properties is not None
        )

    @property
    def pattern(self) -> Optional[Pattern]:
        value = self.raw.get("pattern")
        if value is None or isinstance(value, re.Pattern):
            return value
        return re.compile(value)

    def is_required(self, document: Any, prop: str) -> bool:
        """Evaluate ``required``, calling it when it is a predicate."""
        required = self.required
        if callable(required):
            required = required(document, prop)
        return bool(required)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-mapping copy of the schema."""
        return dict(self.raw)

    def __repr__(self) -> str:
        attrs = []
        if self.types is not None:
            attrs.append(f"type={self.get('type')!r}")
        if self.properties is not None:
            attrs.append(f"properties={list(self.properties)}")
        if self.required:
            attrs.append("required=True")
        return f"Schema({', '.join(attrs)})"

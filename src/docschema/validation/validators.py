"""
Validation engine.

Implements the recursive walk of a document against a schema:
- Schema walker: properties, patternProperties, additionalProperties
- Constraint engine: defaults, required, coercion, enum, dependencies,
  type resolution, conform, per-type constraints, filtering
- Error reporting with optional early exit

All violations are appended to one ordered list owned by the Validator.
With ``cast_source``, ``apply_default_value`` or ``filter`` in play the
document is modified in place.
"""

import copy
import json
import logging
import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from fractions import Fraction
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..exceptions import ValidatorError
from ..formats import check_format
from ..registry import Registry, default_registry
from ..settings import ValidationOptions, resolve_options
from .coercion import cast_value, differs
from .errors import ValidationError, ValidationResult
from .messages import format_message, resolve_template, signal_message
from .schema import MISSING, Attribute, Schema

logger = logging.getLogger(__name__)

_UNSET = object()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


TYPE_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "string": lambda v: isinstance(v, str),
    "number": _is_number,
    "integer": _is_integer,
    "array": lambda v: isinstance(v, (list, tuple)),
    "object": lambda v: isinstance(v, Mapping),
    "boolean": lambda v: isinstance(v, bool),
    "null": lambda v: v is None,
    "date": lambda v: isinstance(v, (date, datetime)),
    "any": lambda v: v is not MISSING,
}


def infer_type(value: Any) -> Optional[str]:
    """Type name whose constraints apply to an untyped value."""
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return None


def describe_type(value: Any) -> str:
    """Type name reported as ``actual`` for type violations."""
    if value is None:
        return "null"
    if isinstance(value, (date, datetime)):
        return "date"
    return infer_type(value) or type(value).__name__


def resolve_type(value: Any, types: Optional[List[str]]) -> Tuple[bool, Optional[str]]:
    """
    Match ``value`` against candidate type names in order.

    Returns (matched, type_name). An undeclared type always matches with
    type_name None.
    """
    if types is None:
        return True, None
    for name in types:
        check = TYPE_CHECKS.get(name)
        if check is not None and check(value):
            return True, name
    return False, None


def _decimal_places(number: Union[int, float]) -> int:
    if isinstance(number, int):
        return 0
    exponent = Decimal(repr(number)).as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def _is_finite(number: Union[int, float]) -> bool:
    # ints of any size are finite; math.isfinite overflows past float range
    return not isinstance(number, float) or math.isfinite(number)


def _exact(number: Union[int, float]) -> Fraction:
    if isinstance(number, int):
        return Fraction(number)
    return Fraction(repr(number))


def divisible_by(value: Union[int, float], divisor: Union[int, float]) -> bool:
    """
    Modulo test on decimal-scaled operands.

    Both operands are scaled by 10 ** (larger fractional digit count) so
    that 0.2 is divisible by 0.01 despite binary float representation.
    """
    if divisor == 0 or not all(_is_finite(n) for n in (value, divisor)):
        return False
    scale = 10 ** max(_decimal_places(value), _decimal_places(divisor))
    scaled_value = _exact(value) * scale
    scaled_divisor = _exact(divisor) * scale
    return scaled_value % scaled_divisor == 0


def _canonical(item: Any) -> str:
    try:
        return json.dumps(item, sort_keys=True, default=repr)
    except TypeError:
        # Mappings with keys of mixed types cannot be sorted
        return repr(item)


def all_unique(items: Any) -> bool:
    """True when no two items share a canonical serialization."""
    seen = set()
    for item in items:
        key = _canonical(item)
        if key in seen:
            return False
        seen.add(key)
    return True


def _in_enum(value: Any, allowed: Any) -> bool:
    return any(
        candidate == value and isinstance(candidate, bool) == isinstance(value, bool)
        for candidate in allowed
    )


def _lookup(document: Any, key: str) -> Any:
    if isinstance(document, Mapping):
        return document.get(key, MISSING)
    return MISSING


# (attribute, check(actual, bound)) pairs evaluated independently
_LENGTH_CHECKS = (
    (Attribute.MIN_LENGTH, lambda length, bound: length >= bound),
    (Attribute.MAX_LENGTH, lambda length, bound: length <= bound),
)

_NUMERIC_CHECKS = (
    (Attribute.MINIMUM, lambda value, bound: value >= bound),
    (Attribute.MAXIMUM, lambda value, bound: value <= bound),
    (Attribute.EXCLUSIVE_MINIMUM, lambda value, bound: value > bound),
    (Attribute.EXCLUSIVE_MAXIMUM, lambda value, bound: value < bound),
    (Attribute.DIVISIBLE_BY, divisible_by),
)

_ITEM_COUNT_CHECKS = (
    (Attribute.MIN_ITEMS, lambda items, bound: len(items) >= bound),
    (Attribute.MAX_ITEMS, lambda items, bound: len(items) <= bound),
    (Attribute.UNIQUE_ITEMS, lambda items, enabled: not enabled or all_unique(items)),
)

FILTER_UNKNOWN = "unknown filter: %{actual}"
FILTER_BAD_TYPE = "bad filter type: %{actual}"
FILTER_FAILED = "error during filtering: %{actual}"
FILTER_UNFILTERABLE = "bad property type for filtering: %{actual}"


class Validator:
    """
    One validation pass over a document.

    Attributes:
        options: Resolved options (private to this pass)
        registry: Formats, filters and message templates
        errors: Violations in discovery order
    """

    def __init__(self, options: ValidationOptions, registry: Optional[Registry] = None):
        self.options = options
        self.registry = registry or default_registry
        self.errors: List[ValidationError] = []

    def validate_object(self, document: Any, schema: Schema, allow_additional: bool = False) -> None:
        """
        Walk one document level: properties, patterns, then the rest.

        ``allow_additional`` accepts unmatched keys at this level regardless of
        the schema and options.
        """
        keys = list(document.keys()) if isinstance(document, Mapping) else []
        visited = set()

        if schema.properties is not None:
            for prop, sub_schema in schema.properties.items():
                visited.add(prop)
                self.validate_property(document, _lookup(document, prop), prop, sub_schema)

        if schema.pattern_properties is not None:
            for source, sub_schema in schema.pattern_properties.items():
                regex = re.compile(source)
                for key in keys:
                    if regex.search(str(key)) is not None:
                        visited.add(key)
                        self.validate_property(document, _lookup(document, key), key, sub_schema)

        policy = True if allow_additional else schema.additional_properties
        if policy is None:
            policy = self.options.additional_properties
        if policy is True:
            return

        for key in keys:
            if key in visited:
                continue
            if policy is False:
                self.report(
                    Attribute.ADDITIONAL_PROPERTIES, key, document[key], schema, expected=False
                )
            else:
                self.validate_property(document, _lookup(document, key), key, policy)

    def validate_property(
        self,
        document: Any,
        value: Any,
        prop: str,
        schema: Schema,
        index: Optional[int] = None,
        array: Optional[List[Any]] = None,
        check_default: bool = True,
    ) -> None:
        """
        Check one value against its schema.

        Args:
            document: Mapping that owns the property
            value: Current value, or MISSING when absent
            prop: Property name (array elements report their array's name)
            schema: Schema for the value
            index: Position of the value when it is an array element
            array: The array holding the value when it is an element
            check_default: Whether to validate ``schema.default`` first
        """
        options = self.options

        if check_default and options.validate_default_value and schema.default is not MISSING:
            holder = {"default": copy.deepcopy(schema.default)}
            self.validate_property(holder, holder["default"], "default", schema, check_default=False)

        if value is MISSING:
            if options.apply_default_value and schema.default is not MISSING:
                document[prop] = copy.deepcopy(schema.default)
            elif schema.is_required(document, prop) and schema.types != ["any"]:
                self.report(Attribute.REQUIRED, prop, None, schema)
            return

        if options.cast:
            value = self._cast(document, value, prop, schema, index, array)

        if schema.get("enum") is not None and not _in_enum(value, schema.get("enum")):
            self.report(Attribute.ENUM, prop, value, schema)

        self._check_dependencies(document, prop, schema)

        matched, type_name = resolve_type(value, schema.types)
        if not matched:
            self.report(Attribute.TYPE, prop, describe_type(value), schema)
            return

        effective_type = type_name or infer_type(value)
        errors_before = len(self.errors)

        conform = schema.get("conform")
        if conform is not None and not self._conforms(conform, value, document, prop):
            self.report(Attribute.CONFORM, prop, value, schema)

        if effective_type == "string":
            self._check_string(value, prop, schema)
        elif effective_type in ("number", "integer"):
            self._constrain_all(_NUMERIC_CHECKS, value, prop, schema)
        elif effective_type == "array":
            if schema.items is not None:
                for position, item in enumerate(value):
                    self.validate_property(document, item, prop, schema.items, position, value)
            self._constrain_all(_ITEM_COUNT_CHECKS, value, prop, schema)
        elif effective_type == "object":
            if schema.declares_object:
                self.validate_object(value, schema)

        if "filter" in schema and len(self.errors) == errors_before:
            self._apply_filters(document, prop, schema, effective_type, index, array)

    def report(
        self,
        attribute: Attribute,
        prop: str,
        actual: Any,
        schema: Schema,
        message: Optional[str] = None,
        expected: Any = _UNSET,
    ) -> None:
        """
        Record a violation; raise the early-exit signal when enabled.

        Args:
            attribute: Constraint kind that failed
            prop: Property name
            actual: Offending value
            schema: Schema that declared the constraint
            message: Template overriding schema and registry messages
            expected: Overrides ``schema[attribute]`` as the expected value
        """
        name = attribute.value
        if expected is _UNSET:
            expected = schema.get(name)
        template = resolve_template(name, schema, self.registry.message_for(name), message)
        text = format_message(
            template,
            {"expected": expected, "attribute": name, "property": prop, "actual": actual},
        )
        error = ValidationError(
            attribute=name, property=prop, expected=expected, actual=actual, message=text
        )
        self.errors.append(error)

        if self.options.stops_on_first_error:
            logger.debug("Stopping at first error: %s on %r", name, prop)
            raise ValidatorError(signal_message(name, prop, expected, actual, text), info=error)

    def _cast(self, document, value, prop, schema, index, array):
        target = schema.types[0] if schema.types is not None and len(schema.types) == 1 else None
        cast = cast_value(value, target)
        if self.options.cast_source:
            stored = array[index] if index is not None else document.get(prop, MISSING)
            if differs(stored, cast):
                if index is not None:
                    array[index] = cast
                else:
                    document[prop] = cast
        return cast

    def _check_dependencies(self, document: Any, prop: str, schema: Schema) -> None:
        dependencies = schema.dependencies
        if dependencies is None:
            return

        if isinstance(dependencies, Schema):
            # a dependency schema describes only part of the document
            self.validate_object(document, dependencies, allow_additional=True)
            return

        names = [dependencies] if isinstance(dependencies, str) else dependencies
        for name in names:
            if _lookup(document, name) is MISSING:
                self.report(Attribute.DEPENDENCIES, prop, None, schema)

    def _conforms(self, predicate: Callable, value: Any, document: Any, prop: str) -> bool:
        try:
            return bool(predicate(value, document, prop))
        except ValidatorError:
            raise
        except Exception as e:
            logger.debug("conform predicate for %r raised %s: %s", prop, type(e).__name__, e)
            return False

    def _constrain_all(self, checks, actual: Any, prop: str, schema: Schema) -> None:
        for attribute, check in checks:
            bound = schema.get(attribute.value)
            if bound is not None and not check(actual, bound):
                self.report(attribute, prop, actual, schema)

    def _check_string(self, value: str, prop: str, schema: Schema) -> None:
        self._constrain_all(_LENGTH_CHECKS, len(value), prop, schema)

        pattern = schema.pattern
        if pattern is not None and pattern.search(value) is None:
            self.report(Attribute.PATTERN, prop, value, schema)

        options = self.options
        format_name = schema.get("format")
        if not options.validate_formats or format_name is None:
            return
        spec = self.registry.resolve_format(format_name, options.validate_format_extensions)
        if spec is None:
            if options.validate_formats_strict:
                self.report(Attribute.FORMAT, prop, value, schema)
        elif not check_format(spec, value):
            self.report(Attribute.FORMAT, prop, value, schema)

    def _apply_filters(self, document, prop, schema, type_name, index, array) -> None:
        if type_name in ("array", "object"):
            self.report(Attribute.FILTER, prop, type_name, schema, message=FILTER_UNFILTERABLE)
            return

        declared = schema.get("filter")
        filters = declared if isinstance(declared, (list, tuple)) else [declared]

        for entry in filters:
            if isinstance(entry, str):
                func = self.registry.resolve_filter(entry)
                if func is None:
                    logger.warning("Unknown filter %r on property %r", entry, prop)
                    self.report(Attribute.FILTER, prop, entry, schema, message=FILTER_UNKNOWN)
                    return
            elif callable(entry):
                func = entry
            else:
                self.report(
                    Attribute.FILTER, prop, type(entry).__name__, schema, message=FILTER_BAD_TYPE
                )
                return

            try:
                if index is None:
                    document[prop] = func(document[prop])
                else:
                    array[index] = func(array[index])
            except Exception as e:
                self.report(
                    Attribute.FILTER, prop, f"{type(e).__name__}: {e}", schema, message=FILTER_FAILED
                )
                return


def validate(
    document: Any,
    schema: Union[Schema, Mapping, None] = None,
    options: Union[ValidationOptions, Mapping, None] = None,
    registry: Optional[Registry] = None,
    **overrides: Any,
) -> ValidationResult:
    """
    Validate a document against a schema.

    Returns a result listing every violation. Never raises for invalid data
    unless ``fail_on_first_error`` is set, in which case the first violation
    raises ValidatorError.

    Args:
        document: Data to validate (usually a dict)
        schema: Schema mapping or Schema instance; empty or None always passes
        options: ValidationOptions or mapping (snake_case or camelCase keys)
        registry: Formats/filters/messages to use (defaults to default_registry)
        **overrides: Individual options, e.g. ``cast=True``

    Returns:
        ValidationResult

    Raises:
        ValidatorError: On the first violation when fail_on_first_error is set
        SchemaError: If the schema cannot be interpreted
        re.error: If a pattern in the schema is malformed

    Example:
        >>> result = validate({"answer": "42"},
        ...                   {"properties": {"answer": {"type": "integer"}}},
        ...                   cast=True)
        >>> result.valid
        True
    """
    resolved = resolve_options(options, **overrides)
    validator = Validator(resolved, registry)
    logger.debug("Validating %s document", type(document).__name__)

    try:
        validator.validate_object(document, Schema.coerce(schema))
    except ValidatorError as err:
        if resolved.fail_on_first_error:
            raise
        logger.debug("Validation stopped early: %s", err.message)

    logger.debug("Validation finished with %d error(s)", len(validator.errors))
    return ValidationResult(errors=validator.errors)

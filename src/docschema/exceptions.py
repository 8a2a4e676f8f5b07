"""
Core Exception Classes for docschema.

This module provides the exceptions the validation engine manufactures.
They live here (rather than in the validation package) so that the
registry, settings and loader modules can use them without importing
the engine.

ValidatorError is a control-flow signal, not a data error: accumulated
violations are returned in ``ValidationResult.errors``. The signal is only
raised when the caller opts into ``exit_on_first_error`` or
``fail_on_first_error``; it unwinds the whole recursive walk and is caught
by ``validate()``.
"""

from typing import Any, Dict, Optional


class ValidatorError(Exception):
    """
    Signal raised on the first violation when early exit is enabled.

    Under ``exit_on_first_error`` alone ``validate()`` swallows the signal
    and returns the single-element result. Under ``fail_on_first_error``
    it propagates to the caller of ``validate()``.

    Attributes:
        message: Human-readable, attribute-specific description.
        info: The ValidationError record that triggered the signal.

    Example:
        >>> try:
        ...     validate({"field": 43}, {"properties": {"field": {"minimum": 473}}},
        ...              fail_on_first_error=True)
        ... except ValidatorError as err:
        ...     print(err.message)
        Property "field" must be greater than or equal to 473
    """

    def __init__(self, message: str, info: Optional[Any] = None):
        self.message = message
        self.info = info
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {"message": self.message}
        if self.info is not None:
            result["info"] = self.info.to_dict()
        return result


class SchemaError(ValueError):
    """Raised when a schema mapping cannot be interpreted."""

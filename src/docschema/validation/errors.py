"""
Validation result types.

Provides the structured outcome of a validation pass:
- ValidationError: one violation, in discovery order
- ValidationResult: verdict plus the ordered list of violations

ValidationError is a record, not an exception. The only exception the
engine raises on its own is the early-exit signal
(``docschema.exceptions.ValidatorError``).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ValidationError:
    """
    Details about a single violation.

    Attributes:
        attribute: Constraint kind that failed (required, type, minLength, ...)
        property: Name of the property that failed
        expected: The constraint value declared in the schema
        actual: The offending value (or a derived measure, e.g. a length)
        message: Human-readable message after placeholder substitution
    """

    attribute: str
    property: str
    expected: Any
    actual: Any
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "attribute": self.attribute,
            "property": self.property,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return (
            f"ValidationError(attribute={self.attribute!r}, property={self.property!r}, "
            f"message={self.message!r})"
        )


@dataclass
class ValidationResult:
    """
    Outcome of ``validate()``.

    ``valid`` is derived from ``errors`` and is True exactly when no
    violation was recorded.
    """

    errors: List[ValidationError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }

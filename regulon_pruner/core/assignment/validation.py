"""
Validation errors with actionable diagnostics for regulon assignment.

Every error raised by the assignment and signature modules derives from
RegulonError and carries a machine-readable code, what was expected, what
was found, and a suggestion for fixing the input.

Error Codes:
    E001_EMPTY_INPUT: Regulatory table has zero rows
    E002_UNSUPPORTED_STRATEGY: Strategy token is not A, B or C
    E003_INVALID_PARAMETER: Threshold or cap value is out of range
    E004_INVALID_TABLE: Regulatory table violates its schema
"""

from __future__ import annotations

import math
import numbers
from difflib import get_close_matches
from typing import Any, Dict, Iterable, List, Optional


class RegulonError(Exception):
    """Base class for regulon assignment errors.

    Parameters
    ----------
    message : str
        Human-readable error description
    expected : Any
        What the validator expected to find
    found : Any
        What was actually found
    suggestion : str
        Actionable suggestion for fixing the error
    context : Dict[str, Any], optional
        Additional context for debugging
    """

    error_code = "E000_UNKNOWN"

    def __init__(
        self,
        message: str,
        *,
        expected: Any = None,
        found: Any = None,
        suggestion: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.expected = expected
        self.found = found
        self.suggestion = suggestion
        self.context = context or {}

    def __str__(self) -> str:
        """Format error as human-readable multi-line string."""
        parts = [f"[{self.error_code}] {self.message}"]
        if self.expected is not None:
            parts.append(f"  Expected: {self.expected}")
        if self.found is not None:
            parts.append(f"  Found: {self.found}")
        if self.suggestion:
            parts.append(f"  Suggestion: {self.suggestion}")
        return "\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "expected": str(self.expected) if self.expected is not None else None,
            "found": str(self.found) if self.found is not None else None,
            "suggestion": self.suggestion,
            "context": self.context,
        }


class EmptyInputError(RegulonError):
    """Raised when the regulatory table has no edges."""

    error_code = "E001_EMPTY_INPUT"


class UnsupportedStrategyError(RegulonError):
    """Raised for an unknown strategy token."""

    error_code = "E002_UNSUPPORTED_STRATEGY"


class InvalidParameterError(RegulonError, ValueError):
    """Raised for a bad threshold, cap or selector value.

    The offending parameter name is available as ``parameter``.
    """

    error_code = "E003_INVALID_PARAMETER"

    def __init__(self, parameter: str, message: str, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.parameter = parameter
        self.context.setdefault("parameter", parameter)


class InvalidTableError(RegulonError, ValueError):
    """Raised when a regulatory table violates its schema."""

    error_code = "E004_INVALID_TABLE"


def missing_columns_error(
    missing: List[str],
    available_columns: Iterable[str],
) -> InvalidTableError:
    """Build an InvalidTableError for missing columns with close-match hints."""
    available = [str(c) for c in available_columns]
    # Match case-insensitively ("TF" vs "tf")
    by_lower = {c.lower(): c for c in available}
    hints = []
    for column in missing:
        matches = get_close_matches(column.lower(), list(by_lower), n=3, cutoff=0.4)
        if matches:
            names = ", ".join(by_lower[m] for m in matches)
            hints.append(f"'{column}' -> did you mean: {names}?")
    return InvalidTableError(
        f"Regulatory table missing columns: {missing}",
        expected=missing,
        found=available,
        suggestion=" ".join(hints),
    )


def require_finite_real(name: str, value: Any) -> float:
    """Return value as float, or raise if it is not a finite real number.

    Booleans are rejected even though they are numbers.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            name,
            f"{name} must be a finite real number",
            expected="finite real",
            found=repr(value),
        )
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(
            name,
            f"{name} must be a finite real number",
            expected="finite real",
            found=repr(value),
            suggestion=f"Pass an explicit numeric {name}; NaN and infinity are not accepted.",
        )
    return value


def require_positive_int(name: str, value: Any) -> int:
    """Return value as int, or raise if it is not a positive integer."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            name,
            f"{name} must be a positive integer",
            expected="integer >= 1",
            found=repr(value),
        )
    if value < 1:
        raise InvalidParameterError(
            name,
            f"{name} must be a positive integer",
            expected="integer >= 1",
            found=repr(value),
        )
    return int(value)

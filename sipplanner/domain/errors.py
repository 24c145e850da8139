"""Errors raised by the calculation modules."""

from __future__ import annotations

import math
from typing import Dict, List, Optional


class InputValidationError(ValueError):
    """A numeric input is missing or out of range.

    ``field`` names the offending input so the API layer can point the user
    at it. Inputs are never clamped to a default.
    """

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_detail(self) -> List[Dict[str, str]]:
        return [{"field": self.field, "message": self.message}]


def _require_number(field: str, value: Optional[float]) -> float:
    if value is None or isinstance(value, bool):
        raise InputValidationError(field, "is required")
    if not math.isfinite(value):
        raise InputValidationError(field, "must be a finite number")
    return float(value)


def require_positive(field: str, value: Optional[float]) -> float:
    number = _require_number(field, value)
    if number <= 0:
        raise InputValidationError(field, "must be a positive number")
    return number


def require_non_negative(field: str, value: Optional[float]) -> float:
    number = _require_number(field, value)
    if number < 0:
        raise InputValidationError(field, "must not be negative")
    return number


def ensure_finite(field: str, result: float) -> float:
    """Reject a computed value that overflowed, blaming the input that drove it."""
    if not math.isfinite(result):
        raise InputValidationError(field, "is too large to compute a finite result")
    return result

"""Input validation helpers; the validate_* checks return an error message or ``None``."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional

from ..core.errors import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: Any) -> bool:
    return isinstance(email, str) and bool(_EMAIL_RE.match(email))


def validate_required(value: Any, field_name: str) -> Optional[str]:
    if value is None or value == "" or (isinstance(value, str) and not value.strip()):
        return f"{field_name} is required"
    return None


def validate_length(value: str, min_len: int, max_len: int, field_name: str) -> Optional[str]:
    if len(value) < min_len:
        return f"{field_name} must be at least {min_len} characters"
    if len(value) > max_len:
        return f"{field_name} must be at most {max_len} characters"
    return None


def coerce_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` when it is not numeric."""

    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def validate_number(
    value: Any,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    field_name: str = "Value",
) -> Optional[str]:
    number = coerce_number(value)
    if number is None:
        return f"{field_name} must be a number"
    if min_value is not None and number < min_value:
        return f"{field_name} must be at least {min_value:g}"
    if max_value is not None and number > max_value:
        return f"{field_name} must be at most {max_value:g}"
    return None


def optional_text(payload: Mapping[str, Any], field: str, label: str) -> Optional[str]:
    """Trimmed string value of an optional field; ``None`` when absent or blank."""

    value = payload.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    return value.strip() or None


def parse_int(raw: Optional[str], default: int) -> int:
    """Lenient integer parsing for query strings; falls back to ``default``."""

    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def parse_bool(raw: Optional[str]) -> Optional[bool]:
    if raw is None:
        return None
    return raw.strip().lower() == "true"


__all__ = [
    "coerce_number",
    "optional_text",
    "parse_bool",
    "parse_int",
    "validate_email",
    "validate_length",
    "validate_number",
    "validate_required",
]

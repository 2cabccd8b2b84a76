# devicehub/core/validation.py
"""
Per-field constraint checks shared by all repositories.

Every rule takes a raw value and returns the normalized value or
raises ValidationError(field, reason). No I/O.
"""
import math
import re
from datetime import datetime, timezone
from typing import Any

from devicehub.core.errors import ValidationError

PLAN_TYPES = ("basic", "premium", "enterprise")
DEFAULT_PLAN_TYPE = "basic"

DEFAULT_LIMIT = 50
MAX_LIMIT = 100

# Largest key a signed 64-bit integer column can hold
MAX_ID = 2**63 - 1

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
# digits, "+", "-", parentheses and whitespace
_PHONE_RE = re.compile(r"^[0-9+\-()\s]+$")


def required_string(value: Any, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(field, "required")
    if len(value) > max_length:
        raise ValidationError(field, f"too long (max {max_length})")
    return value


def optional_string(value: Any, field: str, max_length: int) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    if len(value) > max_length:
        raise ValidationError(field, f"too long (max {max_length})")
    return value


def matches(value: str, field: str, pattern: re.Pattern, reason: str) -> str:
    if not pattern.match(value):
        raise ValidationError(field, reason)
    return value


def positive_int(value: Any, field: str) -> int:
    """Accept ints, integral floats and digit strings; reject bools and <= 0."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(field, "must be a positive integer")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValidationError(field, "must be a positive integer")
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(field, "must be a positive integer")
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(field, "must be a positive integer")
    return value


def in_id_range(value: int) -> bool:
    """Ids above MAX_ID cannot exist in the store."""
    return value <= MAX_ID


# ----- Entity fields -----


def role_name(value: Any) -> str:
    return required_string(value, "role_name", 50)


def subscriber_name(value: Any) -> str:
    return required_string(value, "name", 255)


def address(value: Any) -> str:
    return required_string(value, "address", 300)


def phone_number(value: Any) -> str:
    value = required_string(value, "phone_number", 12)
    return matches(value, "phone_number", _PHONE_RE, "contains invalid characters")


def plan_type(value: Any) -> str:
    """Omitted plan falls back to the default; anything else must be in PLAN_TYPES."""
    if value is None:
        return DEFAULT_PLAN_TYPE
    if value not in PLAN_TYPES:
        raise ValidationError("plan_type", f"must be one of {', '.join(PLAN_TYPES)}")
    return value


def email(value: Any) -> str:
    value = required_string(value, "email", 255)
    return matches(value, "email", _EMAIL_RE, "is not a valid email")


def username(value: Any) -> str:
    return required_string(value, "username", 100)


def password_hash(value: Any) -> str | None:
    return optional_string(value, "password_hash", 255)


def mac_id(value: Any) -> str:
    return required_string(value, "mac_id", 100)


def model_name(value: Any) -> str | None:
    return optional_string(value, "model_name", 100)


def timestamp(value: Any, field: str) -> datetime | None:
    """
    Accept a datetime or an ISO-8601 string; None means "use the store default".
    Values without an offset are taken as UTC.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError(field, "must be an ISO-8601 timestamp")
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise ValidationError(field, "must be an ISO-8601 timestamp")
    if value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ----- Pagination -----


def clamp_limit(limit: Any) -> int:
    """Bound page size to [1, MAX_LIMIT]; missing or unparsable -> DEFAULT_LIMIT."""
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


def clamp_offset(offset: Any) -> int:
    try:
        offset = int(offset)
    except (TypeError, ValueError):
        return 0
    return max(0, offset)

"""
Field checks shared by the managers. Each raises ValidationError with a
message naming the offending field.
"""

import math
from datetime import datetime, timezone

from backoffice.buisness.core.errors import ValidationError


def is_number(value) -> bool:
    # bool is an int subclass; JSON true/false is not a quantity,
    # and neither is the NaN or Infinity the JSON parser accepts.
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    return math.isfinite(value)


def require_text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field}' is required and must be a non-empty string")
    return value.strip()


def optional_text(value, field):
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{field}' must be a string")
    return value


def require_number(value, field, *, positive=False, non_negative=False):
    if not is_number(value):
        raise ValidationError(f"'{field}' must be a number")
    if positive and value <= 0:
        raise ValidationError(f"'{field}' must be greater than 0")
    if non_negative and value < 0:
        raise ValidationError(f"'{field}' must not be negative")
    return float(value)


def optional_number(value, field, *, default=None, non_negative=False):
    if value is None:
        return default
    return require_number(value, field, non_negative=non_negative)


def optional_bool(value, field):
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"'{field}' must be a boolean")
    return value


def parse_timestamp(value, field):
    """
    Accept a datetime or an ISO-8601 string (a trailing 'Z' is allowed).

    Returns a naive UTC datetime.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"'{field}' is not a valid date: {value!r}")
    else:
        raise ValidationError(f"'{field}' is required and must be a date string")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_quantity_items(items, field, *, allow_empty=False):
    """
    Validate a list of {product_code, quantity > 0} entries.

    Returns a list of (product_code, quantity) tuples in input order.
    """
    if not isinstance(items, list):
        raise ValidationError(f"'{field}' must be an array")
    if not items and not allow_empty:
        raise ValidationError(f"'{field}' must contain at least one entry")

    parsed = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"Invalid {field} entry at position {index}: {item!r}")
        code = item.get('product_code')
        quantity = item.get('quantity')
        if not isinstance(code, str) or not code.strip():
            raise ValidationError(f"Invalid {field} entry at position {index}: product_code must be a non-empty string")
        if not is_number(quantity) or quantity <= 0:
            raise ValidationError(f"Invalid {field} entry at position {index}: quantity must be a number greater than 0")
        parsed.append((code.strip(), float(quantity)))
    return parsed

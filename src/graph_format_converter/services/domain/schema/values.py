#!/usr/bin/env python3
"""Conversion of attribute values between XML text and typed Python values."""

import math
from typing import Any

from ....models.models import AttributeType


def coerce_number(text: Any) -> Any:
    """Parse numeric text to int (integral literal) or float; unparsable values pass through."""
    if isinstance(text, bool) or not isinstance(text, str):
        return text

    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return text


def coerce_boolean(text: Any) -> Any:
    if isinstance(text, str):
        lowered = text.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return text


def coerce_to_type(text: Any, attribute_type: AttributeType | None) -> Any:
    """Recover a typed value from XML text using its declared attribute type."""
    if attribute_type is AttributeType.NUMBER:
        return coerce_number(text)
    if attribute_type is AttributeType.BOOLEAN:
        return coerce_boolean(text)
    return text


def to_text(value: Any) -> str:
    """Render a value as XML text. Booleans are written in lowercase, integral floats without a fraction."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)

#!/usr/bin/env python3
"""
Helpers for reading converter settings from environment variables.

Values are cleaned of surrounding whitespace and stray CR/LF characters so
that .env files edited on Windows behave like their Unix counterparts.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def getenv_clean(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get an environment variable with line endings and whitespace stripped.

    Args:
        key: Environment variable name
        default: Value returned when the variable is not set

    Returns:
        Cleaned value, or default if the variable is not set

    Example:
        >>> # .env file has: GRAPH_CONVERTER_DEFAULT_GRAPH_ID=movies\r\n
        >>> getenv_clean("GRAPH_CONVERTER_DEFAULT_GRAPH_ID", "graph")
        'movies'
    """
    raw_value = os.getenv(key, default)
    if raw_value is None:
        return None

    cleaned = raw_value.strip()
    if cleaned != raw_value:
        logger.warning(
            f"Environment variable {key} had trailing whitespace/line endings: "
            f"raw={raw_value!r}, cleaned={cleaned!r}"
        )
    return cleaned


def getenv_bool(key: str, default: bool = False) -> bool:
    """Get an environment variable as a boolean.

    "true", "1", "yes" and "on" are true; "false", "0", "no", "off" and the
    empty string are false. Anything else logs a warning and yields default.
    """
    raw_value = getenv_clean(key)
    if raw_value is None:
        return default

    lowered = raw_value.lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off", ""):
        return False

    logger.warning(f"Environment variable {key} has unexpected boolean value: {raw_value!r}. Using default: {default}")
    return default


def getenv_int(key: str, default: int) -> int:
    """Get an environment variable as an integer, falling back to default when unset or invalid."""
    raw_value = getenv_clean(key)
    if raw_value is None:
        return default

    try:
        return int(raw_value)
    except ValueError:
        logger.warning(f"Environment variable {key} is not a valid integer: {raw_value!r}. Using default: {default}")
        return default

#!/usr/bin/env python3
"""Color normalization shared by every importer and exporter.

JSON and Graphology carry a color as a single string, GEXF as a ``viz:color``
element with r/g/b attributes and GraphML as three ``r``/``g``/``b`` data
values. Everything is normalized to a webcolors ``IntegerRGB`` triple in the
canonical model and rendered back as ``rgb(r, g, b)`` for the JSON family.

Accepted inputs: ``#rgb`` / ``#rrggbb`` (with or without ``#``), CSS3 color
names plus ``rebeccapurple``, ``rgb()`` / ``rgba()`` strings with integer or
percent components, 3-sequences of numbers and mappings with ``r``/``g``/``b`` keys.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

import webcolors
from webcolors import IntegerRGB

from ....errors import ColorParseError

logger = logging.getLogger(__name__)

_BARE_HEX_RE = re.compile(r"^[0-9a-fA-F]{3}$|^[0-9a-fA-F]{6}$")
_RGB_FUNCTION_RE = re.compile(r"^rgba?\(\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s)]+)\s*(?:,\s*[^)]*)?\)$", re.IGNORECASE)

# CSS Color Level 4 names missing from the webcolors CSS3 table
_CSS4_NAMES = {"rebeccapurple": "#663399"}


def _channel(value: Any) -> int:
    """Convert a single channel to an int, rounding floats like CSS does."""
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a color channel")
    return int(round(float(value)))


def _parse_rgb_function(match: re.Match) -> IntegerRGB:
    components = match.groups()
    if all(component.endswith("%") for component in components):
        return webcolors.rgb_percent_to_rgb(webcolors.normalize_percent_triplet(components))
    if any(component.endswith("%") for component in components):
        raise ValueError("rgb() components must all be integers or all be percentages")
    return webcolors.normalize_integer_triplet(tuple(_channel(component) for component in components))


def _name_to_rgb(name: str) -> IntegerRGB:
    if name.lower() in _CSS4_NAMES:
        return webcolors.hex_to_rgb(_CSS4_NAMES[name.lower()])
    return webcolors.name_to_rgb(name)


def _parse_string(value: str) -> IntegerRGB:
    text = value.strip()

    match = _RGB_FUNCTION_RE.match(text)
    if match:
        return _parse_rgb_function(match)

    if text.startswith("#"):
        return webcolors.hex_to_rgb(text)

    if _BARE_HEX_RE.match(text):
        try:
            return _name_to_rgb(text)
        except ValueError:
            return webcolors.hex_to_rgb(f"#{text}")

    return _name_to_rgb(text)


def normalize(color: Any) -> IntegerRGB:
    """Normalize a color-like value to an RGB triple.

    Args:
        color: Hex/named/rgb() string, (r, g, b) sequence, mapping with r/g/b keys
            or an IntegerRGB

    Returns:
        IntegerRGB with every channel clipped to 0..255

    Raises:
        ColorParseError: If the value cannot be interpreted as a color
    """
    try:
        if isinstance(color, IntegerRGB):
            return webcolors.normalize_integer_triplet(color)
        if isinstance(color, str):
            return _parse_string(color)
        if isinstance(color, Mapping):
            return webcolors.normalize_integer_triplet(
                (_channel(color["r"]), _channel(color["g"]), _channel(color["b"]))
            )
        if isinstance(color, Sequence) and len(color) in (3, 4):
            return webcolors.normalize_integer_triplet(tuple(_channel(channel) for channel in color[:3]))
    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Failed to parse color {color!r}: {e}")
        raise ColorParseError(f"Invalid color: {color!r}") from e

    logger.error(f"Unsupported color value {color!r}")
    raise ColorParseError(f"Invalid color: {color!r}")


def from_channels(r: Any, g: Any, b: Any) -> IntegerRGB:
    """Compose a color from separate channel values (GEXF viz:color, GraphML r/g/b data)."""
    return normalize((r, g, b))


def to_rgb_string(color: Any) -> str:
    """Render a color as its canonical ``rgb(r, g, b)`` string."""
    rgb = normalize(color)
    return f"rgb({rgb.red}, {rgb.green}, {rgb.blue})"

#!/usr/bin/env python3
"""Exceptions raised by the graph format converters.

Only two failure kinds exist for a conversion call: the input text is not
well-formed XML (GraphParseError) or the parsed input does not have the shape
of a graph document (MalformedGraphError). Color parsing failures surface as
ColorParseError straight from the color normalizer.
"""


class GraphFormatError(Exception):
    """Base class for all converter errors."""
    pass


class GraphParseError(GraphFormatError):
    """Raised when an XML document cannot be parsed."""
    pass


class MalformedGraphError(GraphFormatError):
    """Raised when a parsed document is missing required graph structure."""

    def __init__(self, message: str = "An error has occurred while creating the graph, your file is malformed"):
        super().__init__(message)


class ColorParseError(GraphFormatError, ValueError):
    """Raised when a color value cannot be interpreted."""
    pass

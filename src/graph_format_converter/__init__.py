"""
Graph Format Converter

Converts graphs between generic JSON, Graphology, GEXF and GraphML through a
shared canonical model.
"""

from .converter import GraphFormatConverter
from .errors import ColorParseError, GraphFormatError, GraphParseError, MalformedGraphError

__all__ = [
    "GraphFormatConverter",
    "GraphFormatError",
    "GraphParseError",
    "MalformedGraphError",
    "ColorParseError",
]

#!/usr/bin/env python3
"""
Configuration settings for the graph format converters.

Every setting can be overridden through environment variables, which are read
once when this module is imported.
"""

import logging

from .env_utils import getenv_bool, getenv_clean, getenv_int

logger = logging.getLogger(__name__)


class ConverterConfig:
    """Converter configuration.

    XML_INDENT controls pretty-printing of GEXF/GraphML output (0 writes the
    document on a single line). DEFAULT_GRAPH_ID is used when a source format
    does not carry a graph identifier. SYNTHESIZE_KEYS toggles declaring
    free-form attributes that have no schema entry when exporting to XML.
    """

    XML_INDENT = max(getenv_int("GRAPH_CONVERTER_XML_INDENT", 2), 0)

    DEFAULT_GRAPH_ID = getenv_clean("GRAPH_CONVERTER_DEFAULT_GRAPH_ID", "graph") or "graph"

    LOG_LEVEL = (getenv_clean("GRAPH_CONVERTER_LOG_LEVEL", "INFO") or "INFO").upper()

    SYNTHESIZE_KEYS = getenv_bool("GRAPH_CONVERTER_SYNTHESIZE_KEYS", True)

    def indent_string(self) -> str:
        """Whitespace used for one level of XML indentation."""
        return " " * self.XML_INDENT


# Singleton instance
converter_config = ConverterConfig()

#!/usr/bin/env python3
"""XML parse/build helpers shared by the GEXF and GraphML converters.

Parsing goes through defusedxml (no DTD/entity expansion). Namespaces are
stripped when reading: the converters address elements and attributes by local
name only, so GEXF 1.2/1.3 and namespace-less documents read the same way.
"""

import logging
from collections.abc import Iterator

# Use defusedxml for secure XML parsing (prevents XXE attacks)
import defusedxml.ElementTree as DET
from defusedxml import DefusedXmlException

# Element type and serialization from the standard library
import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element

from ...core.config import converter_config
from ...errors import GraphParseError

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def parse_xml(xml_text: str | bytes) -> Element:
    """Parse an XML document and return its root element.

    Raises:
        GraphParseError: If the text is not well-formed or uses forbidden constructs
    """
    try:
        return DET.fromstring(xml_text)
    except (ET.ParseError, DefusedXmlException) as e:
        logger.error(f"XML parsing failed: {e}")
        raise GraphParseError(f"An error occurred while trying to parse the XML string: {e}") from e


def local_name(name: str) -> str:
    """Strip a ``{namespace}`` prefix from a tag or attribute name."""
    if name.startswith("{"):
        return name.split("}", 1)[1]
    return name


def local_attrib(elem: Element) -> dict[str, str]:
    """Element attributes keyed by local name."""
    return {local_name(key): value for key, value in elem.attrib.items()}


def iter_children(elem: Element, name: str) -> Iterator[Element]:
    """Direct children with the given local name."""
    for child in elem:
        if isinstance(child.tag, str) and local_name(child.tag) == name:
            yield child


def find_child(elem: Element, name: str) -> Element | None:
    return next(iter_children(elem, name), None)


def serialize_document(root: Element) -> str:
    """Serialize a document with a double-quoted UTF-8 declaration.

    ElementTree writes the declaration with single quotes and the configured
    encoding name in lowercase, so it is emitted by hand instead.
    """
    if converter_config.XML_INDENT:
        ET.indent(root, space=converter_config.indent_string())
    body = ET.tostring(root, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n"

#!/usr/bin/env python3
"""
Reserved-key reconciliation.

A reserved key is a field with dedicated structure in at least one format
(position, color, size, label, ...). Reserved keys live at the top level of a
canonical Node/Edge and never in its ``attributes`` map; they are pulled out
of the free-form data on import and re-expanded into each format's dedicated
slot on export. They never take part in attribute type inference.

The table below drives every importer/exporter so the four format pairs stay
symmetric:

- ``roles``: which element kinds carry the key
- ``kind``: how XML text is turned back into a value on import
- ``gexf_slot``: where GEXF serializes it (XML attribute, viz:* element, or not at all)
- ``graphml_type``: ``attr.type`` of the key declaration synthesized on GraphML
  export; None means the field is never written as GraphML data
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ....models.models import AttributeDescriptor, ElementRole, GraphElement
from ..color import normalize
from .values import coerce_boolean, coerce_number

logger = logging.getLogger(__name__)

NODE_ONLY = frozenset({ElementRole.NODE})
EDGE_ONLY = frozenset({ElementRole.EDGE})
BOTH = frozenset({ElementRole.NODE, ElementRole.EDGE})

# GraphML stores a color as three integer keys
COLOR_CHANNEL_KEYS = ("r", "g", "b")


class ValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    COLOR = "color"


class GexfSlot(str, Enum):
    XML_ATTRIBUTE = "xml_attribute"
    VIZ_COLOR = "color"
    VIZ_POSITION = "position"
    VIZ_SIZE = "size"
    VIZ_SHAPE = "shape"
    VIZ_THICKNESS = "thickness"
    OMITTED = "omitted"


@dataclass(frozen=True)
class ReservedKey:
    name: str
    roles: frozenset
    kind: ValueKind
    gexf_slot: GexfSlot
    graphml_type: str | None
    structural: bool = False


RESERVED_KEYS: tuple[ReservedKey, ...] = (
    ReservedKey("id", BOTH, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, None, structural=True),
    ReservedKey("source", EDGE_ONLY, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, None, structural=True),
    ReservedKey("target", EDGE_ONLY, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, None, structural=True),
    ReservedKey("x", BOTH, ValueKind.NUMBER, GexfSlot.VIZ_POSITION, "float"),
    ReservedKey("y", BOTH, ValueKind.NUMBER, GexfSlot.VIZ_POSITION, "float"),
    ReservedKey("z", BOTH, ValueKind.NUMBER, GexfSlot.VIZ_POSITION, "float"),
    ReservedKey("label", BOTH, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, "string"),
    ReservedKey("edgelabel", EDGE_ONLY, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, "string"),
    ReservedKey("size", NODE_ONLY, ValueKind.NUMBER, GexfSlot.VIZ_SIZE, "float"),
    ReservedKey("shape", BOTH, ValueKind.TEXT, GexfSlot.VIZ_SHAPE, "string"),
    ReservedKey("weight", EDGE_ONLY, ValueKind.NUMBER, GexfSlot.XML_ATTRIBUTE, "float"),
    ReservedKey("thickness", EDGE_ONLY, ValueKind.NUMBER, GexfSlot.VIZ_THICKNESS, "float"),
    ReservedKey("start", BOTH, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, "string"),
    ReservedKey("end", BOTH, ValueKind.TEXT, GexfSlot.XML_ATTRIBUTE, "string"),
    ReservedKey("color", BOTH, ValueKind.COLOR, GexfSlot.VIZ_COLOR, "int"),
    ReservedKey("key", BOTH, ValueKind.TEXT, GexfSlot.OMITTED, None),
    ReservedKey("undirected", EDGE_ONLY, ValueKind.BOOLEAN, GexfSlot.OMITTED, None),
)

RESERVED_BY_NAME: dict[str, ReservedKey] = {reserved.name: reserved for reserved in RESERVED_KEYS}

# Fields renamed on import: edges use "weight" for what nodes call "size"
_ROLE_RENAMES = {
    ElementRole.EDGE: {"size": "weight"},
}


def canonical_name(name: str, role: ElementRole) -> str:
    return _ROLE_RENAMES.get(role, {}).get(name, name)


def reserved_names(role: ElementRole) -> frozenset[str]:
    """Names of the reserved keys carried by an element of the given role."""
    return frozenset(reserved.name for reserved in RESERVED_KEYS if role in reserved.roles)


def is_reserved(name: str, role: ElementRole) -> bool:
    return canonical_name(name, role) in reserved_names(role)


def xml_reserved_names(role: ElementRole) -> frozenset[str]:
    """Reserved names with a slot in GEXF and GraphML.

    Graphology-only fields (``key``, ``undirected``) are excluded: in the XML
    formats they are ordinary attributes.
    """
    return frozenset(
        reserved.name for reserved in RESERVED_KEYS
        if role in reserved.roles and reserved.gexf_slot is not GexfSlot.OMITTED
    )


def is_xml_reserved(name: str, role: ElementRole) -> bool:
    return canonical_name(name, role) in xml_reserved_names(role)


def split_element_fields(fields: Mapping[str, Any], role: ElementRole) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate reserved fields from free-form data for a flat JSON element.

    Free-form values come from the nested ``attributes`` mapping plus every
    top-level field that is not reserved. A reserved name found inside the
    nested mapping is promoted unless the top level already sets it. Edge
    ``size`` is renamed to ``weight``. None values count as absent.

    Args:
        fields: The element as found in the document
        role: Whether the element is a node or an edge

    Returns:
        Tuple (reserved fields, free-form attributes)
    """
    names = reserved_names(role)
    reserved: dict[str, Any] = {}
    attributes: dict[str, Any] = {}

    nested = fields.get("attributes")
    if isinstance(nested, Mapping):
        for key, value in nested.items():
            if value is None:
                continue
            name = canonical_name(key, role)
            if name in names:
                reserved[name] = value
            else:
                attributes[key] = value

    for key, value in fields.items():
        if key == "attributes" or value is None:
            continue
        name = canonical_name(key, role)
        if name in names:
            reserved[name] = value
        else:
            attributes[key] = value

    return reserved, attributes


def promote_reserved_attributes(attributes: dict[str, Any], role: ElementRole, aliases: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Move reserved entries out of an attribute map read from XML data.

    Args:
        attributes: Attribute map keyed by declaration id; reserved entries are removed in place
        role: Whether the element is a node or an edge
        aliases: Optional declaration id -> reserved name (e.g. GraphML ``d0`` -> ``label``)

    Returns:
        The promoted reserved fields keyed by reserved name
    """
    aliases = aliases or {}
    names = xml_reserved_names(role)
    promoted: dict[str, Any] = {}

    for key in list(attributes):
        name = canonical_name(aliases.get(key, key), role)
        reserved = RESERVED_BY_NAME.get(name)
        if reserved is None or name not in names or reserved.structural or reserved.kind is ValueKind.COLOR:
            continue
        promoted[name] = attributes.pop(key)

    return promoted


def missing_reserved_declarations(
    elements: Iterable[GraphElement],
    descriptors: Iterable[AttributeDescriptor],
    role: ElementRole,
) -> list[tuple[str, str]]:
    """Reserved keys present in the data but lacking a GraphML key declaration.

    A color present anywhere without a ``color``/``r``/``g``/``b`` declaration
    expands to three ``int`` keys r, g and b.

    Returns:
        List of (key id, GraphML attr.type) in reserved-table order
    """
    elements = list(elements)
    declared = {descriptor.id for descriptor in descriptors}
    missing: list[tuple[str, str]] = []

    for reserved in RESERVED_KEYS:
        if role not in reserved.roles or reserved.graphml_type is None:
            continue
        if not any(getattr(element, reserved.name, None) is not None for element in elements):
            continue

        if reserved.kind is ValueKind.COLOR:
            if declared.isdisjoint({"color", *COLOR_CHANNEL_KEYS}):
                missing.extend((channel, reserved.graphml_type) for channel in COLOR_CHANNEL_KEYS)
        elif reserved.name not in declared:
            missing.append((reserved.name, reserved.graphml_type))

    if missing:
        logger.debug(f"Synthesizing {role.value} key declarations: {[key for key, _ in missing]}")
    return missing


def coerce_reserved(name: str, value: Any) -> Any:
    """Turn XML text for a reserved field back into its canonical value."""
    kind = RESERVED_BY_NAME[name].kind
    if kind is ValueKind.NUMBER:
        return coerce_number(value)
    if kind is ValueKind.BOOLEAN:
        return coerce_boolean(value)
    if kind is ValueKind.COLOR:
        return normalize(value)
    return value

#!/usr/bin/env python3
"""GEXF 1.3 graph converter.

GEXF declares typed attributes per element class and stores visual properties
in the ``viz`` extension namespace::

    <gexf xmlns="http://www.gexf.net/1.3" xmlns:viz="http://www.gexf.net/1.3/viz" version="1.3">
      <graph id="graph" mode="static" defaultedgetype="undirected">
        <attributes class="node" mode="static">
          <attribute id="age" title="age" type="double"/>
        </attributes>
        <nodes>
          <node id="n1" label="Alice">
            <attvalues><attvalue for="age" value="30"/></attvalues>
            <viz:color r="255" g="0" b="0"/>
            <viz:position x="1.0" y="2.0"/>
            <viz:size value="10"/>
          </node>
        </nodes>
        <edges>
          <edge id="e1" source="n1" target="n2" weight="2"/>
        </edges>
      </graph>
    </gexf>

Reading strips namespaces, so GEXF 1.2 documents and documents with other
viz namespace prefixes are accepted as well.
"""

import logging
from typing import Any
from xml.etree.ElementTree import Element, SubElement

from ....core.config import converter_config
from ....errors import ColorParseError, MalformedGraphError
from ....models.models import (
    AttributeDescriptor,
    AttributeType,
    Edge,
    EdgeType,
    ElementRole,
    Graph,
    GraphAttributes,
    GraphElement,
    Node,
)
from ..color import from_channels, normalize
from ..schema.reserved_keys import (
    RESERVED_BY_NAME,
    GexfSlot,
    canonical_name,
    coerce_reserved,
    is_xml_reserved,
    promote_reserved_attributes,
    xml_reserved_names,
)
from ..schema.type_inference import undeclared_attribute_schema
from ..schema.values import coerce_number, coerce_to_type, to_text
from ..xml_support import find_child, iter_children, local_attrib, local_name, parse_xml, serialize_document

logger = logging.getLogger(__name__)

GEXF_NS = "http://www.gexf.net/1.3"
VIZ_NS = "http://www.gexf.net/1.3/viz"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = "http://www.gexf.net/1.3 http://www.gexf.net/1.3/gexf.xsd"

# Attribute declarations with these ids describe structure, not data
STRUCTURAL_ATTRIBUTE_IDS = {"id", "source", "target"}

POSITION_AXES = ("x", "y", "z")


def gexf_type_to_json(gexf_type: str | None) -> AttributeType:
    if gexf_type in ("integer", "long", "double", "float"):
        return AttributeType.NUMBER
    if gexf_type == "boolean":
        return AttributeType.BOOLEAN
    return AttributeType.STRING


def json_type_to_gexf(attribute_type: AttributeType) -> str:
    if attribute_type is AttributeType.NUMBER:
        return "double"
    if attribute_type is AttributeType.BOOLEAN:
        return "boolean"
    return "string"


# ---------------------------------------------------------------- import


def _read_attribute_declarations(graph_elem: Element) -> dict[str, list[AttributeDescriptor]]:
    """Collect attribute declarations per class (``node`` / ``edge``)."""
    declarations: dict[str, list[AttributeDescriptor]] = {"node": [], "edge": []}

    for block in iter_children(graph_elem, "attributes"):
        element_class = local_attrib(block).get("class")
        if element_class not in declarations:
            logger.debug(f"Skipping attribute block for class {element_class!r}")
            continue

        for attribute in iter_children(block, "attribute"):
            attrib = local_attrib(attribute)
            attribute_id = attrib["id"]
            if attribute_id in STRUCTURAL_ATTRIBUTE_IDS or is_xml_reserved(attribute_id, ElementRole(element_class)):
                continue
            declarations[element_class].append(
                AttributeDescriptor(
                    id=attribute_id,
                    title=attrib.get("title", attribute_id),
                    type=gexf_type_to_json(attrib.get("type")),
                )
            )

    return declarations


def _read_viz_color(attrib: dict[str, str]) -> Any:
    if all(channel in attrib for channel in ("r", "g", "b")):
        return from_channels(attrib["r"], attrib["g"], attrib["b"])
    if "hex" in attrib:
        return normalize(attrib["hex"])
    raise ColorParseError(f"viz:color without r/g/b or hex: {attrib}")


def _read_element(elem: Element, role: ElementRole, declared_types: dict[str, AttributeType]) -> GraphElement:
    """Read a GEXF node or edge into a canonical element."""
    names = xml_reserved_names(role)
    fields: dict[str, Any] = {}
    attributes: dict[str, Any] = {}

    for xml_name, value in local_attrib(elem).items():
        name = canonical_name(xml_name, role)
        if name in names:
            fields[name] = coerce_reserved(name, value)
        else:
            attributes[xml_name] = value

    for child in elem:
        if not isinstance(child.tag, str):
            continue
        tag = local_name(child.tag)
        attrib = local_attrib(child)

        if tag == "attvalues":
            for attvalue in iter_children(child, "attvalue"):
                values = local_attrib(attvalue)
                key = values.get("for", values.get("id"))
                if key is None or key in STRUCTURAL_ATTRIBUTE_IDS:
                    continue
                attributes[key] = coerce_to_type(values.get("value"), declared_types.get(key))
        elif tag == "color":
            fields["color"] = _read_viz_color(attrib)
        elif tag == "position":
            for axis in POSITION_AXES:
                if axis in attrib:
                    fields[axis] = coerce_number(attrib[axis])
        elif tag == "size":
            name = canonical_name("size", role)
            fields.setdefault(name, coerce_number(attrib.get("value")))
        elif tag == "thickness" and "thickness" in names:
            fields["thickness"] = coerce_number(attrib.get("value"))
        elif tag == "shape":
            fields["shape"] = attrib.get("value")
        else:
            logger.debug(f"Ignoring <{tag}> inside {role.value} {fields.get('id')!r}")

    # Attvalues may carry reserved names; dedicated XML attributes and viz elements take precedence
    if "color" in attributes:
        fields.setdefault("color", normalize(attributes.pop("color")))
    for name, value in promote_reserved_attributes(attributes, role).items():
        fields.setdefault(name, coerce_reserved(name, value))

    model = Node if role is ElementRole.NODE else Edge
    return model(**fields, attributes=attributes)


def _read_graph(root: Element) -> Graph:
    if local_name(root.tag) != "gexf":
        logger.error(f"Root element is not gexf: {root.tag}")
        raise MalformedGraphError()

    graph_elem = find_child(root, "graph")
    nodes_elem = find_child(graph_elem, "nodes") if graph_elem is not None else None
    edges_elem = find_child(graph_elem, "edges") if graph_elem is not None else None
    if nodes_elem is None or edges_elem is None:
        logger.error("GEXF document is missing graph, nodes or edges")
        raise MalformedGraphError()

    declarations = _read_attribute_declarations(graph_elem)
    node_types = {descriptor.id: descriptor.type for descriptor in declarations["node"]}
    edge_types = {descriptor.id: descriptor.type for descriptor in declarations["edge"]}

    graph_attrib = local_attrib(graph_elem)
    graph_attributes = GraphAttributes(
        id=graph_attrib.get("id", converter_config.DEFAULT_GRAPH_ID),
        edge_type=graph_attrib.get("defaultedgetype", EdgeType.UNDIRECTED.value),
        mode=graph_attrib.get("mode", "static"),
    )

    return Graph(
        nodes=[_read_element(node, ElementRole.NODE, node_types) for node in iter_children(nodes_elem, "node")],
        edges=[_read_element(edge, ElementRole.EDGE, edge_types) for edge in iter_children(edges_elem, "edge")],
        node_attributes=declarations["node"],
        edge_attributes=declarations["edge"],
        attributes=graph_attributes,
    )


def graph_from_gexf(xml_text: str | bytes) -> Graph:
    """Create a canonical graph from a GEXF document.

    Args:
        xml_text: GEXF document

    Returns:
        Graph with the declared node/edge attribute schemas

    Raises:
        GraphParseError: If the text is not well-formed XML
        MalformedGraphError: If the document does not have the GEXF graph structure
        ColorParseError: If a viz:color cannot be interpreted
    """
    root = parse_xml(xml_text)

    try:
        graph = _read_graph(root)
    except (ColorParseError, MalformedGraphError):
        raise
    except Exception as e:
        logger.error(f"Failed to build graph from GEXF: {e}")
        raise MalformedGraphError() from e

    logger.info(
        f"Imported GEXF graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges",
        extra={"source_format": "gexf"},
    )
    return graph


# ---------------------------------------------------------------- export


def _export_declarations(declared: list[AttributeDescriptor], elements: list[GraphElement]) -> list[AttributeDescriptor]:
    if not converter_config.SYNTHESIZE_KEYS:
        return list(declared)
    return [*declared, *undeclared_attribute_schema(declared, (element.attributes for element in elements))]


def _write_attribute_block(graph_elem: Element, element_class: str, descriptors: list[AttributeDescriptor]) -> None:
    block = SubElement(graph_elem, "attributes", {"class": element_class, "mode": "static"})
    for descriptor in descriptors:
        SubElement(block, "attribute", {
            "id": descriptor.id,
            "title": descriptor.title,
            "type": json_type_to_gexf(descriptor.type),
        })


def _write_element(parent: Element, tag: str, element: GraphElement) -> None:
    """Write a node or edge with XML attributes, attvalues and viz elements."""
    xml_attributes: dict[str, str] = {}
    viz: dict[GexfSlot, Any] = {}
    position: dict[str, str] = {}

    for name, value in element.reserved_items():
        slot = RESERVED_BY_NAME[name].gexf_slot
        if slot is GexfSlot.XML_ATTRIBUTE:
            xml_attributes[name] = to_text(value)
        elif slot is GexfSlot.VIZ_POSITION:
            position[name] = to_text(value)
        elif slot is not GexfSlot.OMITTED:
            viz[slot] = value

    elem = SubElement(parent, tag, xml_attributes)

    if element.attributes:
        attvalues = SubElement(elem, "attvalues")
        for key, value in element.attributes.items():
            SubElement(attvalues, "attvalue", {"for": key, "value": to_text(value)})

    if GexfSlot.VIZ_COLOR in viz:
        color = viz[GexfSlot.VIZ_COLOR]
        SubElement(elem, "viz:color", {"r": str(color.red), "g": str(color.green), "b": str(color.blue)})

    # An empty viz:position is invalid, so it is only written when an axis is set
    if position:
        SubElement(elem, "viz:position", position)

    for slot in (GexfSlot.VIZ_SIZE, GexfSlot.VIZ_THICKNESS, GexfSlot.VIZ_SHAPE):
        if slot in viz:
            SubElement(elem, f"viz:{slot.value}", {"value": to_text(viz[slot])})


def graph_to_gexf(graph: Graph) -> str:
    """Serialize a canonical graph as a GEXF 1.3 document.

    Both attribute blocks (class node and class edge, mode static) are always
    written. Attribute values are escaped by the serializer (``&`` becomes
    ``&amp;``).
    """
    root = Element("gexf", {
        "xmlns": GEXF_NS,
        "xmlns:viz": VIZ_NS,
        "xmlns:xsi": XSI_NS,
        "xsi:schemaLocation": SCHEMA_LOCATION,
        "version": "1.3",
    })

    attributes = graph.attributes
    graph_elem = SubElement(root, "graph", {
        "id": to_text(attributes.id),
        "mode": attributes.mode.value,
        "defaultedgetype": attributes.edge_type.value,
    })

    _write_attribute_block(graph_elem, "node", _export_declarations(graph.node_attributes, graph.nodes))
    _write_attribute_block(graph_elem, "edge", _export_declarations(graph.edge_attributes, graph.edges))

    nodes_elem = SubElement(graph_elem, "nodes")
    for node in graph.nodes:
        _write_element(nodes_elem, "node", node)

    edges_elem = SubElement(graph_elem, "edges")
    for edge in graph.edges:
        _write_element(edges_elem, "edge", edge)

    logger.info(
        f"Exported GEXF graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges",
        extra={"target_format": "gexf"},
    )
    return serialize_document(root)

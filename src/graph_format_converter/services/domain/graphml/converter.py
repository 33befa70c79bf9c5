#!/usr/bin/env python3
"""GraphML graph converter.

GraphML declares every attribute up front as a ``key`` and attaches values to
nodes and edges as ``data`` children::

    <graphml xmlns="http://graphml.graphdrawing.org/xmlns">
      <key id="age" for="node" attr.name="age" attr.type="double"/>
      <key id="r" for="node" attr.name="r" attr.type="int"/>
      <graph id="graph" edgedefault="undirected">
        <node id="n1">
          <data key="age">30</data>
          <data key="r">255</data>
        </node>
        <edge source="n1" target="n2"/>
      </graph>
    </graphml>

Keys are resolved to attribute names through ``attr.name`` (falling back to the
key id), so documents written by tools that number their keys (``d0``,
``d1``, ...) read the same as documents keyed by name. Colors have no native
slot and travel as three integer keys ``r``, ``g`` and ``b``.
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
    COLOR_CHANNEL_KEYS,
    RESERVED_BY_NAME,
    ValueKind,
    coerce_reserved,
    is_xml_reserved,
    missing_reserved_declarations,
    promote_reserved_attributes,
)
from ..schema.type_inference import undeclared_attribute_schema
from ..schema.values import coerce_to_type, to_text
from ..xml_support import find_child, iter_children, local_attrib, local_name, parse_xml, serialize_document

logger = logging.getLogger(__name__)

GRAPHML_NS = "http://graphml.graphdrawing.org/xmlns"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = "http://graphml.graphdrawing.org/xmlns http://graphml.graphdrawing.org/xmlns/1.0/graphml.xsd"

STRUCTURAL_KEYS = {"id", "source", "target"}

# Element XML attributes that are part of the GraphML structure
NODE_XML_ATTRIBUTES = {"id"}
EDGE_XML_ATTRIBUTES = {"id", "source", "target"}


def graphml_type_to_json(graphml_type: str | None) -> AttributeType:
    if graphml_type in ("int", "long", "double", "float"):
        return AttributeType.NUMBER
    if graphml_type == "boolean":
        return AttributeType.BOOLEAN
    return AttributeType.STRING


def json_type_to_graphml(attribute_type: AttributeType) -> str:
    if attribute_type is AttributeType.NUMBER:
        return "double"
    if attribute_type is AttributeType.BOOLEAN:
        return "boolean"
    return "string"


# ---------------------------------------------------------------- import


class KeyTable:
    """Key declarations of one element role, indexed by key id."""

    def __init__(self):
        self.names: dict[str, str] = {}
        self.types: dict[str, AttributeType] = {}
        self.descriptors: list[AttributeDescriptor] = []

    def declare(self, key_id: str, name: str, attribute_type: AttributeType, role: ElementRole):
        self.names[key_id] = name
        # Data under an id/source/target key resolves to that name and is dropped on read
        if name in STRUCTURAL_KEYS:
            return
        self.types[name] = attribute_type

        # Reserved keys have a top-level slot, so they stay out of the free-form schema
        if is_xml_reserved(name, role) or name in COLOR_CHANNEL_KEYS:
            return
        if any(descriptor.id == name for descriptor in self.descriptors):
            return
        self.descriptors.append(AttributeDescriptor(id=name, title=name, type=attribute_type))

    def resolve(self, key_id: str) -> str:
        return self.names.get(key_id, key_id)


def _read_keys(root: Element) -> dict[ElementRole, KeyTable]:
    tables = {ElementRole.NODE: KeyTable(), ElementRole.EDGE: KeyTable()}

    for key in iter_children(root, "key"):
        attrib = local_attrib(key)
        key_id = attrib.get("id")
        if key_id is None:
            continue
        name = attrib.get("attr.name", key_id)

        domain = attrib.get("for", "all")
        if domain == "all":
            roles = [ElementRole.NODE, ElementRole.EDGE]
        elif domain in ("node", "edge"):
            roles = [ElementRole(domain)]
        else:
            logger.debug(f"Skipping key {key_id!r} declared for {domain!r}")
            continue

        attribute_type = graphml_type_to_json(attrib.get("attr.type"))
        for role in roles:
            tables[role].declare(key_id, name, attribute_type, role)

    return tables


def _recombine_color(raw: dict[str, Any]) -> Any:
    """Pop r/g/b (or a plain ``color`` value) out of the data map."""
    if all(channel in raw for channel in COLOR_CHANNEL_KEYS):
        return from_channels(*(raw.pop(channel) for channel in COLOR_CHANNEL_KEYS))
    if "color" in raw:
        return normalize(raw.pop("color"))
    return None


def _read_element(elem: Element, role: ElementRole, keys: KeyTable) -> GraphElement:
    """Read a GraphML node or edge into a canonical element."""
    structural = NODE_XML_ATTRIBUTES if role is ElementRole.NODE else EDGE_XML_ATTRIBUTES
    fields: dict[str, Any] = {}
    raw: dict[str, Any] = {}

    for xml_name, value in local_attrib(elem).items():
        if xml_name in structural:
            fields[xml_name] = value
        else:
            raw[xml_name] = value

    for data in iter_children(elem, "data"):
        key_id = local_attrib(data).get("key")
        if key_id is None:
            continue
        name = keys.resolve(key_id)
        if name in STRUCTURAL_KEYS:
            continue
        raw[name] = data.text or ""

    color = _recombine_color(raw)
    if color is not None:
        fields["color"] = color

    for name, value in promote_reserved_attributes(raw, role).items():
        fields[name] = coerce_reserved(name, value)

    attributes = {name: coerce_to_type(value, keys.types.get(name)) for name, value in raw.items()}

    model = Node if role is ElementRole.NODE else Edge
    return model(**fields, attributes=attributes)


def _read_graph(root: Element) -> Graph:
    if local_name(root.tag) != "graphml":
        logger.error(f"Root element is not graphml: {root.tag}")
        raise MalformedGraphError()

    graph_elem = find_child(root, "graph")
    if graph_elem is None:
        logger.error("GraphML document has no graph element")
        raise MalformedGraphError()

    keys = _read_keys(root)
    node_keys = keys[ElementRole.NODE]
    edge_keys = keys[ElementRole.EDGE]

    graph_attrib = local_attrib(graph_elem)
    graph_attributes = GraphAttributes(
        id=graph_attrib.get("id", converter_config.DEFAULT_GRAPH_ID),
        edge_type=graph_attrib.get("edgedefault", EdgeType.UNDIRECTED.value),
    )

    return Graph(
        nodes=[_read_element(node, ElementRole.NODE, node_keys) for node in iter_children(graph_elem, "node")],
        edges=[_read_element(edge, ElementRole.EDGE, edge_keys) for edge in iter_children(graph_elem, "edge")],
        node_attributes=node_keys.descriptors,
        edge_attributes=edge_keys.descriptors,
        attributes=graph_attributes,
    )


def graph_from_graphml(xml_text: str | bytes) -> Graph:
    """Create a canonical graph from a GraphML document.

    Args:
        xml_text: GraphML document

    Returns:
        Graph with the node/edge schemas taken from the key declarations

    Raises:
        GraphParseError: If the text is not well-formed XML
        MalformedGraphError: If the document has no graphml root or graph element
        ColorParseError: If a color value cannot be interpreted
    """
    root = parse_xml(xml_text)

    try:
        graph = _read_graph(root)
    except (ColorParseError, MalformedGraphError):
        raise
    except Exception as e:
        logger.error(f"Failed to build graph from GraphML: {e}")
        raise MalformedGraphError() from e

    logger.info(
        f"Imported GraphML graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges",
        extra={"source_format": "graphml"},
    )
    return graph


# ---------------------------------------------------------------- export


def _key_declarations(
    descriptors: list[AttributeDescriptor],
    elements: list[GraphElement],
    role: ElementRole,
) -> list[tuple[str, str]]:
    """(attribute name, attr.type) for every key the role needs: declared, undeclared, then reserved."""
    if converter_config.SYNTHESIZE_KEYS:
        descriptors = [*descriptors, *undeclared_attribute_schema(descriptors, (element.attributes for element in elements))]

    declarations = [(descriptor.id, json_type_to_graphml(descriptor.type)) for descriptor in descriptors]
    declarations.extend(missing_reserved_declarations(elements, descriptors, role))
    return declarations


def _write_data(elem: Element, key: str, value: Any) -> None:
    data = SubElement(elem, "data", {"key": key})
    data.text = to_text(value)


def _unique_key_ids(names: list[str], taken: set[str]) -> dict[str, str]:
    """Map each edge key name to a key id not already used by a node key."""
    key_ids: dict[str, str] = {}
    for name in names:
        key_id = name if name not in taken else f"edge_{name}"
        suffix = 1
        while key_id in taken:
            key_id = f"edge_{name}_{suffix}"
            suffix += 1
        taken.add(key_id)
        key_ids[name] = key_id
    return key_ids


def _write_element(
    parent: Element,
    tag: str,
    element: GraphElement,
    xml_names: set[str],
    key_ids: dict[str, str],
) -> None:
    """Write a node or edge with one data child per reserved field and attribute."""
    xml_attributes = {
        name: to_text(value)
        for name, value in element.reserved_items()
        if name in xml_names
    }
    elem = SubElement(parent, tag, xml_attributes)

    for name, value in element.reserved_items():
        reserved = RESERVED_BY_NAME[name]
        if reserved.structural or reserved.graphml_type is None:
            continue
        if reserved.kind is ValueKind.COLOR:
            for channel, channel_value in zip(COLOR_CHANNEL_KEYS, value):
                _write_data(elem, key_ids.get(channel, channel), channel_value)
        else:
            _write_data(elem, key_ids.get(name, name), value)

    for key, value in element.attributes.items():
        _write_data(elem, key_ids.get(key, key), value)


def graph_to_graphml(graph: Graph) -> str:
    """Serialize a canonical graph as a GraphML document.

    A ``mutual`` edge type is written as ``directed`` since GraphML only knows
    directed and undirected graphs. Key ids equal attribute names; an edge
    key whose name is also a node key gets an ``edge_`` prefixed id so every
    key id stays unique, and ``attr.name`` keeps the attribute name.
    """
    root = Element("graphml", {
        "xmlns": GRAPHML_NS,
        "xmlns:xsi": XSI_NS,
        "xsi:schemaLocation": SCHEMA_LOCATION,
    })

    node_keys = _key_declarations(graph.node_attributes, graph.nodes, ElementRole.NODE)
    edge_keys = _key_declarations(graph.edge_attributes, graph.edges, ElementRole.EDGE)
    node_key_ids = {name: name for name, _ in node_keys}
    edge_key_ids = _unique_key_ids([name for name, _ in edge_keys], set(node_key_ids))

    for role, declarations, key_ids in (
        (ElementRole.NODE, node_keys, node_key_ids),
        (ElementRole.EDGE, edge_keys, edge_key_ids),
    ):
        for name, attr_type in declarations:
            SubElement(root, "key", {
                "id": key_ids[name],
                "for": role.value,
                "attr.name": name,
                "attr.type": attr_type,
            })

    attributes = graph.attributes
    edge_default = EdgeType.DIRECTED if attributes.edge_type is EdgeType.MUTUAL else attributes.edge_type
    if attributes.edge_type is EdgeType.MUTUAL:
        logger.debug("GraphML has no mutual edge type, writing edgedefault=directed")

    graph_elem = SubElement(root, "graph", {
        "id": to_text(attributes.id),
        "edgedefault": edge_default.value,
    })

    for node in graph.nodes:
        _write_element(graph_elem, "node", node, NODE_XML_ATTRIBUTES, node_key_ids)
    for edge in graph.edges:
        _write_element(graph_elem, "edge", edge, EDGE_XML_ATTRIBUTES, edge_key_ids)

    logger.info(
        f"Exported GraphML graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges",
        extra={"target_format": "graphml"},
    )
    return serialize_document(root)

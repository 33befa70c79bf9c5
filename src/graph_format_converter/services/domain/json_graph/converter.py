#!/usr/bin/env python3
"""JSON and Graphology graph converters.

Generic JSON document::

    {
      "attributes": {"id": "graph", "edgeType": "undirected", "mode": "static"},
      "nodes": [{"id": "n1", "label": "Alice", "color": "#ff0000", "age": 30}],
      "edges": [{"id": "e1", "source": "n1", "target": "n2", "size": 2}]
    }

Reserved fields (id, label, color, x, ...) stay at the top level of each
element; any other field, or any entry of a nested ``attributes`` object, is
free-form data whose schema is inferred by majority vote since JSON carries no
type declarations.

Graphology serializes each element as ``{"key": ..., "attributes": {...}}``
(edges add source/target/undirected). Importing it is a renaming step in
front of the JSON importer.
"""

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ....core.config import converter_config
from ....errors import MalformedGraphError
from ....models.models import (
    AttributeValue,
    Edge,
    EdgeType,
    ElementRole,
    Graph,
    GraphAttributes,
    GraphElement,
    Node,
)
from ..color import normalize, to_rgb_string
from ..schema.reserved_keys import split_element_fields
from ..schema.type_inference import infer_attribute_schema

logger = logging.getLogger(__name__)

# Graphology "options.type" values that map onto an edge type
GRAPHOLOGY_TYPES = {"directed": EdgeType.DIRECTED, "undirected": EdgeType.UNDIRECTED}


def _scalar(value: Any) -> AttributeValue:
    """Keep scalars as they are; serialize lists/objects to JSON text."""
    if isinstance(value, (str, bool, int, float)):
        return value
    return json.dumps(value, ensure_ascii=False)


def _elements(graph_data: Mapping[str, Any], name: str) -> list[Mapping[str, Any]]:
    elements = graph_data.get(name)
    if not isinstance(elements, list) or not all(isinstance(element, Mapping) for element in elements):
        logger.error(f"JSON graph document has no usable '{name}' list")
        raise MalformedGraphError()
    return elements


def _nested_attributes(element: Mapping[str, Any]) -> Mapping[str, Any]:
    nested = element.get("attributes") or {}
    if not isinstance(nested, Mapping):
        logger.error("Graphology element 'attributes' must be an object")
        raise MalformedGraphError()
    return nested


def _build_element(fields: Mapping[str, Any], role: ElementRole) -> tuple[dict[str, Any], dict[str, AttributeValue]]:
    reserved, attributes = split_element_fields(fields, role)
    if "color" in reserved:
        reserved["color"] = normalize(reserved["color"])
    return reserved, {key: _scalar(value) for key, value in attributes.items()}


def graph_from_json(graph_data: Mapping[str, Any]) -> Graph:
    """Create a canonical graph from a generic JSON document.

    Args:
        graph_data: Mapping with ``nodes`` and ``edges`` lists and an optional ``attributes`` mapping

    Returns:
        Graph with inferred node/edge attribute schemas

    Raises:
        MalformedGraphError: If nodes/edges are missing or not lists of objects
        ColorParseError: If an element carries an invalid color
    """
    if not isinstance(graph_data, Mapping):
        logger.error(f"JSON graph document must be an object, got {type(graph_data).__name__}")
        raise MalformedGraphError()

    raw_nodes = _elements(graph_data, "nodes")
    raw_edges = _elements(graph_data, "edges")

    node_parts = [_build_element(node, ElementRole.NODE) for node in raw_nodes]
    edge_parts = [_build_element(edge, ElementRole.EDGE) for edge in raw_edges]

    raw_attributes = graph_data.get("attributes") or {}
    if not isinstance(raw_attributes, Mapping):
        logger.error("JSON graph 'attributes' must be an object")
        raise MalformedGraphError()

    try:
        graph = Graph(
            nodes=[Node(**reserved, attributes=attributes) for reserved, attributes in node_parts],
            edges=[Edge(**reserved, attributes=attributes) for reserved, attributes in edge_parts],
            node_attributes=infer_attribute_schema(attributes for _, attributes in node_parts),
            edge_attributes=infer_attribute_schema(attributes for _, attributes in edge_parts),
            attributes=GraphAttributes(**{"id": converter_config.DEFAULT_GRAPH_ID, **raw_attributes}),
        )
    except ValidationError as e:
        logger.error(f"JSON graph document has invalid fields: {e}")
        raise MalformedGraphError() from e

    logger.info(
        f"Imported JSON graph with {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
        f"{len(graph.node_attributes)} node attributes, {len(graph.edge_attributes)} edge attributes",
        extra={"source_format": "json"},
    )
    return graph


def _flatten_graphology_element(element: Mapping[str, Any]) -> dict[str, Any]:
    """Turn ``{"key", "attributes", ...}`` into a flat JSON element keyed by ``id``.

    Fields written next to ``key`` (source, target, undirected, or reserved
    fields placed there by an earlier export) are kept; nested attributes win.
    An ``id`` written next to a different ``key`` stays the id and the key is
    kept as the ``key`` field.
    """
    flat = {name: value for name, value in element.items() if name not in ("key", "attributes")}
    key = element.get("key")
    if key is not None:
        if flat.get("id") is None:
            flat["id"] = key
        elif flat["id"] != key:
            flat["key"] = key
    flat.update(_nested_attributes(element))
    return flat


def graph_from_graphology(graph_data: Mapping[str, Any]) -> Graph:
    """Create a canonical graph from a Graphology export.

    Each element is flattened to ``{"id": key, **attributes}`` (edges keep
    source, target and undirected) and the result is imported as generic
    JSON. ``options.type`` supplies the edge type when the graph attributes
    do not.
    """
    if not isinstance(graph_data, Mapping):
        logger.error(f"Graphology document must be an object, got {type(graph_data).__name__}")
        raise MalformedGraphError()

    nodes = [_flatten_graphology_element(node) for node in _elements(graph_data, "nodes")]
    edges = [_flatten_graphology_element(edge) for edge in _elements(graph_data, "edges")]

    raw_attributes = graph_data.get("attributes") or {}
    if not isinstance(raw_attributes, Mapping):
        logger.error("Graphology graph 'attributes' must be an object")
        raise MalformedGraphError()
    attributes = dict(raw_attributes)
    options = graph_data.get("options")
    if "edgeType" not in attributes and isinstance(options, Mapping) and options.get("type") in GRAPHOLOGY_TYPES:
        attributes["edgeType"] = GRAPHOLOGY_TYPES[options["type"]].value

    return graph_from_json({"attributes": attributes, "nodes": nodes, "edges": edges})


def element_to_document(element: GraphElement) -> dict[str, Any]:
    """Flatten an element back to JSON: reserved fields at top level plus ``attributes``."""
    document: dict[str, Any] = {}
    for name, value in element.reserved_items():
        document[name] = to_rgb_string(value) if name == "color" else value
    document["attributes"] = copy.deepcopy(element.attributes)
    return document


def graph_to_json(graph: Graph) -> dict[str, Any]:
    """Serialize a canonical graph as a generic JSON document."""
    logger.debug("Exporting graph to JSON", extra={"target_format": "json"})
    return {
        "attributes": graph.attributes.to_document(),
        "nodes": [element_to_document(node) for node in graph.nodes],
        "edges": [element_to_document(edge) for edge in graph.edges],
    }


def graph_to_graphology(graph: Graph) -> dict[str, Any]:
    """Serialize a canonical graph in the Graphology flavour of the JSON document.

    Adds ``attributes.name`` (defaults to the graph id), a ``key`` on every
    node (its id) and edge (its key or id, when either exists) and an
    ``undirected`` flag on every edge derived from the graph edge type.
    """
    logger.debug("Exporting graph to Graphology JSON", extra={"target_format": "graphology"})
    graph_attributes = graph.attributes.to_document()
    undirected = graph.attributes.edge_type is EdgeType.UNDIRECTED

    nodes = []
    for node in graph.nodes:
        document = element_to_document(node)
        if document.get("key") is None:
            document["key"] = node.id
        nodes.append(document)

    edges = []
    for edge in graph.edges:
        document = element_to_document(edge)
        if document.get("key") is None and edge.id is not None:
            document["key"] = edge.id
        document["undirected"] = undirected
        edges.append(document)

    return {
        "attributes": {"name": graph_attributes["id"], **graph_attributes},
        "nodes": nodes,
        "edges": edges,
    }

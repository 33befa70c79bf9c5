#!/usr/bin/env python3

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from webcolors import IntegerRGB

# Closed set of values an attribute (or a reserved scalar field) can hold
AttributeValue = str | bool | int | float


class AttributeType(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"


class EdgeType(str, Enum):
    DIRECTED = "directed"
    UNDIRECTED = "undirected"
    MUTUAL = "mutual"


class GraphMode(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


class ElementRole(str, Enum):
    NODE = "node"
    EDGE = "edge"


# Pydantic Models


class GraphAttributes(BaseModel):
    """Graph-level metadata. Extra keys from JSON documents (e.g. ``name``) are kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: AttributeValue = "graph"
    edge_type: EdgeType = Field(default=EdgeType.UNDIRECTED, alias="edgeType")
    mode: GraphMode = GraphMode.STATIC

    def to_document(self) -> dict[str, Any]:
        """Plain JSON representation using the ``edgeType`` spelling."""
        return self.model_dump(by_alias=True, mode="json")


class AttributeDescriptor(BaseModel):
    id: str
    title: str
    type: AttributeType = AttributeType.STRING


class GraphElement(BaseModel):
    """Fields shared by nodes and edges.

    Reserved fields live at the top level; everything else is in ``attributes``.
    """

    id: AttributeValue | None = None
    label: AttributeValue | None = None
    color: IntegerRGB | None = None
    shape: AttributeValue | None = None
    x: AttributeValue | None = None
    y: AttributeValue | None = None
    z: AttributeValue | None = None
    start: AttributeValue | None = None
    end: AttributeValue | None = None
    key: AttributeValue | None = None
    attributes: dict[str, AttributeValue] = {}

    def reserved_items(self) -> list[tuple[str, Any]]:
        """(name, value) pairs for every reserved field that is set, in declaration order."""
        return [
            (name, value)
            for name, value in self
            if name != "attributes" and value is not None
        ]


class Node(GraphElement):
    size: AttributeValue | None = None


class Edge(GraphElement):
    source: AttributeValue | None = None
    target: AttributeValue | None = None
    weight: AttributeValue | None = None
    thickness: AttributeValue | None = None
    edgelabel: AttributeValue | None = None
    undirected: bool | None = None


class Graph(BaseModel):
    """Canonical in-memory graph shared by every importer and exporter."""

    nodes: list[Node] = []
    edges: list[Edge] = []
    node_attributes: list[AttributeDescriptor] = []
    edge_attributes: list[AttributeDescriptor] = []
    attributes: GraphAttributes = Field(default_factory=GraphAttributes)

#!/usr/bin/env python3

from collections.abc import Mapping
from typing import Any

from .models.models import AttributeDescriptor, Edge, Graph, GraphAttributes, Node
from .services.domain.gexf import graph_from_gexf, graph_to_gexf
from .services.domain.graphml import graph_from_graphml, graph_to_graphml
from .services.domain.json_graph import graph_from_graphology, graph_from_json, graph_to_graphology, graph_to_json


class GraphFormatConverter:
    """Graph loaded from one exchange format and writable to any other.

    Instances are created through the ``from_*`` class methods; the wrapped
    graph is never modified afterwards, so every ``to_*`` call can be repeated.

    Example:
        converter = GraphFormatConverter.from_gexf(gexf_text)
        graphml_text = converter.to_graphml()
    """

    def __init__(self, graph: Graph):
        self._graph = graph

    @classmethod
    def from_json(cls, graph_data: Mapping[str, Any]) -> "GraphFormatConverter":
        """Load a generic JSON graph document"""
        return cls(graph_from_json(graph_data))

    @classmethod
    def from_graphology(cls, graph_data: Mapping[str, Any]) -> "GraphFormatConverter":
        """Load a Graphology export"""
        return cls(graph_from_graphology(graph_data))

    @classmethod
    def from_gexf(cls, xml_text: str | bytes) -> "GraphFormatConverter":
        """Load a GEXF document"""
        return cls(graph_from_gexf(xml_text))

    @classmethod
    def from_graphml(cls, xml_text: str | bytes) -> "GraphFormatConverter":
        """Load a GraphML document"""
        return cls(graph_from_graphml(xml_text))

    @property
    def graph(self) -> Graph:
        return self._graph

    def to_json(self) -> dict[str, Any]:
        return graph_to_json(self._graph)

    def to_graphology(self) -> dict[str, Any]:
        return graph_to_graphology(self._graph)

    def to_gexf(self) -> str:
        return graph_to_gexf(self._graph)

    def to_graphml(self) -> str:
        return graph_to_graphml(self._graph)

    def get_nodes(self) -> list[Node]:
        return list(self._graph.nodes)

    def get_edges(self) -> list[Edge]:
        return list(self._graph.edges)

    def get_attributes(self) -> GraphAttributes:
        """Graph-level metadata (id, edge type, mode)"""
        return self._graph.attributes

    def get_node_attributes(self) -> list[AttributeDescriptor]:
        return list(self._graph.node_attributes)

    def get_edge_attributes(self) -> list[AttributeDescriptor]:
        return list(self._graph.edge_attributes)

    def __repr__(self) -> str:
        return (
            f"GraphFormatConverter(id={self._graph.attributes.id!r}, "
            f"nodes={len(self._graph.nodes)}, edges={len(self._graph.edges)})"
        )

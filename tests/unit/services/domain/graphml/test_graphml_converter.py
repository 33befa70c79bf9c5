#!/usr/bin/env python3
"""Unit tests for the GraphML converter."""

import pytest
from webcolors import IntegerRGB

from graph_format_converter.errors import ColorParseError, GraphParseError, MalformedGraphError
from graph_format_converter.models.models import AttributeDescriptor, AttributeType, EdgeType, GraphAttributes
from graph_format_converter.services.domain.graphml import converter as graphml_converter
from graph_format_converter.services.domain.graphml import graph_from_graphml, graph_to_graphml
from tests.fixtures.graph_fixtures import MALFORMED_XML, NAMED_KEYS_GRAPHML, SAMPLE_GRAPHML
from tests.utils.factories import EdgeFactory, GraphFactory, NodeFactory
from tests.utils.graph_helpers import (
    assert_descriptor,
    assert_ids,
    data_values,
    find_element,
    key_declarations,
    parse_output,
)


def _graphml(body, keys=""):
    """Wrap graph content in a GraphML document."""
    return (
        '<graphml xmlns="http://graphml.graphdrawing.org/xmlns">'
        f'{keys}<graph edgedefault="undirected">{body}</graph></graphml>'
    )


class TestGraphFromGraphml:
    """Test importing GraphML documents."""

    def test_graph_metadata(self):
        """Test graph id and edgedefault."""
        graph = graph_from_graphml(SAMPLE_GRAPHML)

        assert graph.attributes.id == "cities"
        assert graph.attributes.edge_type is EdgeType.UNDIRECTED
        assert_ids(graph.nodes, ["paris", "lyon"])
        assert_ids(graph.edges, ["p-l"])

    def test_schema_excludes_reserved_and_structural_keys(self):
        """Test reserved keys, color channels and id keys stay out of the schema."""
        graph = graph_from_graphml(SAMPLE_GRAPHML)

        assert [d.id for d in graph.node_attributes] == ["population", "capital", "note"]
        assert_descriptor(graph.node_attributes, "population", AttributeType.NUMBER)
        assert_descriptor(graph.node_attributes, "capital", AttributeType.BOOLEAN)
        assert graph.edge_attributes == [AttributeDescriptor(id="note", title="note", type=AttributeType.STRING)]

    def test_reserved_data_promoted(self):
        """Test label and coordinates, z included, become top-level fields."""
        node = find_element(graph_from_graphml(SAMPLE_GRAPHML).nodes, "paris")

        assert node.label == "Paris"
        assert (node.x, node.y, node.z) == (2.35, 48.85, 35)

    def test_color_channels_recombined(self):
        """Test r/g/b data become a single color."""
        node = find_element(graph_from_graphml(SAMPLE_GRAPHML).nodes, "paris")

        assert node.color == IntegerRGB(0, 0, 255)
        assert not {"r", "g", "b", "color"} & set(node.attributes)

    def test_typed_attribute_values(self):
        """Test data text is coerced through the declared key type."""
        graph = graph_from_graphml(SAMPLE_GRAPHML)

        assert find_element(graph.nodes, "paris").attributes == {
            "population": 2161000,
            "capital": True,
            "note": "R&D hub",
        }
        assert find_element(graph.nodes, "lyon").attributes == {"capital": False}

    def test_edge_values(self):
        """Test edge weight promotion and keys declared for all."""
        edge = graph_from_graphml(SAMPLE_GRAPHML).edges[0]

        assert (edge.source, edge.target) == ("paris", "lyon")
        assert edge.weight == 465
        assert edge.attributes == {"note": "TGV"}

    def test_named_keys(self):
        """Test keys referenced by name, a color string and node shapes."""
        graph = graph_from_graphml(NAMED_KEYS_GRAPHML)

        assert graph.attributes.edge_type is EdgeType.DIRECTED
        assert graph.attributes.id == "graph"
        assert find_element(graph.nodes, "1").shape == "square"
        assert graph.edges[0].color == IntegerRGB(0x12, 0x34, 0x56)
        assert graph.node_attributes == [] and graph.edge_attributes == []

    def test_untyped_key_and_unknown_xml_attributes(self):
        """Test keys without attr.name/attr.type and extra element attributes."""
        graph = graph_from_graphml(_graphml(
            '<node id="a" kind="hub"/><edge source="a" target="a" directed="true"><data key="weight">2</data></edge>',
            keys='<key id="weight" for="edge"/>',
        ))

        assert graph.nodes[0].attributes == {"kind": "hub"}
        assert graph.edges[0].weight == 2
        assert graph.edges[0].attributes == {"directed": "true"}

    def test_structural_keys_dropped(self):
        """Test data under a key named id/source/target is discarded, whatever the key id."""
        graph = graph_from_graphml(SAMPLE_GRAPHML)

        assert "d11" not in find_element(graph.nodes, "paris").attributes
        assert all(d.id != "d11" for d in graph.node_attributes)

    def test_graphology_fields_stay_attributes(self):
        """Test data named key or undirected is ordinary data and survives a round trip."""
        graph = graph_from_graphml(_graphml(
            '<node id="a"><data key="key">K1</data></node>'
            '<edge source="a" target="a"><data key="undirected">true</data></edge>',
            keys='<key id="key" for="node" attr.name="key" attr.type="string"/>'
                 '<key id="undirected" for="edge" attr.name="undirected" attr.type="boolean"/>',
        ))
        node, edge = graph.nodes[0], graph.edges[0]

        assert node.key is None and node.attributes == {"key": "K1"}
        assert edge.undirected is None and edge.attributes == {"undirected": True}
        assert_descriptor(graph.node_attributes, "key", AttributeType.STRING)
        assert_descriptor(graph.edge_attributes, "undirected", AttributeType.BOOLEAN)
        assert graph_from_graphml(graph_to_graphml(graph)) == graph

    def test_malformed_xml(self):
        """Test XML syntax errors raise GraphParseError."""
        with pytest.raises(GraphParseError):
            graph_from_graphml(MALFORMED_XML)

    @pytest.mark.parametrize("document", [
        "<gexf><graph/></gexf>",
        '<graphml xmlns="http://graphml.graphdrawing.org/xmlns"/>',
    ])
    def test_malformed_graph(self, document):
        """Test documents without a graphml root or graph element raise MalformedGraphError."""
        with pytest.raises(MalformedGraphError, match="malformed"):
            graph_from_graphml(document)

    def test_bad_color(self):
        """Test an invalid color value raises ColorParseError."""
        with pytest.raises(ColorParseError):
            graph_from_graphml(_graphml(
                '<node id="a"><data key="color">zzz</data></node>',
                keys='<key id="color" for="node" attr.name="color" attr.type="string"/>',
            ))


class TestGraphToGraphml:
    """Test exporting to GraphML."""

    def test_document_structure(self):
        """Test declaration, namespace and keys written before the graph."""
        output = graph_to_graphml(GraphFactory())
        root = parse_output(output)

        assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<graphml ')
        assert 'xmlns="http://graphml.graphdrawing.org/xmlns"' in output
        assert [child.tag for child in root] == ["key", "graph"]
        assert root.find("graph").attrib == {"id": "graph", "edgedefault": "undirected"}

    def test_mutual_written_as_directed(self):
        """Test the mutual edge type has no GraphML equivalent and becomes directed."""
        graph = GraphFactory(attributes=GraphAttributes(edge_type="mutual"))

        assert parse_output(graph_to_graphml(graph)).find("graph").get("edgedefault") == "directed"

    def test_synthesized_reserved_keys(self):
        """Test reserved fields present in the data get typed keys."""
        graph = GraphFactory(
            nodes=[NodeFactory(id="a", label=None, x=1.0), NodeFactory(id="b", label="B", color=IntegerRGB(1, 2, 3))],
            edges=[EdgeFactory(source="a", target="b", weight=2, thickness=1, undirected=True)],
        )

        root = parse_output(graph_to_graphml(graph))

        assert key_declarations(root, "node") == {"x": "float", "label": "string", "r": "int", "g": "int", "b": "int"}
        assert key_declarations(root, "edge") == {"weight": "float", "thickness": "float"}

    def test_declared_and_undeclared_attribute_keys(self):
        """Test declared descriptors and inferred undeclared attributes become keys."""
        graph = GraphFactory(
            nodes=[NodeFactory(label=None, attributes={"age": 3, "vip": False, "city": "Oslo"})],
            node_attributes=[AttributeDescriptor(id="city", title="City", type=AttributeType.STRING)],
        )

        root = parse_output(graph_to_graphml(graph))

        assert list(key_declarations(root, "node").items()) == [
            ("city", "string"),
            ("age", "double"),
            ("vip", "boolean"),
        ]
        assert all(key.get("attr.name") == key.get("id") for key in root.findall("key"))

    def test_undeclared_attributes_without_synthesis(self, monkeypatch):
        """Test undeclared attributes get no key when synthesis is off; reserved keys still do."""
        monkeypatch.setattr(graphml_converter.converter_config, "SYNTHESIZE_KEYS", False)
        graph = GraphFactory(nodes=[NodeFactory(x=1.0, label=None, attributes={"age": 3})])

        root = parse_output(graph_to_graphml(graph))

        assert key_declarations(root, "node") == {"x": "float"}

    def test_node_data(self):
        """Test reserved fields, color channels and attributes as data."""
        node = NodeFactory(id="a", label="A", color=IntegerRGB(1, 2, 3), x=0.5, attributes={"on": True})

        elem = parse_output(graph_to_graphml(GraphFactory(nodes=[node]))).find("graph/node")

        assert elem.attrib == {"id": "a"}
        assert [data.get("key") for data in elem] == ["label", "r", "g", "b", "x", "on"]
        assert data_values(elem) == {"label": "A", "r": "1", "g": "2", "b": "3", "x": "0.5", "on": "true"}

    def test_edge_data(self):
        """Test edge structure and omitted Graphology fields."""
        edge = EdgeFactory(id="e", source="a", target="b", weight=3.0, key="k", undirected=False)

        elem = parse_output(graph_to_graphml(GraphFactory(edges=[edge]))).find("graph/edge")

        assert elem.attrib == {"id": "e", "source": "a", "target": "b"}
        assert data_values(elem) == {"weight": "3"}

    def test_ampersand_escaped_once(self):
        """Test ampersands in data text are escaped exactly once."""
        output = graph_to_graphml(graph_from_graphml(SAMPLE_GRAPHML))

        assert "R&amp;D hub" in output
        assert "&amp;amp;" not in output

    def test_round_trip(self):
        """Test GraphML to GraphML keeps the whole graph."""
        graph = graph_from_graphml(SAMPLE_GRAPHML)

        again = graph_from_graphml(graph_to_graphml(graph))

        assert again == graph

    def test_shared_names_get_unique_key_ids(self):
        """Test a name used by node and edge keys gets distinct ids but the same attr.name."""
        graph = GraphFactory(
            nodes=[NodeFactory(id="n0", attributes={"note": "a"}), NodeFactory(id="n1", color=IntegerRGB(1, 2, 3))],
            edges=[EdgeFactory(source="n0", target="n1", color=IntegerRGB(4, 5, 6), attributes={"note": "b"})],
        )

        output = graph_to_graphml(graph)
        root = parse_output(output)
        key_ids = [key.get("id") for key in root.findall("key")]

        assert len(key_ids) == len(set(key_ids))
        assert key_declarations(root, "edge") == {"edge_note": "string", "edge_r": "int", "edge_g": "int", "edge_b": "int"}
        assert {key.get("attr.name") for key in root.findall("key") if key.get("for") == "edge"} == {"note", "r", "g", "b"}
        assert data_values(root.find("graph/edge")) == {"edge_r": "4", "edge_g": "5", "edge_b": "6", "edge_note": "b"}

        edge = graph_from_graphml(output).edges[0]
        assert edge.color == IntegerRGB(4, 5, 6)
        assert edge.attributes == {"note": "b"}

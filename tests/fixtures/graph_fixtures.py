"""Sample graph documents shared by the converter tests."""

import copy

# Generic JSON document mixing top-level and nested free-form attributes
SAMPLE_JSON = {
    "attributes": {"id": "social", "edgeType": "directed", "mode": "static"},
    "nodes": [
        {"id": "n1", "label": "Alice", "color": "#ff0000", "x": 1.5, "y": -2, "size": 10, "age": 30, "vip": True},
        {"id": "n2", "label": "Bob & Co", "attributes": {"age": 25, "city": "Paris"}},
        {"id": "n3", "label": "Carol", "age": "unknown"},
    ],
    "edges": [
        {"id": "e1", "source": "n1", "target": "n2", "size": 2, "kind": "friend"},
        {"id": "e2", "source": "n2", "target": "n3", "weight": 0.5, "color": "blue"},
    ],
}

# Graphology export: identifiers under "key", data under "attributes"
SAMPLE_GRAPHOLOGY = {
    "options": {"type": "directed", "multi": False, "allowSelfLoops": True},
    "attributes": {"name": "citations"},
    "nodes": [
        {"key": "a", "attributes": {"label": "Paper A", "x": 0, "y": 1, "color": "rgb(0, 128, 255)", "year": 2019}},
        {"key": "b", "attributes": {"label": "Paper B", "year": 2021}},
    ],
    "edges": [
        {"key": "ab", "source": "a", "target": "b", "attributes": {"size": 3, "context": "intro"}},
        {"source": "b", "target": "a", "undirected": False, "attributes": {"context": "related"}},
    ],
}

SAMPLE_GEXF = """<?xml version="1.0" encoding="UTF-8"?>
<gexf xmlns="http://www.gexf.net/1.3" xmlns:viz="http://www.gexf.net/1.3/viz" version="1.3">
  <graph id="movies" mode="dynamic" defaultedgetype="directed">
    <attributes class="node" mode="static">
      <attribute id="year" title="Release year" type="integer"/>
      <attribute id="seen" title="seen" type="boolean"/>
      <attribute id="genre" title="genre" type="string"/>
    </attributes>
    <attributes class="edge" mode="static">
      <attribute id="since" title="since" type="double"/>
    </attributes>
    <nodes>
      <node id="m1" label="Heat" start="1995" pid="p0">
        <attvalues>
          <attvalue for="year" value="1995"/>
          <attvalue for="seen" value="True"/>
          <attvalue for="genre" value="Crime &amp; Drama"/>
        </attvalues>
        <viz:color r="10" g="20" b="30" a="0.5"/>
        <viz:position x="1.5" y="2" z="0.0"/>
        <viz:size value="12"/>
        <viz:shape value="disc"/>
      </node>
      <node id="m2" label="Ronin">
        <viz:color hex="#00ff00"/>
      </node>
    </nodes>
    <edges>
      <edge id="r1" source="m1" target="m2" weight="3" label="remake">
        <attvalues>
          <attvalue for="since" value="2.5"/>
        </attvalues>
        <viz:thickness value="4"/>
      </edge>
    </edges>
  </graph>
</gexf>
"""

# Single node, single edge and no attribute blocks
MINIMAL_GEXF = """<?xml version="1.0" encoding="UTF-8"?>
<gexf xmlns="http://www.gexf.net/1.2draft" version="1.2">
  <graph defaultedgetype="undirected">
    <nodes>
      <node id="only"/>
    </nodes>
    <edges>
      <edge source="only" target="only"/>
    </edges>
  </graph>
</gexf>
"""

# Keys numbered the way networkx writes them
SAMPLE_GRAPHML = """<?xml version="1.0" encoding="UTF-8"?>
<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
  <key id="d0" for="node" attr.name="label" attr.type="string"/>
  <key id="d1" for="node" attr.name="x" attr.type="float"/>
  <key id="d2" for="node" attr.name="y" attr.type="float"/>
  <key id="d3" for="node" attr.name="z" attr.type="float"/>
  <key id="d4" for="node" attr.name="r" attr.type="int"/>
  <key id="d5" for="node" attr.name="g" attr.type="int"/>
  <key id="d6" for="node" attr.name="b" attr.type="int"/>
  <key id="d7" for="node" attr.name="population" attr.type="long"/>
  <key id="d8" for="node" attr.name="capital" attr.type="boolean"/>
  <key id="d9" for="edge" attr.name="weight" attr.type="double"/>
  <key id="d10" for="all" attr.name="note" attr.type="string"/>
  <key id="d11" for="node" attr.name="id" attr.type="string"/>
  <graph id="cities" edgedefault="undirected">
    <node id="paris">
      <data key="d0">Paris</data>
      <data key="d1">2.35</data>
      <data key="d2">48.85</data>
      <data key="d3">35</data>
      <data key="d4">0</data>
      <data key="d5">0</data>
      <data key="d6">255</data>
      <data key="d7">2161000</data>
      <data key="d8">true</data>
      <data key="d10">R&amp;D hub</data>
      <data key="d11">ignored</data>
    </node>
    <node id="lyon">
      <data key="d0">Lyon</data>
      <data key="d8">false</data>
    </node>
    <edge id="p-l" source="paris" target="lyon">
      <data key="d9">465</data>
      <data key="d10">TGV</data>
    </edge>
  </graph>
</graphml>
"""

# Keys named after the attributes, as written by graph_to_graphml
NAMED_KEYS_GRAPHML = """<?xml version="1.0" encoding="UTF-8"?>
<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
  <key id="color" for="edge" attr.name="color" attr.type="string"/>
  <key id="shape" for="node" attr.name="shape" attr.type="string"/>
  <graph edgedefault="directed">
    <node id="1"><data key="shape">square</data></node>
    <node id="2"/>
    <edge source="1" target="2"><data key="color">#123456</data></edge>
  </graph>
</graphml>
"""

MALFORMED_XML = "<gexf><graph><nodes></graph></gexf>"

ENTITY_EXPANSION_XML = """<?xml version="1.0"?>
<!DOCTYPE lolz [<!ENTITY lol "lol"><!ENTITY lol2 "&lol;&lol;&lol;">]>
<gexf><graph><nodes><node id="&lol2;"/></nodes><edges/></graph></gexf>
"""


def sample_json():
    """Fresh deep copy of SAMPLE_JSON."""
    return copy.deepcopy(SAMPLE_JSON)


def sample_graphology():
    """Fresh deep copy of SAMPLE_GRAPHOLOGY."""
    return copy.deepcopy(SAMPLE_GRAPHOLOGY)

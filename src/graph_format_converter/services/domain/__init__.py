"""
Domain Layer

This package contains the conversion logic organized by domain area.
Domain services translate between external documents and the canonical graph
model and never read or write files themselves.

Domains:
- color: color normalization shared by all formats
- schema: attribute type inference, reserved keys, typed value recovery
- json_graph: generic JSON and Graphology documents
- gexf: GEXF 1.3 documents
- graphml: GraphML documents
"""

"""
GraphML Conversion Domain

Reads and writes GraphML documents, synthesizing key declarations for
reserved fields and undeclared attributes on export.
"""

from .converter import graph_from_graphml, graph_to_graphml

__all__ = ["graph_from_graphml", "graph_to_graphml"]

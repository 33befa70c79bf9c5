"""
JSON / Graphology Conversion Domain

Handles conversion between the canonical graph model and the two JSON-based
graph documents (generic JSON and Graphology exports).
"""

from .converter import graph_from_graphology, graph_from_json, graph_to_graphology, graph_to_json

__all__ = ["graph_from_json", "graph_from_graphology", "graph_to_json", "graph_to_graphology"]

"""
GEXF Conversion Domain

Reads and writes GEXF 1.3 documents, including the viz extension used for
color, position, size, thickness and shape.
"""

from .converter import graph_from_gexf, graph_to_gexf

__all__ = ["graph_from_gexf", "graph_to_gexf"]

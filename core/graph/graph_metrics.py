"""
Graph Metrics — summary statistics for a graph snapshot.

Time Complexity: O(V + E)
Memory: O(V + E) for the simplified copy
"""

from typing import Any, Dict, Optional

import networkx as nx

from core.graph.duplicate_edges import DuplicateEdgeDetector
from core.graph.graph_model import GraphSnapshot


def compute_graph_summary(
    graph: GraphSnapshot, detector: Optional[DuplicateEdgeDetector] = None
) -> Dict[str, Any]:
    """Return basic graph-level metrics."""
    detector = detector or DuplicateEdgeDetector(graph)
    simple = nx.Graph(graph.graph)
    simple.remove_edges_from(list(nx.selfloop_edges(simple)))
    return {
        "total_vertices": graph.vertex_count(),
        "total_edges": detector.count_total_edges,
        "unique_edges": detector.count_unique_edges,
        "edges_with_duplicates": detector.count_edges_with_duplicates,
        "self_loops": nx.number_of_selfloops(graph.graph),
        "density": round(nx.density(simple), 4),
        "connected_components": nx.number_connected_components(simple),
    }

"""
Graph Builder — constructs an undirected multigraph snapshot from edge data.

Nodes are vertex IDs. Each row of the edge table becomes one edge, so
repeated rows produce duplicate edges and rows whose endpoints match produce
self-loops. Both are kept; the metric calculators decide how to treat them.

Time Complexity: O(E) where E = number of edge rows
Memory: O(V + E)
"""

from typing import Hashable, Iterable, Optional, Tuple

import networkx as nx
import pandas as pd

from app.config import EDGE_VERTEX1_COLUMN, EDGE_VERTEX2_COLUMN
from core.graph.graph_model import GraphSnapshot
from utils.validators import validate_edge_frame


def build_graph(
    df: pd.DataFrame, vertices: Optional[Iterable[Hashable]] = None
) -> GraphSnapshot:
    """
    Build a graph snapshot from an edge DataFrame.

    Args:
        df: DataFrame with endpoint columns [vertex1, vertex2]
        vertices: optional extra vertex IDs, e.g. isolated vertices that
            appear in no edge row

    Raises:
        ValueError: if the edge table fails validation
    """
    error = validate_edge_frame(df)
    if error:
        raise ValueError(error)

    G = nx.MultiGraph()
    if vertices is not None:
        G.add_nodes_from(vertices)

    # zip is much faster than iterrows()
    G.add_edges_from(zip(df[EDGE_VERTEX1_COLUMN], df[EDGE_VERTEX2_COLUMN]))
    return GraphSnapshot(G)


def build_graph_from_edges(
    edges: Iterable[Tuple[Hashable, Hashable]],
    vertices: Optional[Iterable[Hashable]] = None,
) -> GraphSnapshot:
    """Build a graph snapshot from (vertex1, vertex2) pairs."""
    return GraphSnapshot.from_edges(edges, vertices or ())

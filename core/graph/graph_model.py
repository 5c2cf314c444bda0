"""
Graph Model — read-only undirected graph snapshot used by metric calculators.

Wraps a frozen NetworkX MultiGraph so duplicate edges and self-loops are
stored as given, and builds a collapsed adjacency map once at construction:
each vertex maps to the frozenset of its distinct neighbors, itself excluded.

Time Complexity: O(V + E) to build, O(1) expected per adjacency lookup
Memory: O(V + E)
"""

from typing import Dict, FrozenSet, Hashable, Iterable, List, Tuple

import networkx as nx

Vertex = Hashable
EdgePair = Tuple[Vertex, Vertex]


class GraphSnapshot:
    """Immutable view of vertices and edges for the duration of a computation."""

    def __init__(self, graph: nx.Graph):
        # Private undirected copy; the caller keeps a mutable graph
        H = nx.MultiGraph()
        H.add_nodes_from(graph.nodes)
        H.add_edges_from((u, v) for u, v in graph.edges())
        self._graph = nx.freeze(H)
        self._adjacency: Dict[Vertex, FrozenSet[Vertex]] = {
            v: frozenset(u for u in H.adj[v] if u != v) for v in H.nodes
        }

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> "GraphSnapshot":
        """
        Snapshot any NetworkX graph as an undirected multigraph.

        Parallel edges are kept. For directed input, A→B and B→A become two
        edges over the same unordered pair.
        """
        return cls(G)

    @classmethod
    def from_edges(
        cls, edges: Iterable[EdgePair], vertices: Iterable[Vertex] = ()
    ) -> "GraphSnapshot":
        H = nx.MultiGraph()
        H.add_nodes_from(vertices)
        H.add_edges_from(edges)
        return cls(H)

    @property
    def graph(self) -> nx.MultiGraph:
        """The underlying frozen graph; mutation raises NetworkXError."""
        return self._graph

    def vertices(self) -> List[Vertex]:
        return list(self._adjacency)

    def vertex_count(self) -> int:
        return len(self._adjacency)

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def neighbors(self, v: Vertex) -> FrozenSet[Vertex]:
        """Distinct vertices adjacent to v, excluding v itself."""
        return self._adjacency[v]

    def has_edge(self, a: Vertex, b: Vertex) -> bool:
        """True if at least one edge connects a and b (a != b)."""
        return b in self._adjacency[a]

    def edge_pairs(self) -> List[EdgePair]:
        """Every stored edge as a vertex pair, duplicates and self-loops included."""
        return [(u, v) for u, v in self._graph.edges()]

    def __contains__(self, v: Vertex) -> bool:
        return v in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def __repr__(self) -> str:
        return (
            f"GraphSnapshot(vertices={self.vertex_count()}, "
            f"edges={self.edge_count()})"
        )

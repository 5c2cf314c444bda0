"""
Duplicate-Edge Detection.

Reports whether any two edges connect the same unordered vertex pair.
Self-loops are ignored. The flag is advisory: clustering coefficients are
still computed for multigraphs, but consumers should mark them unreliable.

Time Complexity: O(E)
Memory: O(E) for the seen-pair set
"""

from collections import Counter
from typing import Hashable, Optional

from core.graph.graph_model import GraphSnapshot


def normalize_pair(a: Hashable, b: Hashable) -> Hashable:
    """Order-independent key for an undirected vertex pair."""
    try:
        return (a, b) if a <= b else (b, a)
    except TypeError:
        return frozenset((a, b))


def has_duplicate_edges(graph: GraphSnapshot) -> bool:
    """Return True on the first unordered vertex pair seen twice."""
    seen = set()
    for a, b in graph.edge_pairs():
        if a == b:
            continue
        pair = normalize_pair(a, b)
        if pair in seen:
            return True
        seen.add(pair)
    return False


class DuplicateEdgeDetector:
    """
    Duplicate-edge counts for one graph snapshot.

    Meant to be created once per metrics pass and shared by every metric
    calculator in it. Counts are computed on first access.
    """

    def __init__(self, graph: GraphSnapshot):
        self._graph = graph
        self._pair_counts: Optional[Counter] = None
        self._self_loops = 0

    def _count(self) -> Counter:
        if self._pair_counts is None:
            counts: Counter = Counter()
            self_loops = 0
            for a, b in self._graph.edge_pairs():
                if a == b:
                    self_loops += 1
                    continue
                counts[normalize_pair(a, b)] += 1
            self._pair_counts = counts
            self._self_loops = self_loops
        return self._pair_counts

    @property
    def graph_contains_duplicate_edges(self) -> bool:
        return self.count_edges_with_duplicates > 0

    @property
    def count_edges_with_duplicates(self) -> int:
        """Edges whose vertex pair is shared with at least one other edge."""
        return sum(n for n in self._count().values() if n > 1)

    @property
    def count_unique_edges(self) -> int:
        """Edges whose vertex pair appears exactly once, self-loops included."""
        unique = sum(1 for n in self._count().values() if n == 1)
        return unique + self._self_loops

    @property
    def count_total_edges(self) -> int:
        return self._graph.edge_count()

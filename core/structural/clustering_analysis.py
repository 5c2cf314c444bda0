"""
Local Clustering Coefficient Analysis.

For a vertex v with k distinct neighbors, the coefficient is the fraction of
neighbor pairs that are themselves adjacent:

    C(v) = 2·T(v) / (k·(k − 1)),   C(v) = 0.0 when k < 2

Duplicate edges are collapsed and self-loops ignored, so the result matches
networkx.clustering on the simplified graph.

Time Complexity: O(Σ deg(v)²) with hash-based adjacency
Memory: O(V)
"""

import logging
from typing import Any, Dict, Hashable, Optional, Tuple

import numpy as np

from app.config import VERTICES_PER_PROGRESS_REPORT
from core.calculation.driver import CancellableCalculation, ProgressSink
from core.graph.graph_model import GraphSnapshot

logger = logging.getLogger(__name__)

STATUS_MESSAGE = "Calculating clustering coefficients."


def calculate_vertex_clustering_coefficient(graph: GraphSnapshot, vertex: Hashable) -> float:
    """Clustering coefficient of a single vertex."""
    neighbors = graph.neighbors(vertex)
    k = len(neighbors)
    if k < 2:
        return 0.0

    # Each connected neighbor pair is seen once from each end
    links = sum(len(graph.neighbors(a) & neighbors) for a in neighbors) // 2
    return 2.0 * links / (k * (k - 1))


def compute_clustering_coefficients(
    graph: GraphSnapshot,
    cancellation_token: Any = None,
    progress_sink: Optional[ProgressSink] = None,
    check_interval: int = VERTICES_PER_PROGRESS_REPORT,
) -> Tuple[bool, Dict[Hashable, float]]:
    """
    Compute the clustering coefficient of every vertex.

    Returns:
        (completed, coefficients). When cancellation is observed,
        completed is False and coefficients is empty.
    """
    calculation = CancellableCalculation(STATUS_MESSAGE, check_interval)
    completed, coefficients = calculation.run(
        graph.vertices(),
        lambda v: calculate_vertex_clustering_coefficient(graph, v),
        cancellation_token,
        progress_sink,
    )
    if completed:
        logger.debug("Clustering coefficients computed for %d vertices", len(coefficients))
    return completed, coefficients


class ClusteringCoefficientCalculator:
    """Metric calculator producing per-vertex clustering coefficients."""

    name = "clustering_coefficient"
    status = STATUS_MESSAGE

    def __init__(self, check_interval: int = VERTICES_PER_PROGRESS_REPORT):
        self.check_interval = check_interval

    def try_calculate(
        self,
        graph: GraphSnapshot,
        cancellation_token: Any = None,
        progress_sink: Optional[ProgressSink] = None,
    ) -> Tuple[bool, Dict[Hashable, float]]:
        return compute_clustering_coefficients(
            graph, cancellation_token, progress_sink, self.check_interval
        )


def summarize_coefficients(coefficients: Dict[Hashable, float]) -> Dict[str, Any]:
    """Graph-level statistics over a completed coefficient mapping."""
    if not coefficients:
        return {
            "vertices": 0,
            "average": 0.0,
            "median": 0.0,
            "minimum": 0.0,
            "maximum": 0.0,
            "fully_clustered": 0,
            "unclustered": 0,
        }

    values = np.fromiter(coefficients.values(), dtype=float, count=len(coefficients))
    return {
        "vertices": int(values.size),
        "average": round(float(values.mean()), 4),
        "median": round(float(np.median(values)), 4),
        "minimum": round(float(values.min()), 4),
        "maximum": round(float(values.max()), 4),
        "fully_clustered": int(np.count_nonzero(values == 1.0)),
        "unclustered": int(np.count_nonzero(values == 0.0)),
    }

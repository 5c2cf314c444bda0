"""
Metric Columns — hand-off between metric calculators and the result assembler.

Calculators key their results by vertex ID. The consumer owns the mapping
from vertex IDs to display rows and is queried through ``RowIdLookup``;
vertices without a row (hidden or filtered rows) are dropped silently.

Time Complexity: O(V)
Memory: O(V)
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Mapping, Optional, Protocol

from app.config import CLUSTERING_COEFFICIENT_NUMERIC_FORMAT
from core.graph.duplicate_edges import DuplicateEdgeDetector
from core.graph.graph_model import GraphSnapshot

STYLE_GOOD = "GraphMetricGood"
STYLE_BAD = "GraphMetricBad"

VERTICES_WORKSHEET = "Vertices"
VERTICES_TABLE = "Vertices"
CLUSTERING_COEFFICIENT_COLUMN = "Clustering Coefficient"
CLUSTERING_COEFFICIENT_COLUMN_WIDTH = 12.7


class RowIdLookup(Protocol):
    def try_get_row_id(self, vertex: Hashable) -> Optional[int]:
        """Display-row ID for a vertex, or None when it has no row."""


class DictRowIdLookup:
    """RowIdLookup backed by a plain mapping."""

    def __init__(self, row_ids: Mapping[Hashable, int]):
        self._row_ids = dict(row_ids)

    def try_get_row_id(self, vertex: Hashable) -> Optional[int]:
        return self._row_ids.get(vertex)


@dataclass(frozen=True)
class GraphMetricValueWithID:
    row_id: int
    value: float


@dataclass
class GraphMetricColumn:
    worksheet_name: str
    table_name: str
    column_name: str
    column_width: float
    number_format: str
    style: str
    values: List[GraphMetricValueWithID] = field(default_factory=list)

    @property
    def reliable(self) -> bool:
        return self.style != STYLE_BAD

    def as_dict(self) -> Dict[int, float]:
        return {v.row_id: v.value for v in self.values}


def metric_style(detector: Optional[DuplicateEdgeDetector]) -> str:
    """Duplicate edges invalidate the metric, so flag it with the bad style."""
    if detector is not None and detector.graph_contains_duplicate_edges:
        return STYLE_BAD
    return STYLE_GOOD


def build_clustering_coefficient_columns(
    graph: GraphSnapshot,
    coefficients: Mapping[Hashable, float],
    lookup: RowIdLookup,
    detector: Optional[DuplicateEdgeDetector] = None,
) -> List[GraphMetricColumn]:
    """Package completed coefficients as one vertex-table column."""
    values: List[GraphMetricValueWithID] = []
    for vertex in graph.vertices():
        row_id = lookup.try_get_row_id(vertex)
        if row_id is not None:
            values.append(GraphMetricValueWithID(row_id, coefficients[vertex]))

    return [
        GraphMetricColumn(
            worksheet_name=VERTICES_WORKSHEET,
            table_name=VERTICES_TABLE,
            column_name=CLUSTERING_COEFFICIENT_COLUMN,
            column_width=CLUSTERING_COEFFICIENT_COLUMN_WIDTH,
            number_format=CLUSTERING_COEFFICIENT_NUMERIC_FORMAT,
            style=metric_style(detector),
            values=values,
        )
    ]

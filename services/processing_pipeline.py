"""
Processing Pipeline — graph metric calculation manager.

Coordinates one metrics pass over a graph snapshot:
   1. Duplicate-edge detection (once, shared by every calculator)
   2. Clustering coefficients (cancellable, with progress)
   3. Packaging results as vertex-table columns via the row-ID lookup

The pass either completes or is cancelled as a whole; a cancelled pass
returns (False, []) and no columns.
"""

import contextlib
import logging
import time
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from app.config import CALCULATE_CLUSTERING_COEFFICIENT, VERTICES_PER_PROGRESS_REPORT
from core.calculation.driver import ProgressSink
from core.graph.duplicate_edges import DuplicateEdgeDetector
from core.graph.graph_model import GraphSnapshot
from core.output.metric_columns import (
    GraphMetricColumn,
    RowIdLookup,
    build_clustering_coefficient_columns,
)
from core.structural.clustering_analysis import ClusteringCoefficientCalculator
from utils.metrics import MetricsTracker

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def log_timer(label: str):
    start = time.time()
    yield
    elapsed = time.time() - start
    logger.info("Module [%s] took %.4f seconds", label, elapsed)


@dataclass
class GraphMetricUserSettings:
    """Which metrics the user asked for."""

    calculate_clustering_coefficient: bool = CALCULATE_CLUSTERING_COEFFICIENT


class GraphMetricsService:
    """Runs the enabled metric calculators over one graph snapshot."""

    def __init__(
        self,
        settings: Optional[GraphMetricUserSettings] = None,
        check_interval: int = VERTICES_PER_PROGRESS_REPORT,
        tracker: Optional[MetricsTracker] = None,
    ):
        self.settings = settings or GraphMetricUserSettings()
        self.check_interval = check_interval
        self.tracker = tracker

    def calculate(
        self,
        graph: GraphSnapshot,
        lookup: RowIdLookup,
        cancellation_token: Any = None,
        progress_sink: Optional[ProgressSink] = None,
        detector: Optional[DuplicateEdgeDetector] = None,
    ) -> Tuple[bool, List[GraphMetricColumn]]:
        """
        Calculate every enabled metric.

        Returns:
            (True, columns) on completion, (False, []) if the user cancelled.
        """
        t_start = time.time()
        logger.info("Starting metrics pass on %r", graph)

        detector = detector or DuplicateEdgeDetector(graph)
        if detector.graph_contains_duplicate_edges:
            logger.warning(
                "Graph has %d edges with duplicates; clustering coefficients will be flagged",
                detector.count_edges_with_duplicates,
            )

        columns: List[GraphMetricColumn] = []

        if self.settings.calculate_clustering_coefficient:
            calculator = ClusteringCoefficientCalculator(self.check_interval)
            with log_timer(calculator.name):
                completed, coefficients = calculator.try_calculate(
                    graph, cancellation_token, progress_sink
                )
            if not completed:
                self._record(False, graph, t_start)
                return False, []
            columns.extend(
                build_clustering_coefficient_columns(graph, coefficients, lookup, detector)
            )

        self._record(True, graph, t_start)
        return True, columns

    def _record(self, completed: bool, graph: GraphSnapshot, t_start: float) -> None:
        elapsed = round(time.time() - t_start, 4)
        logger.info(
            "Metrics pass %s in %.4f seconds",
            "completed" if completed else "cancelled", elapsed,
        )
        if self.tracker is not None:
            self.tracker.record({
                "completed": completed,
                "total_vertices": graph.vertex_count(),
                "total_edges": graph.edge_count(),
                "processing_time_seconds": elapsed,
            })

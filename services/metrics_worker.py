"""
Metrics Worker — runs a cancellable graph calculation on a background thread.

The controlling thread starts the worker, may cancel it at any time, drains
progress notifications from a queue at its own pace, and collects the
(completed, result) outcome with ``wait``.
"""

import logging
import threading
from typing import Any, Callable, List, Optional, Tuple

from app.config import WORKER_JOIN_TIMEOUT
from core.calculation.driver import (
    CalculationState,
    CancellationToken,
    GraphMetricProgress,
    ProgressSink,
    QueueProgressSink,
)
from core.graph.graph_model import GraphSnapshot
from core.output.metric_columns import RowIdLookup
from core.structural.clustering_analysis import compute_clustering_coefficients
from services.processing_pipeline import GraphMetricsService

logger = logging.getLogger(__name__)

Job = Callable[[CancellationToken, ProgressSink], Tuple[bool, Any]]


class MetricsWorker:
    """Single-use background runner for one cancellable job."""

    def __init__(self, job: Job, name: str = "metrics-worker"):
        self._job = job
        self._name = name
        self.token = CancellationToken()
        self.progress = QueueProgressSink()
        self._thread: Optional[threading.Thread] = None
        self._state = CalculationState.IDLE
        self._outcome: Tuple[bool, Any] = (False, None)
        self._error: Optional[BaseException] = None

    @classmethod
    def for_clustering_coefficients(cls, graph: GraphSnapshot) -> "MetricsWorker":
        return cls(
            lambda token, sink: compute_clustering_coefficients(graph, token, sink),
            name="clustering-coefficients",
        )

    @classmethod
    def for_metrics_pass(
        cls,
        graph: GraphSnapshot,
        lookup: RowIdLookup,
        service: Optional[GraphMetricsService] = None,
    ) -> "MetricsWorker":
        service = service or GraphMetricsService()
        return cls(
            lambda token, sink: service.calculate(graph, lookup, token, sink),
            name="graph-metrics",
        )

    @property
    def state(self) -> CalculationState:
        return self._state

    @property
    def result(self) -> Tuple[bool, Any]:
        return self._outcome

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Worker already started")
        self._state = CalculationState.RUNNING
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info("Worker [%s] started", self._name)

    def cancel(self) -> None:
        """Request cancellation; the job notices at its next check point."""
        self.token.cancel()

    def drain_progress(self) -> List[GraphMetricProgress]:
        return self.progress.drain()

    def wait(self, timeout: Optional[float] = WORKER_JOIN_TIMEOUT) -> Tuple[bool, Any]:
        """
        Block until the job finishes and return its (completed, result).

        Raises:
            RuntimeError: if the worker was never started
            TimeoutError: if the job is still running after ``timeout``
            Exception: whatever the job itself raised
        """
        if self._thread is None:
            raise RuntimeError("Worker not started")
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise TimeoutError(f"Worker [{self._name}] still running after {timeout}s")
        if self._error is not None:
            raise self._error
        return self._outcome

    def _run(self) -> None:
        try:
            completed, result = self._job(self.token, self.progress)
        except Exception as e:
            logger.exception("Worker [%s] failed", self._name)
            self._error = e
            self._state = CalculationState.FAILED
            return
        self._outcome = (completed, result)
        self._state = CalculationState.COMPLETED if completed else CalculationState.CANCELLED
        logger.info("Worker [%s] finished: %s", self._name, self._state.value)

"""
Processing statistics tracker.

Stores statistics from the most recent metrics pass plus running totals of
completed and cancelled passes.

Time Complexity: O(1) per operation
Memory: O(1)
"""

import threading
from typing import Any, Dict


class MetricsTracker:
    """Tracks metrics-pass statistics; safe to share between threads."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last_metrics: Dict[str, Any] = {
            "status": "no_processing_yet",
            "total_runs": 0,
        }
        self._total_runs: int = 0
        self._cancelled_runs: int = 0

    def record(self, summary: Dict[str, Any]) -> None:
        """Record statistics from a metrics pass."""
        with self._lock:
            self._total_runs += 1
            if not summary.get("completed", True):
                self._cancelled_runs += 1
            self._last_metrics = {
                "status": "ready",
                "total_runs": self._total_runs,
                "cancelled_runs": self._cancelled_runs,
                "last_run": summary,
            }

    def get_metrics(self) -> Dict[str, Any]:
        """Return the latest statistics."""
        with self._lock:
            return dict(self._last_metrics)

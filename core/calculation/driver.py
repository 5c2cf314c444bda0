"""
Cancellable Computation Driver.

Runs a per-item computation (typically one step per vertex) while polling a
cancellation token and pushing progress at a fixed cadence. Cancellation is
terminal: the run returns (False, {}) and the partial result is dropped.

States: IDLE → RUNNING → COMPLETED | CANCELLED
A background worker whose job raises ends in FAILED.

Time Complexity: O(n) driver overhead for n items
Memory: O(n) for the result mapping
"""

import enum
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, Sequence, Tuple

from app.config import VERTICES_PER_PROGRESS_REPORT

logger = logging.getLogger(__name__)


class CalculationState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class GraphMetricProgress:
    """One progress notification."""

    processed: int
    total: int
    status: str = ""

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 100.0
        return round(100.0 * self.processed / self.total, 2)


ProgressSink = Callable[[GraphMetricProgress], None]


class CancellationToken:
    """Cancellation flag written by the controller, polled by the worker."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class QueueProgressSink:
    """Progress sink that hands notifications to the controller via a queue."""

    def __init__(self, channel: Optional["queue.Queue[GraphMetricProgress]"] = None):
        self.channel: "queue.Queue[GraphMetricProgress]" = channel or queue.Queue()

    def __call__(self, progress: GraphMetricProgress) -> None:
        self.channel.put_nowait(progress)

    def drain(self) -> list:
        """Return every notification queued so far, in emission order."""
        items = []
        while True:
            try:
                items.append(self.channel.get_nowait())
            except queue.Empty:
                return items


def is_cancellation_requested(token: Any) -> bool:
    """Poll a token exposing ``is_cancelled`` as an attribute or a method."""
    if token is None:
        return False
    flag = token.is_cancelled
    if callable(flag):
        flag = flag()
    return bool(flag)


class CancellableCalculation:
    """
    Single-use driver for a per-item computation.

    Args:
        status: human-readable text attached to each progress report
        check_interval: items processed between cancellation checks and
            progress reports
    """

    def __init__(self, status: str = "", check_interval: int = VERTICES_PER_PROGRESS_REPORT):
        if check_interval < 1:
            raise ValueError("check_interval must be at least 1")
        self.status = status
        self.check_interval = check_interval
        self.state = CalculationState.IDLE

    def run(
        self,
        items: Sequence[Hashable],
        compute: Callable[[Hashable], Any],
        cancellation_token: Any = None,
        progress_sink: Optional[ProgressSink] = None,
    ) -> Tuple[bool, Dict[Hashable, Any]]:
        """
        Apply ``compute`` to every item.

        Returns:
            (True, {item: value}) when every item was processed, or
            (False, {}) if cancellation was observed at a check point.
        """
        if self.state is not CalculationState.IDLE:
            raise RuntimeError(f"Calculation already {self.state.value}")
        self.state = CalculationState.RUNNING

        total = len(items)
        results: Dict[Hashable, Any] = {}
        last_reported = -1

        # Empty inputs still observe a pending cancellation
        if total == 0 and is_cancellation_requested(cancellation_token):
            return self._cancel(0, total)

        for processed, item in enumerate(items):
            if processed % self.check_interval == 0:
                if is_cancellation_requested(cancellation_token):
                    return self._cancel(processed, total)
                self._report(progress_sink, processed, total)
                last_reported = processed
            results[item] = compute(item)

        if total > last_reported:
            self._report(progress_sink, total, total)
        self.state = CalculationState.COMPLETED
        return True, results

    def _cancel(self, processed: int, total: int) -> Tuple[bool, Dict[Hashable, Any]]:
        self.state = CalculationState.CANCELLED
        logger.warning(
            "Calculation [%s] cancelled after %d of %d items",
            self.status, processed, total,
        )
        return False, {}

    def _report(self, sink: Optional[ProgressSink], processed: int, total: int) -> None:
        if sink is not None:
            sink(GraphMetricProgress(processed, total, self.status))

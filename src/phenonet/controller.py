"""Interactive controller owning the current thresholds and derived graph."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from threading import Lock, Timer
from typing import Any

from phenonet.config import DEFAULT_ANCESTRY, ThresholdSet
from phenonet.errors import AncestryUnavailableError
from phenonet.models import DerivedGraph
from phenonet.pipeline import DerivationReport, DerivedGraphPipeline


logger = logging.getLogger(__name__)


class Debouncer:
    """Collapse bursts of triggers into one callback after ``delay`` seconds.

    Each trigger restarts the countdown. Callbacks never overlap.
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self.delay = delay
        self.callback = callback
        self._lock = Lock()
        self._run_lock = Lock()
        self._timer: Timer | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        if self.delay == 0:
            self._run()
            return

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = Timer(self.delay, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def flush(self) -> bool:
        """Run a pending callback now. Returns False when nothing was pending."""

        with self._lock:
            if self._timer is None:
                return False
            self._timer.cancel()
            self._timer = None
            self._generation += 1
        self._run()
        return True

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
        self._run()

    def _run(self) -> None:
        with self._run_lock:
            self.callback()


class GraphController:
    """Hold the active :class:`ThresholdSet` and the graph derived from it.

    Parameter changes replace the threshold set and schedule a debounced
    recomputation; the newest pass always wins.
    """

    def __init__(
        self,
        pipeline: DerivedGraphPipeline,
        *,
        thresholds: ThresholdSet | None = None,
        ancestries: Sequence[str] = (DEFAULT_ANCESTRY,),
        debounce_seconds: float | None = None,
        on_update: Callable[[DerivedGraph], None] | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.on_update = on_update
        self._lock = Lock()
        self._thresholds = thresholds or ThresholdSet()
        self._ancestries = tuple(ancestries)
        self._graph = DerivedGraph()
        self.report: DerivationReport | None = None
        self.last_error: AncestryUnavailableError | None = None
        delay = pipeline.profile.debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer = Debouncer(delay, self.recompute)

    @property
    def thresholds(self) -> ThresholdSet:
        with self._lock:
            return self._thresholds

    @property
    def ancestries(self) -> tuple[str, ...]:
        with self._lock:
            return self._ancestries

    @property
    def graph(self) -> DerivedGraph:
        with self._lock:
            return self._graph

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def update(self, **changes: Any) -> ThresholdSet:
        """Replace the thresholds with ``changes`` applied and schedule a pass."""

        with self._lock:
            self._thresholds = self._thresholds.with_changes(**changes)
            thresholds = self._thresholds
        self._debouncer.trigger()
        return thresholds

    def select_ancestries(self, ancestries: Sequence[str]) -> None:
        if not 1 <= len(ancestries) <= 2:
            raise ValueError("Please select only two ancestries.")
        with self._lock:
            self._ancestries = tuple(ancestries)
        self._debouncer.trigger()

    def flush(self) -> bool:
        return self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    def recompute(self) -> DerivedGraph:
        """Run one pass synchronously with the current parameters."""

        with self._lock:
            thresholds = self._thresholds
            ancestries = self._ancestries

        try:
            result = self.pipeline.run(thresholds, ancestries)
        except AncestryUnavailableError as exc:
            # The previous graph stays on display.
            logger.warning("%s", exc)
            with self._lock:
                self.last_error = exc
                return self._graph

        with self._lock:
            self._graph = result.graph
            self.report = result.report
            self.last_error = None

        if self.on_update is not None:
            self.on_update(result.graph)
        return result.graph

# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Fixed-interval driver for the array collector.

A cycle always runs to completion before the interval wait starts, so cycles
never overlap and a slow ssacli call pushes back the next poll. stop() ends
the wait early but does not interrupt a cycle in progress.
"""

import logging
import threading
import time
from typing import Optional

from ssa_exporter.collectors.array_collector import ArrayCollector

LOG = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0


class CollectionScheduler:
    """Runs ArrayCollector.collect() every `interval` seconds until stopped."""

    def __init__(self, collector: ArrayCollector, interval: float = DEFAULT_INTERVAL,
                 max_iterations: int = 0):
        """
        Args:
            collector: Collector to drive
            interval: Seconds to wait after each cycle
            max_iterations: Stop after this many cycles; 0 runs until stop()
        """
        self.collector = collector
        self.interval = interval
        self.max_iterations = max_iterations
        self.iteration = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run_once(self) -> None:
        """Run a single collection cycle; errors are logged, not raised."""
        self.iteration += 1
        time_start = time.monotonic()
        try:
            self.collector.collect()
        except Exception as e:
            LOG.error(f"Collection iteration {self.iteration} failed: {e}", exc_info=True)
        elapsed = time.monotonic() - time_start

        if elapsed >= self.interval:
            LOG.warning(f"Collection took {elapsed:.2f}s but interval is {self.interval}s")
        else:
            LOG.debug(f"Collection iteration {self.iteration} completed in {elapsed:.2f}s")

    def run(self) -> None:
        """Collect until stop() is called or max_iterations is reached."""
        LOG.info(f"Starting collection loop, interval {self.interval}s, "
                 f"iterations {self.max_iterations if self.max_iterations > 0 else 'unlimited'}")
        while not self._stop_event.is_set():
            self.run_once()

            if self.max_iterations > 0 and self.iteration >= self.max_iterations:
                LOG.info(f"Completed final iteration ({self.max_iterations}). Exiting collection loop.")
                break

            self._stop_event.wait(self.interval)
        LOG.info("Collection loop stopped")

    def start(self) -> threading.Thread:
        """Run the loop in a background daemon thread."""
        self._thread = threading.Thread(target=self.run, name='ssa-collector', daemon=True)
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

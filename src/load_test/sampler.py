#!/usr/bin/env python3
"""
Interval Sampler using Python schedule library
Closes a reporting interval on the aggregate state every N seconds
"""

import logging
import threading
from typing import Optional

import schedule

from .results import TestResults

logger = logging.getLogger(__name__)


class SamplerError(Exception):
    """Custom exception for sampler errors"""
    pass


class IntervalSampler:
    """
    Background ticker that calls TestResults.sample_interval()

    Uses a private schedule.Scheduler so several samplers (or a sampler and
    a report printer) never share the module-level default job list. The
    worker thread sleeps on a stop event for exactly the scheduler's
    idle_seconds, so stop() interrupts the wait immediately.
    """

    def __init__(self, results: TestResults, interval_seconds: float):
        """
        Initialize the sampler

        Args:
            results: Aggregate state to sample
            interval_seconds: Length of one reporting interval
        """
        if interval_seconds <= 0:
            raise SamplerError(f"Interval must be positive, got {interval_seconds}")

        self.results = results
        self.interval_seconds = interval_seconds
        self.scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start sampling in a daemon thread"""
        if self._thread is not None:
            raise SamplerError("Sampler already started")

        self.scheduler.every(self.interval_seconds).seconds.do(self.tick)
        self._thread = threading.Thread(
            target=self._run, name='interval-sampler', daemon=True
        )
        self._thread.start()
        logger.info(f"Interval sampler started (interval={self.interval_seconds}s)")

    def tick(self) -> None:
        """Sample one interval; errors are logged and the ticker keeps going"""
        try:
            self.results.sample_interval()
            self.ticks += 1
        except Exception as e:
            logger.error(f"Error sampling interval: {e}", exc_info=True)

    def _run(self) -> None:
        while not self._stop_event.is_set():
            idle = self.scheduler.idle_seconds
            if idle is None:
                break
            if idle > 0 and self._stop_event.wait(idle):
                break
            self.scheduler.run_pending()
        self.scheduler.clear()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop sampling and wait for the thread to exit

        Safe to call more than once, and before start().
        """
        self._stop_event.set()

        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Interval sampler did not stop within timeout")
            else:
                logger.info(f"Interval sampler stopped after {self.ticks} ticks")

#!/usr/bin/env python3
"""
Result Aggregator
Drains the inbound queue of worker outcomes into the aggregate state and
forwards failures to the failure sink
"""

import logging
import queue
import threading
from typing import Optional

from .outcome import Outcome
from .results import TestResults, ResultAggregatorError
from .sampler import IntervalSampler

logger = logging.getLogger(__name__)

# Placed on the inbound queue to signal that no more outcomes will arrive
END_OF_RESULTS = object()


class ResultAggregator:
    """
    Single writer for a run's TestResults

    Shutdown sequence: close() puts END_OF_RESULTS on the inbound queue,
    run() merges everything queued before it and exits, then the interval
    sampler is stopped. The results remain readable afterwards.
    """

    def __init__(
        self,
        results_queue: queue.Queue,
        interval_seconds: float,
        failure_queue: Optional[queue.Queue] = None,
        results: Optional[TestResults] = None
    ):
        """
        Initialize the aggregator

        Args:
            results_queue: Inbound queue of Outcome values
            interval_seconds: Reporting interval for the sampler
            failure_queue: Optional sink for test-failure and not-found outcomes
            results: Aggregate state to write to (default: a fresh TestResults)
        """
        self.results_queue = results_queue
        self.failure_queue = failure_queue
        self.results = results if results is not None else TestResults()
        self.sampler = IntervalSampler(self.results, interval_seconds)
        self._thread: Optional[threading.Thread] = None
        self.merged = 0
        self.forwarded = 0

    def close(self) -> None:
        """Signal that producers are done; run() exits once the queue drains"""
        self.results_queue.put(END_OF_RESULTS)

    def run(self) -> None:
        """
        Ingestion loop

        Blocks on the inbound queue until END_OF_RESULTS is received. A full
        failure queue blocks ingestion until the consumer catches up.
        """
        logger.info("Result aggregator started")
        self.sampler.start()

        try:
            while True:
                item = self.results_queue.get()
                try:
                    if item is END_OF_RESULTS:
                        break
                    self.handle(item)
                finally:
                    self.results_queue.task_done()
        finally:
            self.sampler.stop()

        logger.info(
            f"Result aggregator finished: merged {self.merged} outcomes, "
            f"forwarded {self.forwarded} failures"
        )

    def handle(self, outcome: Outcome) -> None:
        """Merge one outcome and forward it to the failure sink if needed"""
        self.results.merge(outcome)
        self.merged += 1

        if outcome.was_test_failure or outcome.was_not_found:
            if self.failure_queue is None:
                logger.debug(f"No failure sink configured, dropping {outcome}")
                return
            self.failure_queue.put(outcome)
            self.forwarded += 1

    def start(self) -> threading.Thread:
        """Run the ingestion loop in a background thread"""
        if self._thread is not None:
            raise ResultAggregatorError("Result aggregator already started")

        self._thread = threading.Thread(
            target=self.run, name='result-aggregator', daemon=True
        )
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the background ingestion loop to exit

        Returns:
            True if the loop has exited
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def shutdown(self, timeout: Optional[float] = None) -> bool:
        """close() followed by join()"""
        self.close()
        return self.join(timeout)

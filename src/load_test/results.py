#!/usr/bin/env python3
"""
Test Results
Aggregate state for a load test: lifetime counters, recent errors and
windowed per-interval rates, all guarded by one read-write lock
"""

from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Any
import logging
import time

from .outcome import Outcome, OperationKind, HttpError, OtherError
from .rwlock import ReadWriteLock
from .window import SlidingWindow, RecentLog, HISTORY_SIZE, ERROR_RETENTION

logger = logging.getLogger(__name__)

# A consistency check performs four sub-operations: one classified request
# plus three implied ones.
CONSISTENCY_REQUESTS = 4

# Quantities tracked per interval, in the order sample_interval() reports them
WINDOWED_QUANTITIES = (
    'requests', 'successes', 'gets', 'puts', 'deletes', 'throttled', 'consistency'
)


class ResultAggregatorError(Exception):
    """Custom exception for result aggregator errors"""
    pass


@dataclass(frozen=True)
class ResultsSnapshot:
    """Point-in-time copy of the aggregate state for reporting"""

    requests: int
    successes: int
    failures: int
    throttled: int
    five_xx: int
    gets: int
    puts: int
    deletes: int
    consistency: int

    # Smoothed per-interval rates
    current_requests: int
    current_successes: int
    current_gets: int
    current_puts: int
    current_deletes: int
    current_throttled: int
    current_consistency: int

    elapsed_seconds: float
    average_requests_per_sec: float
    average_successes_per_sec: float
    intervals_sampled: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)


@dataclass(frozen=True)
class RecentErrors:
    """Most recent error messages, newest first"""

    http_errors: List[str]
    other_errors: List[str]


def lifetime_rate(count: int, elapsed_seconds: float) -> float:
    """
    Average per-second rate since start, rounded to 1 decimal place

    Returns 0.0 when no time has elapsed.
    """
    if elapsed_seconds <= 0:
        return 0.0
    return round(count / elapsed_seconds, 1)


class TestResults:
    """
    Shared aggregate state of a running load test

    merge() is called by the single ingestion thread, sample_interval() by the
    interval sampler, snapshot() and recent_errors() by any reporting thread.
    Every mutable field is read and written only while holding self._lock.
    """

    __test__ = False

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize empty results

        Args:
            clock: Monotonic time source in seconds, used for lifetime averages
        """
        self._lock = ReadWriteLock()
        self._clock = clock
        self.start_time = clock()

        # Lifetime counters
        self._requests = 0
        self._successes = 0
        self._failures = 0
        self._throttled = 0
        self._five_xx = 0
        self._gets = 0
        self._puts = 0
        self._deletes = 0
        self._consistency = 0

        self._http_errors = RecentLog(ERROR_RETENTION)
        self._other_errors = RecentLog(ERROR_RETENTION)

        # Open interval
        self._interval_count = 0
        self._last_totals = {name: 0 for name in WINDOWED_QUANTITIES if name != 'requests'}

        self._windows = {name: SlidingWindow(HISTORY_SIZE) for name in WINDOWED_QUANTITIES}
        self._current = {name: 0 for name in WINDOWED_QUANTITIES}
        self._intervals_sampled = 0

    def merge(self, outcome: Outcome) -> None:
        """
        Apply one classified outcome to the aggregate state

        The whole update is one transaction under the write lock.

        Args:
            outcome: Outcome produced by a worker

        Raises:
            ResultAggregatorError: If outcome is not an Outcome
        """
        if not isinstance(outcome, Outcome):
            raise ResultAggregatorError(
                f"Can only merge Outcome instances, got {type(outcome).__name__}"
            )

        with self._lock.write_locked():
            self._requests += 1
            self._interval_count += 1

            if outcome.was_success:
                self._successes += 1
            if outcome.was_test_failure:
                self._failures += 1
            if outcome.was_5xx:
                self._five_xx += 1
            if outcome.was_throttled:
                self._throttled += 1

            status = outcome.status
            if isinstance(status, HttpError):
                self._http_errors.append(f"{status.status_code}: {status.message}")
            elif isinstance(status, OtherError):
                self._other_errors.append(status.message)

            kind = outcome.kind
            if kind is OperationKind.GET:
                self._gets += 1
            elif kind in (OperationKind.PUT, OperationKind.CREATE):
                self._puts += 1
            elif kind is OperationKind.DELETE:
                self._deletes += 1
            elif kind is OperationKind.CONSISTENCY:
                extra = CONSISTENCY_REQUESTS - 1
                self._consistency += 1
                self._requests += extra
                self._interval_count += extra
                if outcome.was_success:
                    self._successes += extra
                if outcome.was_test_failure and not isinstance(status, OtherError):
                    # Consistency failures carry detail the generic error fields lack
                    self._other_errors.append(outcome.message)

    def sample_interval(self) -> Dict[str, int]:
        """
        Close the open interval and refresh the smoothed rates

        Pushes the per-interval delta of every tracked quantity onto its
        window, recomputes each current rate as the truncating mean of the
        window and resets the open-interval counter.

        Returns:
            Delta pushed for each tracked quantity
        """
        with self._lock.write_locked():
            totals = {
                'successes': self._successes,
                'gets': self._gets,
                'puts': self._puts,
                'deletes': self._deletes,
                'throttled': self._throttled,
                'consistency': self._consistency,
            }
            deltas = {'requests': self._interval_count}
            for name, total in totals.items():
                deltas[name] = total - self._last_totals[name]
            self._last_totals = totals

            for name in WINDOWED_QUANTITIES:
                window = self._windows[name]
                window.push(deltas[name])
                self._current[name] = window.mean()

            self._interval_count = 0
            self._intervals_sampled += 1
            sampled = self._intervals_sampled

        logger.debug(f"Sampled interval {sampled}: {deltas}")
        return deltas

    def window_history(self) -> Dict[str, List[int]]:
        """Interval deltas currently held for each tracked quantity, oldest first"""
        with self._lock.read_locked():
            return {name: window.values() for name, window in self._windows.items()}

    def snapshot(self) -> ResultsSnapshot:
        """
        Copy the current state for reporting

        Returns:
            ResultsSnapshot with lifetime totals, smoothed current rates and
            lifetime average throughput
        """
        with self._lock.read_locked():
            elapsed = max(self._clock() - self.start_time, 0.0)
            return ResultsSnapshot(
                requests=self._requests,
                successes=self._successes,
                failures=self._failures,
                throttled=self._throttled,
                five_xx=self._five_xx,
                gets=self._gets,
                puts=self._puts,
                deletes=self._deletes,
                consistency=self._consistency,
                current_requests=self._current['requests'],
                current_successes=self._current['successes'],
                current_gets=self._current['gets'],
                current_puts=self._current['puts'],
                current_deletes=self._current['deletes'],
                current_throttled=self._current['throttled'],
                current_consistency=self._current['consistency'],
                elapsed_seconds=elapsed,
                average_requests_per_sec=lifetime_rate(self._requests, elapsed),
                average_successes_per_sec=lifetime_rate(self._successes, elapsed),
                intervals_sampled=self._intervals_sampled,
            )

    def recent_errors(self, limit: int = ERROR_RETENTION) -> RecentErrors:
        """
        Most recent HTTP and other errors

        Args:
            limit: Maximum entries per list

        Returns:
            RecentErrors with both lists ordered most-recent-first
        """
        with self._lock.read_locked():
            return RecentErrors(
                http_errors=self._http_errors.latest(limit),
                other_errors=self._other_errors.latest(limit),
            )

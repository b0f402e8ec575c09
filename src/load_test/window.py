#!/usr/bin/env python3
"""
Window Utilities
Bounded buffers used by the aggregate state: interval-delta windows for
smoothed rates and ring buffers for recent error messages
"""

from collections import deque
from typing import Deque, List, Iterable
import logging

logger = logging.getLogger(__name__)

HISTORY_SIZE = 5
ERROR_RETENTION = 5


class AggregationError(Exception):
    """Custom exception for aggregation errors"""
    pass


def validate_data(data: Iterable[int]) -> List[int]:
    """
    Validate interval deltas

    Args:
        data: Iterable of integer counts

    Returns:
        The values as a list

    Raises:
        AggregationError: If a value is not an integer or is negative
    """
    values = list(data)
    for i, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, int):
            raise AggregationError(
                f"All values must be integers, got {type(value).__name__} at index {i}"
            )
        if value < 0:
            raise AggregationError(f"Invalid negative count at index {i}: {value}")
    return values


def truncated_mean(data: Iterable[int]) -> int:
    """
    Integer-truncating arithmetic mean

    The mean of an empty window is defined as 0.

    Example:
        >>> truncated_mean([10, 20, 25])
        18
        >>> truncated_mean([])
        0
    """
    values = validate_data(data)
    if not values:
        return 0
    return sum(values) // len(values)


class SlidingWindow:
    """
    FIFO history of the last N interval deltas for one tracked quantity

    Pushing past capacity evicts the oldest delta.
    """

    def __init__(self, size: int = HISTORY_SIZE):
        if size < 1:
            raise AggregationError(f"Window size must be positive, got {size}")
        self._deltas: Deque[int] = deque(maxlen=size)

    def push(self, delta: int) -> None:
        validate_data([delta])
        self._deltas.append(delta)

    def mean(self) -> int:
        return truncated_mean(self._deltas)

    def values(self) -> List[int]:
        """Deltas oldest-first"""
        return list(self._deltas)

    def __len__(self) -> int:
        return len(self._deltas)

    def __repr__(self):
        return f"SlidingWindow(values={self.values()}, size={self._deltas.maxlen})"


class RecentLog:
    """Ring buffer of the most recent messages"""

    def __init__(self, capacity: int = ERROR_RETENTION):
        if capacity < 1:
            raise AggregationError(f"Capacity must be positive, got {capacity}")
        self._entries: Deque[str] = deque(maxlen=capacity)

    def append(self, message: str) -> None:
        self._entries.append(message)

    def latest(self, limit: int = ERROR_RETENTION) -> List[str]:
        """Up to `limit` entries, most recent first"""
        return list(reversed(self._entries))[:max(limit, 0)]

    def __len__(self) -> int:
        return len(self._entries)

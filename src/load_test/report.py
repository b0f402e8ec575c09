#!/usr/bin/env python3
"""
Result Reports
Plain-text rendering of result snapshots. Snapshots are taken under the
read lock; formatting here never holds it.
"""

from typing import List, Optional, Tuple, Union

from .results import ResultsSnapshot, RecentErrors, TestResults

Row = Tuple[str, Union[int, float], str]


def result_rows(snapshot: ResultsSnapshot) -> List[Row]:
    """
    Table rows (metric, value, annotation) for a snapshot

    Current rates are per reporting interval, averaged over the last
    few intervals.
    """
    return [
        ('# Requests', snapshot.requests, ''),
        ('# Test Success', snapshot.successes, ''),
        ('# Test Failures', snapshot.failures, ''),
        ('# 5XX Errors', snapshot.five_xx, ''),
        ('# Throttled', snapshot.throttled, ''),
        ('# Current THROTTLE/interval', snapshot.current_throttled, ''),
        ('# Current GET/interval', snapshot.current_gets, ''),
        ('# Current PUT/interval', snapshot.current_puts, ''),
        ('# Current DELETE/interval', snapshot.current_deletes, ''),
        ('# Current CONSISTENCY/interval', snapshot.current_consistency,
         '(4 requests per check)'),
        ('Current req/interval', snapshot.current_requests, ''),
        ('Current Successful req/interval', snapshot.current_successes, ''),
        ('Average req/sec', snapshot.average_requests_per_sec, ''),
        ('Average Successful req/sec', snapshot.average_successes_per_sec, ''),
    ]


def format_results(snapshot: ResultsSnapshot) -> str:
    """Render a snapshot as a Metric / Count table"""
    rows = result_rows(snapshot)
    width = max(len(name) for name, _, _ in rows) + 2

    lines = [f"{'Metric':<{width}} {'Count':<10}", '-' * (width + 11)]
    for name, value, note in rows:
        lines.append(f"{name:<{width}} {value!s:<10} {note}".rstrip())
    return '\n'.join(lines)


def format_errors(errors: RecentErrors) -> str:
    """Render recent errors, newest first"""
    lines = ['', 'HTTP Errors:', '-' * 45]
    lines.extend(errors.http_errors)
    lines.extend(['', 'Other Errors:', '-' * 45])
    lines.extend(errors.other_errors)
    return '\n'.join(lines)


def print_results(results: TestResults, snapshot: Optional[ResultsSnapshot] = None) -> None:
    """Print the results table to console"""
    print(format_results(snapshot or results.snapshot()))


def print_errors(results: TestResults) -> None:
    """Print recent errors to console"""
    print(format_errors(results.recent_errors()))

#!/usr/bin/env python3
"""
Load Test Results Package

Aggregates classified outcomes from concurrent load-test workers into
lifetime counters, windowed per-interval rates and recent error listings.
"""

from .outcome import (
    Outcome,
    OperationKind,
    Success,
    TestFailure,
    Throttled,
    HttpError,
    OtherError,
    NotFound,
    OutcomeError
)
from .window import SlidingWindow, RecentLog, truncated_mean, AggregationError
from .rwlock import ReadWriteLock
from .results import TestResults, ResultsSnapshot, RecentErrors, ResultAggregatorError
from .sampler import IntervalSampler, SamplerError
from .aggregator import ResultAggregator, END_OF_RESULTS
from .report import format_results, format_errors, print_results, print_errors
from .config import AggregatorConfig, ConfigError, load_config, setup_logging

__version__ = '1.0.0'

__all__ = [
    # Outcomes
    'Outcome',
    'OperationKind',
    'Success',
    'TestFailure',
    'Throttled',
    'HttpError',
    'OtherError',
    'NotFound',
    'OutcomeError',

    # Windows
    'SlidingWindow',
    'RecentLog',
    'truncated_mean',
    'AggregationError',
    'ReadWriteLock',

    # Results
    'TestResults',
    'ResultsSnapshot',
    'RecentErrors',
    'ResultAggregatorError',
    'IntervalSampler',
    'SamplerError',
    'ResultAggregator',
    'END_OF_RESULTS',

    # Reporting
    'format_results',
    'format_errors',
    'print_results',
    'print_errors',

    # Configuration
    'AggregatorConfig',
    'ConfigError',
    'load_config',
    'setup_logging',
]

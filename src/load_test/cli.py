#!/usr/bin/env python3
"""
Result Replay CLI
Feeds a JSON-lines file of classified outcomes through the result aggregator
and prints the results table
"""

import json
import logging
import queue
import sys
import threading
import time
from pathlib import Path
from typing import Iterator, Optional

import schedule

from .aggregator import ResultAggregator
from .config import AggregatorConfig, ConfigError, DEFAULT_CONFIG_PATH, load_config, setup_logging
from .outcome import Outcome, OutcomeError
from .report import print_errors, print_results

logger = logging.getLogger(__name__)


def read_outcomes(path: Path) -> Iterator[Outcome]:
    """
    Parse outcomes from a JSON-lines file, skipping blank lines

    Raises:
        OutcomeError: If a line is not valid JSON or not a valid outcome
    """
    with open(path, 'r') as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise OutcomeError(f"{path}:{line_no}: invalid JSON: {e}")
            try:
                yield Outcome.from_dict(data)
            except OutcomeError as e:
                raise OutcomeError(f"{path}:{line_no}: {e}")


def produce(path: Path, aggregator: ResultAggregator, rate: Optional[float] = None) -> int:
    """
    Put every outcome from path on the aggregator's inbound queue, then close it

    Args:
        path: JSON-lines input file
        aggregator: Aggregator whose queue receives the outcomes
        rate: Optional outcomes per second to pace the replay

    Returns:
        Number of outcomes queued
    """
    count = 0
    delay = 1.0 / rate if rate else 0.0
    try:
        for outcome in read_outcomes(path):
            aggregator.results_queue.put(outcome)
            count += 1
            if delay:
                time.sleep(delay)
    finally:
        aggregator.close()
    return count


def drain_failures(failures: queue.Queue, stop: threading.Event) -> None:
    """Log failing outcomes as the failure sink consumer"""
    while not (stop.is_set() and failures.empty()):
        try:
            outcome = failures.get(timeout=0.1)
        except queue.Empty:
            continue
        logger.debug(f"Failure: {outcome.kind.value} {outcome.status}")


def replay(path: Path, config: AggregatorConfig, print_every: Optional[float] = None,
           rate: Optional[float] = None) -> ResultAggregator:
    """
    Replay a file of outcomes and return the finished aggregator

    Args:
        path: JSON-lines input file
        config: Aggregator configuration
        print_every: Print the live results table every N seconds while replaying
        rate: Optional outcomes per second to pace the replay
    """
    failures: queue.Queue = queue.Queue(maxsize=config.failure_queue_size)
    aggregator = ResultAggregator(
        queue.Queue(),
        config.report_interval_seconds,
        failure_queue=failures,
    )

    stop_draining = threading.Event()
    drainer = threading.Thread(
        target=drain_failures, args=(failures, stop_draining),
        name='failure-sink', daemon=True
    )
    drainer.start()
    aggregator.start()

    printer = schedule.Scheduler()
    if print_every:
        printer.every(print_every).seconds.do(print_results, aggregator.results)

    try:
        count = produce(path, aggregator, rate)
        logger.info(f"Queued {count} outcomes from {path}")
        while not aggregator.join(timeout=0.1):
            printer.run_pending()
    finally:
        printer.clear()
        stop_draining.set()
        drainer.join()

    return aggregator


def main(argv=None):
    """Main entry point for the result replay tool"""
    import argparse

    parser = argparse.ArgumentParser(
        description='Replay classified load-test outcomes through the result aggregator'
    )
    parser.add_argument(
        'input',
        type=Path,
        help='JSON-lines file with one outcome per line'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=DEFAULT_CONFIG_PATH,
        help=f'Path to configuration file (default: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--interval',
        type=float,
        help='Override the reporting interval in seconds'
    )
    parser.add_argument(
        '--print-every',
        type=float,
        help='Print the live results table every N seconds'
    )
    parser.add_argument(
        '--rate',
        type=float,
        help='Replay at most N outcomes per second'
    )

    args = parser.parse_args(argv)

    try:
        if args.config == DEFAULT_CONFIG_PATH and not Path(args.config).exists():
            config = AggregatorConfig()
        else:
            config = load_config(args.config)
        if args.interval is not None:
            if args.interval <= 0:
                raise ConfigError(f"--interval must be positive, got {args.interval}")
            config.report_interval_seconds = args.interval
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(config)

    try:
        aggregator = replay(args.input, config, args.print_every, args.rate)
    except (OutcomeError, OSError) as e:
        logger.error(f"Replay failed: {e}")
        return 1

    print()
    print_results(aggregator.results)
    print_errors(aggregator.results)
    return 0


if __name__ == '__main__':
    sys.exit(main())

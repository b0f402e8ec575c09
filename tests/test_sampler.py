"""Tests for the interval sampler."""

import time

import pytest

from helpers import success
from load_test.sampler import IntervalSampler, SamplerError


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_sampler_ticks_on_interval(results):
    sampler = IntervalSampler(results, 0.05)
    for _ in range(4):
        results.merge(success())

    sampler.start()
    try:
        assert wait_for(lambda: sampler.ticks >= 2)
    finally:
        sampler.stop(timeout=5)

    snap = results.snapshot()
    assert snap.intervals_sampled >= 2
    assert snap.requests == 4
    assert not sampler.running


def test_stop_interrupts_long_interval(results):
    sampler = IntervalSampler(results, 60)
    sampler.start()
    started = time.monotonic()
    sampler.stop(timeout=5)

    assert time.monotonic() - started < 5
    assert not sampler.running
    assert sampler.ticks == 0
    assert results.snapshot().intervals_sampled == 0


def test_stop_is_idempotent_and_safe_before_start(results):
    sampler = IntervalSampler(results, 1)
    sampler.stop()
    sampler.stop()
    assert not sampler.running


def test_start_twice_rejected(results):
    sampler = IntervalSampler(results, 1)
    sampler.start()
    try:
        with pytest.raises(SamplerError):
            sampler.start()
    finally:
        sampler.stop(timeout=5)


def test_interval_must_be_positive(results):
    with pytest.raises(SamplerError):
        IntervalSampler(results, 0)


def test_tick_logs_and_survives_errors(results, monkeypatch, caplog):
    sampler = IntervalSampler(results, 1)

    def explode():
        raise RuntimeError("sampling failed")

    monkeypatch.setattr(results, 'sample_interval', explode)
    sampler.tick()

    assert sampler.ticks == 0
    assert "sampling failed" in caplog.text


def test_jobs_cleared_by_sampler_thread_on_stop(results):
    for _ in range(50):
        sampler = IntervalSampler(results, 0.01)
        sampler.start()
        sampler.stop(timeout=5)
        assert not sampler.running
        assert sampler.scheduler.jobs == []

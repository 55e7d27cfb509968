"""Tests for MotionSampler using a stubbed sensor backend."""

from __future__ import annotations

import logging
import math

import pytest

from conftest import StubMotionBackend
from pathtracker.core.hardware.motion_backend import ACCELEROMETER, DEVICE_MOTION
from pathtracker.core.hardware.motion_sampler import MotionSampler
from pathtracker.core.imu.sample_cache import LatestSampleCache


@pytest.fixture()
def cache() -> LatestSampleCache:
    return LatestSampleCache()


def test_start_subscribes_both_streams_at_interval(backend, cache):
    sampler = MotionSampler(backend, cache)
    sampler.start(interval_seconds=0.05)

    assert sampler.running
    assert backend.intervals == {ACCELEROMETER: 0.05, DEVICE_MOTION: 0.05}
    assert sampler.sensor_issues == []


def test_updates_reach_cache_with_heading_in_radians(backend, cache):
    sampler = MotionSampler(backend, cache)
    sampler.start()

    backend.push_acceleration(0.0, 0.2, 0.0)
    backend.push_heading_degrees(90.0)

    sample = cache.read()
    assert sample.acceleration.y == 0.2
    assert sample.heading_radians == pytest.approx(math.pi / 2)


def test_start_twice_does_not_restart_streams(backend, cache):
    sampler = MotionSampler(backend, cache)
    sampler.start()
    sampler.start()
    assert backend.start_calls == {ACCELEROMETER: 1, DEVICE_MOTION: 1}


def test_stop_is_idempotent_and_drops_stale_acceleration(backend, cache):
    sampler = MotionSampler(backend, cache)
    sampler.stop()
    assert backend.stop_calls == {ACCELEROMETER: 0, DEVICE_MOTION: 0}

    sampler.start()
    backend.push_acceleration(0.0, 0.2, 0.0)
    backend.push_heading_degrees(90.0)
    sampler.stop()
    sampler.stop()

    assert not sampler.running
    assert backend.stop_calls == {ACCELEROMETER: 1, DEVICE_MOTION: 1}
    assert cache.read() is None
    assert cache.latest_heading == pytest.approx(math.pi / 2)


def test_late_callbacks_after_stop_are_ignored(cache):
    backend = StubMotionBackend()
    sampler = MotionSampler(backend, cache)
    sampler.start()
    handler = backend.accel_handler
    sampler.stop()

    handler((0.0, 0.5, 0.0))
    assert cache.read() is None


def test_missing_accelerometer_is_reported_not_raised(cache, caplog):
    backend = StubMotionBackend(accelerometer=False)
    sampler = MotionSampler(backend, cache)

    with caplog.at_level(logging.WARNING, logger="pathtracker"):
        sampler.start()

    assert sampler.running
    assert [issue.sensor for issue in sampler.sensor_issues] == [ACCELEROMETER]
    assert backend.start_calls[ACCELEROMETER] == 0
    assert backend.start_calls[DEVICE_MOTION] == 1
    assert "Accelerometer unavailable" in caplog.text

    sampler.stop()
    assert backend.stop_calls[ACCELEROMETER] == 0
    assert backend.stop_calls[DEVICE_MOTION] == 1


def test_backend_raising_sensor_unavailable_is_absorbed(cache):
    backend = StubMotionBackend(device_motion=False, raise_on_start=True)
    sampler = MotionSampler(backend, cache)
    sampler.start()

    issue = sampler.sensor_issues[0]
    assert issue.sensor == DEVICE_MOTION
    assert issue.reason == "permission denied"


def test_missing_sensor_is_logged_once_per_sampler(cache, caplog):
    backend = StubMotionBackend(accelerometer=False)
    sampler = MotionSampler(backend, cache)

    with caplog.at_level(logging.WARNING, logger="pathtracker"):
        sampler.start()
        sampler.stop()
        sampler.start()

    assert caplog.text.count("Accelerometer unavailable") == 1
    assert len(sampler.sensor_issues) == 2

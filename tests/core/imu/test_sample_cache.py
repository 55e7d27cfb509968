"""Tests for the latest-sample cache shared by sensor callbacks and the tick."""

from __future__ import annotations

import math
import threading
from types import SimpleNamespace

import pytest

from pathtracker.core.imu.motion_sample import Acceleration
from pathtracker.core.imu.sample_cache import LatestSampleCache, normalize_heading


def test_read_is_none_until_acceleration_arrives():
    cache = LatestSampleCache()
    cache.on_heading_sample(1.0)
    assert cache.read() is None

    cache.on_acceleration_sample((0.0, 0.1, 0.0))
    sample = cache.read()
    assert sample.acceleration == Acceleration(0.0, 0.1, 0.0)
    assert sample.heading_radians == pytest.approx(1.0)


def test_heading_is_none_before_first_heading():
    cache = LatestSampleCache()
    cache.on_acceleration_sample(Acceleration(0.0, 0.0, 0.0))
    assert cache.read().heading_radians is None


def test_latest_value_of_each_stream_wins():
    cache = LatestSampleCache()
    cache.on_acceleration_sample((0.0, 0.1, 0.0))
    cache.on_acceleration_sample(SimpleNamespace(x=0.0, y=0.3, z=0.0))
    cache.on_heading_sample(0.5)
    cache.on_heading_sample(0.7)

    sample = cache.read()
    assert sample.acceleration.y == 0.3
    assert sample.heading_radians == pytest.approx(0.7)
    assert cache.acceleration_updates == 2
    assert cache.heading_updates == 2


def test_none_payloads_are_dropped():
    cache = LatestSampleCache()
    cache.on_acceleration_sample(None)
    cache.on_heading_sample(None)
    assert cache.read() is None
    assert cache.latest_heading is None


def test_clear_acceleration_keeps_heading():
    cache = LatestSampleCache()
    cache.on_acceleration_sample((0.0, 0.1, 0.0))
    cache.on_heading_sample(1.0)
    cache.clear_acceleration()
    assert cache.read() is None
    assert cache.latest_heading == pytest.approx(1.0)

    cache.on_acceleration_sample((0.0, 0.2, 0.0))
    assert cache.read().heading_radians == pytest.approx(1.0)


@pytest.mark.parametrize(
    "raw, expected",
    [(0.0, 0.0), (2 * math.pi, 0.0), (-math.pi / 2, 3 * math.pi / 2), (5 * math.pi, math.pi)],
)
def test_normalize_heading(raw, expected):
    assert normalize_heading(raw) == pytest.approx(expected)
    assert 0.0 <= normalize_heading(raw) < 2 * math.pi


def test_concurrent_writers_never_tear_samples():
    cache = LatestSampleCache()

    def write_acceleration():
        for i in range(500):
            cache.on_acceleration_sample((float(i), float(i), float(i)))

    threads = [threading.Thread(target=write_acceleration) for _ in range(4)]
    for thread in threads:
        thread.start()
    for _ in range(500):
        sample = cache.read()
        if sample is not None:
            acc = sample.acceleration
            assert acc.x == acc.y == acc.z
    for thread in threads:
        thread.join()

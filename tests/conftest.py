"""Shared fakes for the tracking tests."""

from __future__ import annotations

import pytest

from pathtracker.core.hardware.motion_backend import (
    ACCELEROMETER,
    DEVICE_MOTION,
    SensorUnavailable,
)


class StubMotionBackend:
    """Backend that records handlers and lets tests push updates by hand."""

    def __init__(self, accelerometer=True, device_motion=True, raise_on_start=False):
        self.accelerometer = accelerometer
        self.device_motion = device_motion
        self.raise_on_start = raise_on_start
        self.accel_handler = None
        self.heading_handler = None
        self.intervals = {}
        self.start_calls = {ACCELEROMETER: 0, DEVICE_MOTION: 0}
        self.stop_calls = {ACCELEROMETER: 0, DEVICE_MOTION: 0}

    def is_accelerometer_available(self):
        return self.accelerometer or self.raise_on_start

    def is_device_motion_available(self):
        return self.device_motion or self.raise_on_start

    def start_accelerometer_updates(self, interval, handler):
        if self.raise_on_start and not self.accelerometer:
            raise SensorUnavailable(ACCELEROMETER, "permission denied")
        self.start_calls[ACCELEROMETER] += 1
        self.intervals[ACCELEROMETER] = interval
        self.accel_handler = handler

    def start_device_motion_updates(self, interval, handler):
        if self.raise_on_start and not self.device_motion:
            raise SensorUnavailable(DEVICE_MOTION, "permission denied")
        self.start_calls[DEVICE_MOTION] += 1
        self.intervals[DEVICE_MOTION] = interval
        self.heading_handler = handler

    def stop_accelerometer_updates(self):
        self.stop_calls[ACCELEROMETER] += 1
        self.accel_handler = None

    def stop_device_motion_updates(self):
        self.stop_calls[DEVICE_MOTION] += 1
        self.heading_handler = None

    def push_acceleration(self, x=0.0, y=0.0, z=0.0):
        if self.accel_handler is not None:
            self.accel_handler((x, y, z))

    def push_heading_degrees(self, degrees):
        if self.heading_handler is not None:
            self.heading_handler(degrees)


@pytest.fixture()
def backend() -> StubMotionBackend:
    return StubMotionBackend()

"""
Motion sampling on top of a sensor backend.

This module connects a MotionBackend to the LatestSampleCache:
- Availability checks for the accelerometer and device-motion streams
- Stream startup at the requested cadence
- Degree-to-radian conversion of the compass heading
- Non-fatal reporting of missing sensors (logged once, recorded)

A missing sensor never raises out of start(): tracking continues and the
failure is only observable as an absence of steps and in sensor_issues.

Usage:
    cache = LatestSampleCache()
    sampler = MotionSampler(backend, cache)
    sampler.start(interval_seconds=0.1)
    ...
    sampler.stop()
"""

from __future__ import annotations

import math
import threading
from typing import List, Optional

from pathtracker.core.hardware.motion_backend import (
    ACCELEROMETER,
    DEVICE_MOTION,
    MotionBackend,
    SensorUnavailable,
)
from pathtracker.core.imu.sample_cache import LatestSampleCache
from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger


class MotionSampler:
    """Deliver backend sensor updates into the latest-sample cache."""

    def __init__(self, backend: MotionBackend, cache: LatestSampleCache) -> None:
        self.backend = backend
        self.cache = cache
        self.sensor_issues: List[SensorUnavailable] = []
        self._reported = set()
        self._running = False
        self._active_streams = set()
        self._lock = threading.Lock()
        self._log = get_tracking_logger().sampler

    @property
    def running(self) -> bool:
        return self._running

    def start(self, interval_seconds: float = 0.1) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True

            self._start_stream(
                ACCELEROMETER,
                self.backend.is_accelerometer_available,
                lambda: self.backend.start_accelerometer_updates(
                    interval_seconds, self._on_acceleration
                ),
            )
            self._start_stream(
                DEVICE_MOTION,
                self.backend.is_device_motion_available,
                lambda: self.backend.start_device_motion_updates(
                    interval_seconds, self._on_heading_degrees
                ),
            )

        self._log.debug(
            f"Sampler started @ {interval_seconds:.3f}s, streams={sorted(self._active_streams)}"
        )

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            if ACCELEROMETER in self._active_streams:
                self.backend.stop_accelerometer_updates()
            if DEVICE_MOTION in self._active_streams:
                self.backend.stop_device_motion_updates()
            self._active_streams.clear()
            # Next session waits for fresh acceleration, keeps the last heading
            self.cache.clear_acceleration()

        self._log.debug("Sampler stopped")

    def _start_stream(self, sensor: str, is_available, start) -> None:
        try:
            if not is_available():
                raise SensorUnavailable(sensor)
            start()
        except SensorUnavailable as exc:
            self._report(exc)
            return
        self._active_streams.add(sensor)

    def _report(self, issue: SensorUnavailable) -> None:
        self.sensor_issues.append(issue)
        if issue.sensor in self._reported:
            return
        self._reported.add(issue.sensor)
        self._log.warning(
            f"{issue.sensor.replace('_', ' ').capitalize()} unavailable ({issue.reason}), tracking continues without it"
        )

    # ------------------------------------------------------------------
    # backend callbacks (any thread): only touch the cache
    # ------------------------------------------------------------------

    def _on_acceleration(self, vector) -> None:
        if not self._running:
            return
        self.cache.on_acceleration_sample(vector)

    def _on_heading_degrees(self, degrees: Optional[float]) -> None:
        if not self._running or degrees is None:
            return
        self.cache.on_heading_sample(math.radians(degrees))

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mock motion backend for testing without a phone.

This module provides a drop-in replacement for a real sensor backend that
enables development and testing without hardware by providing:
1. Synthetic walking (periodic gait signal on the y axis, slowly turning heading)
2. Synthetic standing still (noise well below the step threshold)
3. Replay of a recorded list of (acceleration, heading) samples

The SyntheticMotionBackend is 100% API-compatible with MotionBackend, and
can simulate devices without an accelerometer or without device motion.

Operating modes:
- 'walking': y = amplitude * sin(2π * cadence * t), heading turns at turn_rate_dps
- 'stationary': small Gaussian noise on every axis, constant heading
- 'replay': iterates over `samples`, then keeps repeating the last one

Usage:
    # Walking (default)
    backend = SyntheticMotionBackend(mode='walking', cadence_hz=1.8)

    # Replay
    backend = SyntheticMotionBackend(
        mode='replay',
        samples=[((0.0, 0.2, 0.0), 90.0), ((0.0, 0.0, 0.0), 90.0)],
    )
"""

import math
import threading
import time
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pathtracker.core.hardware.motion_backend import (
    ACCELEROMETER,
    DEVICE_MOTION,
    AccelerationHandler,
    HeadingHandler,
    SensorUnavailable,
)
from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger

ReplaySample = Tuple[Sequence[float], Optional[float]]

MODES = ('walking', 'stationary', 'replay')


class SyntheticMotionBackend:
    """
    Mock sensor backend generating accelerometer and heading streams.

    See module docstring for usage examples.
    """

    def __init__(
        self,
        mode: str = 'walking',
        cadence_hz: float = 1.8,
        amplitude_g: float = 0.25,
        noise_g: float = 0.01,
        start_heading_deg: float = 0.0,
        turn_rate_dps: float = 6.0,
        samples: Optional[List[ReplaySample]] = None,
        accelerometer_available: bool = True,
        device_motion_available: bool = True,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the SyntheticMotionBackend.

        Args:
            mode: 'walking', 'stationary', or 'replay'
            cadence_hz: Steps per second of the synthetic gait signal
            amplitude_g: Peak y-axis acceleration while walking
            noise_g: Standard deviation of the added Gaussian noise
            start_heading_deg: Initial compass heading
            turn_rate_dps: Heading change in degrees per second ('walking' only)
            samples: (acceleration, heading_deg) pairs for 'replay' mode
            accelerometer_available: Simulate a device with/without accelerometer
            device_motion_available: Simulate a device with/without device motion
            seed: Seed for the noise generator
        """
        if mode not in MODES:
            raise ValueError(f"Unknown mode: {mode}")
        if mode == 'replay' and not samples:
            raise ValueError("Replay mode needs at least one sample")

        self.mode = mode
        self.cadence_hz = cadence_hz
        self.amplitude_g = amplitude_g
        self.noise_g = noise_g
        self.start_heading_deg = start_heading_deg
        self.turn_rate_dps = turn_rate_dps
        self.samples = list(samples or [])
        self.accelerometer_available = accelerometer_available
        self.device_motion_available = device_motion_available

        self._rng = np.random.default_rng(seed)
        self._threads = {}
        self._stop_events = {}
        self._start_time: Optional[float] = None
        self._accel_index = 0
        self._heading_index = 0
        self.updates_sent = {ACCELEROMETER: 0, DEVICE_MOTION: 0}

        self._log = get_tracking_logger().sampler
        self._log.debug(f"SyntheticMotionBackend initialized in '{mode}' mode")

    # ------------------------------------------------------------------
    # MotionBackend API
    # ------------------------------------------------------------------

    def is_accelerometer_available(self) -> bool:
        return self.accelerometer_available

    def is_device_motion_available(self) -> bool:
        return self.device_motion_available

    def start_accelerometer_updates(self, interval: float, handler: AccelerationHandler) -> None:
        if not self.accelerometer_available:
            raise SensorUnavailable(ACCELEROMETER)
        self._start_stream(ACCELEROMETER, interval, lambda: handler(self.next_acceleration()))

    def start_device_motion_updates(self, interval: float, handler: HeadingHandler) -> None:
        if not self.device_motion_available:
            raise SensorUnavailable(DEVICE_MOTION)
        self._start_stream(DEVICE_MOTION, interval, lambda: handler(self.next_heading_degrees()))

    def stop_accelerometer_updates(self) -> None:
        self._stop_stream(ACCELEROMETER)

    def stop_device_motion_updates(self) -> None:
        self._stop_stream(DEVICE_MOTION)

    # ------------------------------------------------------------------
    # sample generation
    # ------------------------------------------------------------------

    def elapsed(self) -> float:
        if self._start_time is None:
            return 0.0
        return time.monotonic() - self._start_time

    def next_acceleration(self, t: Optional[float] = None) -> Tuple[float, float, float]:
        """Generate the acceleration for time ``t`` (defaults to time since start)."""
        if self.mode == 'replay':
            accel, _ = self.samples[min(self._accel_index, len(self.samples) - 1)]
            self._accel_index += 1
            return tuple(float(v) for v in accel)

        noise = self._rng.normal(0.0, self.noise_g, size=3)
        if self.mode == 'stationary':
            return float(noise[0]), float(noise[1]), float(noise[2])

        t = self.elapsed() if t is None else t
        gait = self.amplitude_g * math.sin(2.0 * math.pi * self.cadence_hz * t)
        return float(noise[0]), float(gait + noise[1]), float(noise[2])

    def next_heading_degrees(self, t: Optional[float] = None) -> Optional[float]:
        if self.mode == 'replay':
            _, heading = self.samples[min(self._heading_index, len(self.samples) - 1)]
            self._heading_index += 1
            return heading

        if self.mode == 'stationary':
            return self.start_heading_deg % 360.0

        t = self.elapsed() if t is None else t
        return (self.start_heading_deg + self.turn_rate_dps * t) % 360.0

    # ------------------------------------------------------------------
    # threads
    # ------------------------------------------------------------------

    def _start_stream(self, name: str, interval: float, emit) -> None:
        if name in self._threads:
            self._log.debug(f"{name} stream already running")
            return
        if self._start_time is None:
            self._start_time = time.monotonic()

        stop_event = threading.Event()
        thread = threading.Thread(
            target=self._run_stream,
            args=(name, interval, emit, stop_event),
            name=f"Synthetic-{name}",
            daemon=True,
        )
        self._stop_events[name] = stop_event
        self._threads[name] = thread
        thread.start()

    def _stop_stream(self, name: str) -> None:
        stop_event = self._stop_events.pop(name, None)
        thread = self._threads.pop(name, None)
        if stop_event is None:
            return
        stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout=2.0)
        if not self._threads:
            self._start_time = None
        self._log.debug(f"{name} stream stopped ({self.updates_sent[name]} updates sent)")

    def _run_stream(self, name: str, interval: float, emit, stop_event: threading.Event) -> None:
        """Thread loop that emits one update per interval until stopped."""
        while not stop_event.is_set():
            emit()
            self.updates_sent[name] += 1
            stop_event.wait(interval)

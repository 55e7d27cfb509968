"""
Sensor backend contract for the motion sampler.

A backend owns the platform sensor feed and pushes updates through two
independent streams:
- accelerometer updates: linear acceleration (x, y, z) in g
- device-motion updates: compass heading in degrees (0° = north)

Handlers may be invoked from any thread. A backend signals a missing
capability either through the availability checks or by raising
SensorUnavailable from the matching start call.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

AccelerationHandler = Callable[[Optional[Sequence[float]]], None]
HeadingHandler = Callable[[Optional[float]], None]

ACCELEROMETER = "accelerometer"
DEVICE_MOTION = "device_motion"


class SensorUnavailable(Exception):
    """A sensor capability is missing on this device."""

    def __init__(self, sensor: str, reason: str = "not available") -> None:
        super().__init__(f"{sensor} {reason}")
        self.sensor = sensor
        self.reason = reason


class MotionBackend(Protocol):
    def is_accelerometer_available(self) -> bool: ...

    def is_device_motion_available(self) -> bool: ...

    def start_accelerometer_updates(self, interval: float, handler: AccelerationHandler) -> None: ...

    def start_device_motion_updates(self, interval: float, handler: HeadingHandler) -> None: ...

    def stop_accelerometer_updates(self) -> None: ...

    def stop_device_motion_updates(self) -> None: ...

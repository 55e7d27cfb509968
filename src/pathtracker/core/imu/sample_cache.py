"""
Latest-value cache between sensor callbacks and the integration tick.

Acceleration and heading arrive on independent streams at independent
rates. Sensor callbacks are the only writers of this cache; the tick only
reads it. Each read returns the most recent value of each stream, no
timestamp join is attempted.
"""

from __future__ import annotations

import math
import threading
from typing import Optional, Sequence

from pathtracker.core.imu.motion_sample import Acceleration, MotionSample

TWO_PI = 2.0 * math.pi


def normalize_heading(radians: float) -> float:
    """Wrap an angle into [0, 2π)."""
    wrapped = radians % TWO_PI
    # -1e-20 % 2π rounds to 2π in floating point
    return 0.0 if wrapped >= TWO_PI else wrapped


class LatestSampleCache:
    """Thread-safe single-slot store for the latest acceleration and heading."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._acceleration: Optional[Acceleration] = None
        self._heading: Optional[float] = None
        self.acceleration_updates = 0
        self.heading_updates = 0

    def on_acceleration_sample(self, vector) -> None:
        """Store a new acceleration vector; ``None`` payloads are dropped."""
        if vector is None:
            return
        if not isinstance(vector, Acceleration):
            x, y, z = _as_triplet(vector)
            vector = Acceleration(x, y, z)
        with self._lock:
            self._acceleration = vector
            self.acceleration_updates += 1

    def on_heading_sample(self, radians: Optional[float]) -> None:
        """Store a new heading in radians; ``None`` payloads are dropped."""
        if radians is None:
            return
        heading = normalize_heading(float(radians))
        with self._lock:
            self._heading = heading
            self.heading_updates += 1

    def read(self) -> Optional[MotionSample]:
        """Latest sample, or None until the first acceleration arrives."""
        with self._lock:
            if self._acceleration is None:
                return None
            return MotionSample(self._acceleration, self._heading)

    @property
    def latest_heading(self) -> Optional[float]:
        with self._lock:
            return self._heading

    def clear_acceleration(self) -> None:
        """Forget the last acceleration; the last heading stays known."""
        with self._lock:
            self._acceleration = None


def _as_triplet(vector: Sequence[float]):
    if hasattr(vector, "x"):
        return float(vector.x), float(vector.y), float(vector.z)
    x, y, z = vector
    return float(x), float(y), float(z)

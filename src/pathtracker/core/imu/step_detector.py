"""
Threshold step detection and dead-reckoning path integration.

This module turns the latest motion sample into discrete step events and
path displacement. It is evaluated once per tick by the tracking
controller.

Features:
- Strict threshold on a single gait axis (default: y, 0.05 g)
- Fixed average step length projected along the latest heading
- Configurable policy for ticks where no heading has been observed yet
- No filtering, no gravity compensation beyond the sensor's own
  "user acceleration"

Known limitation:
- There is no refractory period. A signal that stays above the threshold
  for N consecutive ticks counts as N steps, so the step rate is bounded
  only by the tick rate (10 steps/s at the default cadence). On real
  hardware this over-counts.

Usage:
    detector = StepDetector(threshold=0.05, axis="y")
    integrator = DeadReckoningIntegrator(detector, step_length=0.5)
    point = integrator.process(sample, last_point)
    if point is not None:
        # Append to the path and bump the step counter
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Tuple

from pathtracker.core.imu.motion_sample import ORIGIN, Acceleration, MotionSample, PathPoint
from pathtracker.utils.config_sections import TrackerConfig


class HeadingFallback(Enum):
    """What to do when a step is detected before any heading arrived."""
    ZERO = "zero"          # Treat the heading as 0 rad
    SUPPRESS = "suppress"  # Ignore the tick until a heading is known


class StepDetector:
    """Classify a tick as a step when the gait axis exceeds the threshold."""

    def __init__(self, threshold: float = 0.05, axis: str = "y") -> None:
        self.threshold = threshold
        self.axis = axis
        self.last_axis_value: Optional[float] = None

    def axis_value(self, acceleration: Acceleration) -> float:
        return acceleration.axis(self.axis)

    def is_step(self, acceleration: Acceleration) -> bool:
        value = self.axis_value(acceleration)
        self.last_axis_value = value
        return abs(value) > self.threshold


class DeadReckoningIntegrator:
    """Project detected steps onto the path plane."""

    def __init__(
        self,
        detector: StepDetector,
        step_length: float = 0.5,
        heading_fallback: HeadingFallback = HeadingFallback.ZERO,
    ) -> None:
        self.detector = detector
        self.step_length = step_length
        self.heading_fallback = heading_fallback

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "DeadReckoningIntegrator":
        detector = StepDetector(threshold=config.step_threshold, axis=config.gait_axis)
        return cls(
            detector,
            step_length=config.step_length_m,
            heading_fallback=HeadingFallback(config.heading_fallback),
        )

    def displacement(self, heading: float) -> Tuple[float, float]:
        return (
            math.cos(heading) * self.step_length,
            math.sin(heading) * self.step_length,
        )

    def next_point(self, last_point: Optional[PathPoint], heading: float) -> PathPoint:
        base = last_point if last_point is not None else ORIGIN
        dx, dy = self.displacement(heading)
        return PathPoint(base.x + dx, base.y + dy)

    def process(
        self, sample: Optional[MotionSample], last_point: Optional[PathPoint]
    ) -> Optional[PathPoint]:
        """Return the new path point for this tick, or None if no step."""
        if sample is None:
            return None
        if not self.detector.is_step(sample.acceleration):
            return None

        heading = sample.heading_radians
        if heading is None:
            if self.heading_fallback is HeadingFallback.SUPPRESS:
                return None
            heading = 0.0

        return self.next_point(last_point, heading)

"""Value types shared by the sampler, the integrator and the renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Acceleration:
    """Linear (user) acceleration in units of g."""
    x: float
    y: float
    z: float

    def axis(self, name: str) -> float:
        """Component along ``name`` ("x", "y" or "z")."""
        return getattr(self, name)


@dataclass(frozen=True)
class MotionSample:
    """Latest acceleration paired with the latest heading, if any."""
    acceleration: Acceleration
    heading_radians: Optional[float] = None


@dataclass(frozen=True)
class PathPoint:
    """Position on the path plane, in meters from the session origin."""
    x: float
    y: float


ORIGIN = PathPoint(0.0, 0.0)

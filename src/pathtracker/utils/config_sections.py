"""
Typed configuration sections for PathTracker.

This module provides strongly-typed configuration sections to replace
scattered getattr(Config, ...) calls with proper type hints and defaults.
Each section validates itself on construction so a bad value fails before
tracking starts instead of inside the tick.
"""

from dataclasses import dataclass
from typing import Tuple

GAIT_AXES = ("x", "y", "z")
HEADING_FALLBACKS = ("zero", "suppress")


@dataclass(frozen=True)
class TrackerConfig:
    """Configuration for step detection, path integration and cadence."""

    # Step detection
    step_threshold: float = 0.05  # g, a value equal to the threshold is not a step
    gait_axis: str = "y"

    # Path integration
    step_length_m: float = 0.5
    heading_fallback: str = "zero"

    # Cadence
    sample_interval_s: float = 0.1
    tick_interval_s: float = 0.1

    def __post_init__(self) -> None:
        if self.step_threshold < 0:
            raise ValueError(f"step_threshold must be >= 0, got {self.step_threshold}")
        if self.step_length_m <= 0:
            raise ValueError(f"step_length_m must be > 0, got {self.step_length_m}")
        if self.sample_interval_s <= 0:
            raise ValueError(f"sample_interval_s must be > 0, got {self.sample_interval_s}")
        if self.tick_interval_s <= 0:
            raise ValueError(f"tick_interval_s must be > 0, got {self.tick_interval_s}")
        if self.gait_axis not in GAIT_AXES:
            raise ValueError(f"gait_axis must be one of {GAIT_AXES}, got {self.gait_axis!r}")
        if self.heading_fallback not in HEADING_FALLBACKS:
            raise ValueError(
                f"heading_fallback must be one of {HEADING_FALLBACKS}, got {self.heading_fallback!r}"
            )


@dataclass(frozen=True)
class PathViewConfig:
    """Configuration for the OpenCV path view."""

    width: int = 480
    height: int = 300
    padding: float = 0.9  # Fraction of the canvas the path bounding box may fill
    window_name: str = "PathTracker"
    line_color: Tuple[int, int, int] = (255, 0, 0)
    line_thickness: int = 2

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"view size must be positive, got {self.width}x{self.height}")
        if not 0 < self.padding <= 1:
            raise ValueError(f"padding must be in (0, 1], got {self.padding}")


def load_tracker_config() -> TrackerConfig:
    """
    Load tracker configuration from Config with fallback defaults.

    Returns:
        TrackerConfig with values from Config or defaults
    """
    from pathtracker.utils.config import Config

    return TrackerConfig(
        step_threshold=getattr(Config, "STEP_THRESHOLD", 0.05),
        gait_axis=getattr(Config, "GAIT_AXIS", "y"),
        step_length_m=getattr(Config, "STEP_LENGTH_METERS", 0.5),
        heading_fallback=getattr(Config, "HEADING_FALLBACK", "zero"),
        sample_interval_s=getattr(Config, "SAMPLE_INTERVAL_SECONDS", 0.1),
        tick_interval_s=getattr(Config, "TICK_INTERVAL_SECONDS", 0.1),
    )


def load_path_view_config() -> PathViewConfig:
    """
    Load path view configuration from Config with fallback defaults.

    Returns:
        PathViewConfig with values from Config or defaults
    """
    from pathtracker.utils.config import Config

    return PathViewConfig(
        width=getattr(Config, "VIEW_WIDTH", 480),
        height=getattr(Config, "VIEW_HEIGHT", 300),
        padding=getattr(Config, "VIEW_PADDING", 0.9),
        window_name=getattr(Config, "VIEW_WINDOW_NAME", "PathTracker"),
        line_color=tuple(getattr(Config, "VIEW_LINE_COLOR", (255, 0, 0))),
        line_thickness=getattr(Config, "VIEW_LINE_THICKNESS", 2),
    )

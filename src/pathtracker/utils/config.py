"""
Centralized configuration for the PathTracker dead-reckoning system.

This module provides all configuration constants and runtime settings for:
- Step detection (gait axis, threshold)
- Path integration (average step length, heading fallback)
- Sampling and tick cadence
- Logging (console level, optional per-session log files)
- Path view rendering (canvas size, colors)

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation. Typed views
over these constants live in utils.config_sections.

Usage:
    from pathtracker.utils.config import Config

    threshold = Config.STEP_THRESHOLD
    if Config.DEBUG_MODE:
        # Log every detected step
"""


class Config:
    """System configuration constants for PathTracker."""

    # ==========================================================================
    # STEP DETECTION
    # ==========================================================================

    STEP_THRESHOLD = 0.05                   # g, strict ">" on the gait axis
    GAIT_AXIS = "y"                         # Axis read for the gait signal: "x", "y" or "z"

    # ==========================================================================
    # PATH INTEGRATION
    # ==========================================================================

    STEP_LENGTH_METERS = 0.5                # Average step length, no calibration
    HEADING_FALLBACK = "zero"               # Options: "zero" (heading=0 until known) or "suppress"

    # ==========================================================================
    # CADENCE
    # ==========================================================================

    SAMPLE_INTERVAL_SECONDS = 0.1           # Sensor update interval (10 Hz)
    TICK_INTERVAL_SECONDS = 0.1             # Integration tick interval (10 Hz)

    # ==========================================================================
    # LOGGING
    # ==========================================================================

    DEBUG_MODE = True                       # Log every detected step and lifecycle change
    LOG_LEVEL = "INFO"                      # Console level for the pathtracker namespace
    LOG_TO_FILES = False                    # Write per-session channel logs under logs/

    # ==========================================================================
    # PATH VIEW
    # ==========================================================================

    VIEW_WIDTH = 480
    VIEW_HEIGHT = 300
    VIEW_PADDING = 0.9                      # Fraction of the canvas used by the path
    VIEW_WINDOW_NAME = "PathTracker"
    VIEW_LINE_COLOR = (255, 0, 0)           # BGR blue
    VIEW_LINE_THICKNESS = 2

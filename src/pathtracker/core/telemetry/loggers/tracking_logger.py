"""
Dedicated logger for path tracking debugging.

This module provides a singleton logger that groups PathTracker logs into
named channels so sensor, detection and lifecycle events can be filtered
independently.

Features:
- Singleton pattern (one instance per session)
- Channels: sampler, detector, controller, view
- Console handler on the shared "pathtracker" namespace
- Optional per-channel log files in a session directory

Log Files (only when file logging is enabled):
- motion_sampler.log: Sensor availability and stream start/stop
- step_detector.log: Detected steps and new path points
- tracking_controller.log: start/stop/reset transitions
- path_view.log: Rendering events

Usage:
    from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger

    tracking_logger = get_tracking_logger()
    tracking_logger.detector.debug("Step detected...")
    tracking_logger.controller.info("Tracking started.")
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "pathtracker"

CHANNELS = {
    "sampler": "motion_sampler.log",
    "detector": "step_detector.log",
    "controller": "tracking_controller.log",
    "view": "path_view.log",
}

_FORMATTER = logging.Formatter(
    '%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s',
    datefmt='%H:%M:%S'
)


class TrackingLogger:
    """Singleton logger for path tracking."""

    _instance = None
    _initialized = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(
        self,
        level: Optional[str] = None,
        log_to_files: Optional[bool] = None,
        session_dir: Optional[Path] = None,
    ):
        if self._initialized:
            return

        from pathtracker.utils.config import Config

        level = level or getattr(Config, "LOG_LEVEL", "INFO")
        if log_to_files is None:
            log_to_files = getattr(Config, "LOG_TO_FILES", False)

        self.log_dir: Optional[Path] = None
        if log_to_files:
            if session_dir is None:
                timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
                session_dir = Path("logs") / f"session_{timestamp}"
            self.log_dir = Path(session_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.root = logging.getLogger(ROOT_LOGGER_NAME)
        self.root.setLevel(level.upper())
        if not any(getattr(h, "_pathtracker_console", False) for h in self.root.handlers):
            ch = logging.StreamHandler()
            ch.setFormatter(_FORMATTER)
            ch._pathtracker_console = True
            self.root.addHandler(ch)

        for name, filename in CHANNELS.items():
            self._setup_logger(name, filename)

        self._initialized = True

    def _setup_logger(self, name: str, filename: str):
        """Setup channel logger, with a file handler when a session dir is set."""
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
        logger.setLevel(logging.NOTSET)

        if self.log_dir is not None:
            fh = logging.FileHandler(self.log_dir / filename, mode='w')
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(_FORMATTER)
            logger.addHandler(fh)

        setattr(self, name, logger)

    def set_level(self, level: str) -> None:
        """Change the console level of the whole pathtracker namespace."""
        self.root.setLevel(level.upper())

    def close(self):
        """Close all file handlers."""
        for name in CHANNELS:
            logger = getattr(self, name, None)
            if logger:
                for handler in logger.handlers[:]:
                    handler.close()
                    logger.removeHandler(handler)


# Global instance
_tracking_logger = None


def get_tracking_logger(**kwargs) -> TrackingLogger:
    """Get or create tracking logger instance."""
    global _tracking_logger
    if _tracking_logger is None:
        _tracking_logger = TrackingLogger(**kwargs)
    return _tracking_logger

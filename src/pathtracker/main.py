#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PathTracker demo: dead-reckoning walking path from motion samples.

Runs the TrackingController against the synthetic motion backend and
plots the estimated path in an OpenCV window (or headless, logging the
step count).

Keys (window mode):
- s: start/stop tracking
- r: reset path
- q: quit
"""

import argparse
import logging
import time
from dataclasses import replace

from pathtracker.core.mock_motion_backend import SyntheticMotionBackend
from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger
from pathtracker.core.tracking.controller import TrackingController
from pathtracker.presentation.opencv_path_view import OpenCVPathView
from pathtracker.utils.config_sections import load_tracker_config
from pathtracker.utils.ctrl_handler import CtrlCHandler

log = logging.getLogger("pathtracker.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Dead-reckoning path tracker demo")
    parser.add_argument("--mode", choices=["walking", "stationary"], default="walking",
                        help="Synthetic motion to simulate")
    parser.add_argument("--duration", type=float, default=10.0,
                        help="Seconds to track before stopping (0 = until q / Ctrl+C)")
    parser.add_argument("--headless", action="store_true", help="Do not open the OpenCV window")
    parser.add_argument("--no-accelerometer", action="store_true",
                        help="Simulate a device without accelerometer")
    parser.add_argument("--no-device-motion", action="store_true",
                        help="Simulate a device without heading")
    parser.add_argument("--threshold", type=float, default=None, help="Step threshold in g")
    parser.add_argument("--step-length", type=float, default=None, help="Step length in meters")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed for the synthetic backend")
    parser.add_argument("--debug", action="store_true", help="Log every detected step")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    tracking_logger = get_tracking_logger()
    tracking_logger.set_level("DEBUG" if args.debug else "INFO")

    config = load_tracker_config()
    if args.threshold is not None:
        config = replace(config, step_threshold=args.threshold)
    if args.step_length is not None:
        config = replace(config, step_length_m=args.step_length)

    backend = SyntheticMotionBackend(
        mode=args.mode,
        accelerometer_available=not args.no_accelerometer,
        device_motion_available=not args.no_device_motion,
        seed=args.seed,
    )
    controller = TrackingController(backend, config=config, debug_mode=args.debug or None)
    view = OpenCVPathView(headless=args.headless)
    ctrl_handler = CtrlCHandler()

    log.info(f"Tracking '{args.mode}' walk for "
             f"{'ever' if args.duration <= 0 else f'{args.duration:.1f}s'} "
             f"(threshold={config.step_threshold} g, step={config.step_length_m} m)")

    controller.start()
    started = time.monotonic()
    try:
        while not ctrl_handler.should_stop:
            if args.duration > 0 and time.monotonic() - started >= args.duration:
                break

            key = view.show(controller.snapshot())
            if key == ord('q'):
                break
            elif key == ord('s'):
                if controller.is_tracking:
                    controller.stop()
                else:
                    controller.start()
            elif key == ord('r'):
                controller.reset()

            time.sleep(config.tick_interval_s)
    finally:
        controller.stop()
        view.close()
        tracking_logger.close()

    state = controller.snapshot()
    distance = state.step_count * config.step_length_m
    last = state.last_point
    log.info(f"Steps: {state.step_count}, distance walked ≈ {distance:.1f} m, "
             f"final position: {f'({last.x:.2f}, {last.y:.2f})' if last else 'origin'}")
    for issue in controller.sensor_issues:
        log.warning(f"Sensor issue during session: {issue}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

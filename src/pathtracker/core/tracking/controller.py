"""
Lifecycle controller for dead-reckoning path tracking.

This module owns the Idle/Tracking state machine and wires together:
- MotionSampler: backend sensor streams → LatestSampleCache
- Ticker: fixed-rate evaluation (ThreadTicker in production, ManualTicker in tests)
- DeadReckoningIntegrator: step detection + step projection per tick
- TrackStateStore: published path, step count and tracking flag

Concurrency model:
- Sensor callbacks only write the sample cache
- The tick is the only writer of path and step count
- reset() clears path and count in one locked update of the store
- Subscribers run on the thread that caused the mutation, which for steps
  is the tick thread. A start() or stop() issued from a tick subscriber
  is skipped with a warning while another thread holds the lifecycle, since
  that thread may be joining the tick

Control surface:
- start(): Idle → Tracking, starts sensors and tick (no-op when tracking)
- stop(): Tracking → Idle, stops tick then sensors (no-op when idle);
  path and count are kept
- reset(): clears path and count in either state

None of these raise: a missing sensor is logged and tracking continues
with no step detections.

Usage:
    controller = TrackingController(SyntheticMotionBackend())
    unsubscribe = controller.subscribe(lambda state: print(state.step_count))
    controller.start()
    ...
    controller.stop()
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import Callable, List, Optional

from pathtracker.core.hardware.motion_backend import MotionBackend, SensorUnavailable
from pathtracker.core.hardware.motion_sampler import MotionSampler
from pathtracker.core.imu.motion_sample import MotionSample, PathPoint
from pathtracker.core.imu.sample_cache import LatestSampleCache
from pathtracker.core.imu.step_detector import DeadReckoningIntegrator
from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger
from pathtracker.core.tracking.ticker import ThreadTicker, Ticker
from pathtracker.core.tracking.track_state import Subscriber, TrackState, TrackStateStore
from pathtracker.utils.config import Config
from pathtracker.utils.config_sections import TrackerConfig, load_tracker_config


class TrackingPhase(Enum):
    IDLE = "idle"
    TRACKING = "tracking"


class TrackingController:
    """Start/stop/reset control over sampling, tick and published path."""

    def __init__(
        self,
        backend: MotionBackend,
        config: Optional[TrackerConfig] = None,
        ticker: Optional[Ticker] = None,
        cache: Optional[LatestSampleCache] = None,
        debug_mode: Optional[bool] = None,
    ) -> None:
        self.config = config or load_tracker_config()
        self.cache = cache or LatestSampleCache()
        self.sampler = MotionSampler(backend, self.cache)
        self.integrator = DeadReckoningIntegrator.from_config(self.config)
        self.ticker: Ticker = ticker or ThreadTicker(name="TrackingTick")
        self.state = TrackStateStore()

        if debug_mode is None:
            debug_mode = getattr(Config, "DEBUG_MODE", False)
        self.debug_mode = debug_mode

        self._phase = TrackingPhase.IDLE
        self._lifecycle_lock = threading.RLock()
        self._tick_context = threading.local()
        self._log = get_tracking_logger().controller
        self._detector_log = get_tracking_logger().detector

    # ------------------------------------------------------------------
    # observation
    # ------------------------------------------------------------------

    @property
    def phase(self) -> TrackingPhase:
        return self._phase

    @property
    def is_tracking(self) -> bool:
        return self._phase is TrackingPhase.TRACKING

    @property
    def sensor_issues(self) -> List[SensorUnavailable]:
        return list(self.sampler.sensor_issues)

    def snapshot(self) -> TrackState:
        return self.state.snapshot()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Step snapshots are delivered on the tick thread."""
        return self.state.subscribe(callback)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if not self._acquire_lifecycle("start"):
            return
        try:
            if self._phase is TrackingPhase.TRACKING:
                return
            self._phase = TrackingPhase.TRACKING
            self.state.set_tracking(True)
            self.sampler.start(self.config.sample_interval_s)
            self.ticker.start(self._on_tick, self.config.tick_interval_s)
        finally:
            self._lifecycle_lock.release()

        if self.debug_mode:
            self._log.info("Tracking started.")

    def stop(self) -> None:
        if not self._acquire_lifecycle("stop"):
            return
        try:
            if self._phase is TrackingPhase.IDLE:
                return
            self._phase = TrackingPhase.IDLE
            # Tick first: no step may be recorded once stop() returns
            self.ticker.stop()
            self.sampler.stop()
            self.state.set_tracking(False)
        finally:
            self._lifecycle_lock.release()

        if self.debug_mode:
            self._log.info("Tracking stopped.")

    def reset(self) -> None:
        self.state.clear()
        if self.debug_mode:
            self._log.info("Path data reset.")

    def _acquire_lifecycle(self, operation: str) -> bool:
        if not getattr(self._tick_context, "active", False):
            self._lifecycle_lock.acquire()
            return True
        # Inside a tick: the lock holder may be waiting for this very tick
        if self._lifecycle_lock.acquire(blocking=False):
            return True
        self._log.warning(
            f"{operation}() from a tick subscriber skipped: another lifecycle change is in progress"
        )
        return False

    # ------------------------------------------------------------------
    # tick
    # ------------------------------------------------------------------

    def _on_tick(self) -> None:
        if self._phase is not TrackingPhase.TRACKING:
            return

        self._tick_context.active = True
        try:
            self._tick()
        finally:
            self._tick_context.active = False

    def _tick(self) -> None:
        sample = self.cache.read()
        if sample is None:
            return

        state = self.state.record_step(lambda last: self.integrator.process(sample, last))
        if state is not None and self.debug_mode:
            self._log_step(sample, state)

    def _log_step(self, sample: MotionSample, state: TrackState) -> None:
        axis = self.integrator.detector.axis
        point: PathPoint = state.path[-1]
        self._detector_log.debug(
            f"Step detected. {axis.upper()}-axis acceleration: "
            f"{sample.acceleration.axis(axis):.3f}"
        )
        self._detector_log.debug(
            f"New point added ({point.x:.2f}, {point.y:.2f}). Total points: {len(state.path)}"
        )

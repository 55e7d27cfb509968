"""
Published tracking state.

TrackStateStore is the single owner of the path, the step counter and the
tracking flag. Every mutation happens under one lock, so readers never see
a point without its step or a half-cleared path, and every mutation
publishes an immutable TrackState snapshot to the subscribers.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from pathtracker.core.imu.motion_sample import PathPoint
from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger

StepFunction = Callable[[Optional[PathPoint]], Optional[PathPoint]]
Subscriber = Callable[["TrackState"], None]


@dataclass(frozen=True)
class TrackState:
    """Snapshot of the tracking session as seen by renderers."""
    is_tracking: bool = False
    path: Tuple[PathPoint, ...] = field(default_factory=tuple)
    step_count: int = 0

    @property
    def last_point(self) -> Optional[PathPoint]:
        return self.path[-1] if self.path else None


class TrackStateStore:
    """Lock-protected path, step counter and tracking flag."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # Serializes publishing so subscribers see snapshots in mutation order
        self._publish_lock = threading.RLock()
        self._path: List[PathPoint] = []
        self._step_count = 0
        self._is_tracking = False
        self._subscribers: List[Subscriber] = []
        self._log = get_tracking_logger().controller

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def snapshot(self) -> TrackState:
        with self._lock:
            return self._snapshot_locked()

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    def record_step(self, step: StepFunction) -> Optional[TrackState]:
        """
        Compute and append one step atomically.

        ``step`` receives the last point (None for an empty path) and returns
        the new point, or None when this tick is not a step. Point and count
        are updated together; returns the published snapshot, or None.
        """
        with self._publish_lock:
            with self._lock:
                point = step(self._path[-1] if self._path else None)
                if point is None:
                    return None
                self._path.append(point)
                self._step_count += 1
                state = self._snapshot_locked()
            self._publish(state)
        return state

    def append_step(self, point: PathPoint) -> TrackState:
        return self.record_step(lambda _last: point)

    def clear(self) -> TrackState:
        with self._publish_lock:
            with self._lock:
                self._path = []
                self._step_count = 0
                state = self._snapshot_locked()
            self._publish(state)
        return state

    def set_tracking(self, is_tracking: bool) -> TrackState:
        with self._publish_lock:
            with self._lock:
                self._is_tracking = is_tracking
                state = self._snapshot_locked()
            self._publish(state)
        return state

    # ------------------------------------------------------------------
    # observation
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for every new snapshot; returns an unsubscribe function."""
        with self._publish_lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._publish_lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, state: TrackState) -> None:
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                self._log.exception(f"Track state subscriber {callback!r} failed")

    def _snapshot_locked(self) -> TrackState:
        return TrackState(
            is_tracking=self._is_tracking,
            path=tuple(self._path),
            step_count=self._step_count,
        )

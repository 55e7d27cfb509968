from pathtracker.core.tracking.controller import TrackingController, TrackingPhase
from pathtracker.core.tracking.ticker import ManualTicker, ThreadTicker
from pathtracker.core.tracking.track_state import TrackState, TrackStateStore

__all__ = [
    "ManualTicker",
    "ThreadTicker",
    "TrackState",
    "TrackStateStore",
    "TrackingController",
    "TrackingPhase",
]

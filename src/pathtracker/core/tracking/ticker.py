"""
Periodic tick sources for the tracking controller.

- ThreadTicker: wall-clock ticks on a daemon thread
- ManualTicker: ticks only when tick() is called, for deterministic tests
  and offline replay

Both guarantee that once stop() returns no further callback runs, except
when stop() is called from inside a callback, in which case the current
callback finishes and no new one starts.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Protocol

TickCallback = Callable[[], None]


class Ticker(Protocol):
    @property
    def running(self) -> bool: ...

    def start(self, callback: TickCallback, interval: float) -> None: ...

    def stop(self) -> None: ...


class ThreadTicker:
    """Fire a callback every ``interval`` seconds on a background thread."""

    def __init__(self, name: str = "TrackingTicker") -> None:
        self.name = name
        self.tick_count = 0
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self, callback: TickCallback, interval: float) -> None:
        if self.running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(callback, interval, self._stop_event),
            name=self.name,
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        self._thread = None
        if thread is not threading.current_thread() and thread.is_alive():
            thread.join()

    def _run(self, callback: TickCallback, interval: float, stop_event: threading.Event) -> None:
        # Fixed-rate; fires missed during a slow callback are skipped, never replayed
        next_deadline = time.monotonic() + interval
        while not stop_event.wait(max(0.0, next_deadline - time.monotonic())):
            callback()
            self.tick_count += 1
            next_deadline += interval
            now = time.monotonic()
            if next_deadline <= now:
                next_deadline = now + interval


class ManualTicker:
    """Tick source driven explicitly by the caller."""

    def __init__(self) -> None:
        self.interval: Optional[float] = None
        self.tick_count = 0
        self.start_calls = 0
        self._callback: Optional[TickCallback] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback, interval: float) -> None:
        if self.running:
            return
        self.start_calls += 1
        self.interval = interval
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def tick(self, count: int = 1) -> int:
        """Run up to ``count`` ticks; returns how many actually fired."""
        fired = 0
        for _ in range(count):
            callback = self._callback
            if callback is None:
                break
            callback()
            self.tick_count += 1
            fired += 1
        return fired

"""
Golf Worlds - Scheduler
========================
Stand-in for the host's animation-frame and timeout services.

The host loop calls :meth:`Scheduler.pump` once per rendered frame:
due one-shot timers fire first, then every frame callback that was
requested *before* the pump started.  Callbacks requested while the
pump is running wait for the next one, so a self-rescheduling loop
runs exactly once per host frame.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class Scheduler:
    """Frame and timer queues driven by an injectable millisecond clock."""

    def __init__(self, clock: Callable[[], float]) -> None:
        self._clock = clock
        self._handles = itertools.count(1)
        self._frames: dict[int, FrameCallback] = {}
        self._in_flight: dict[int, FrameCallback] = {}
        self._timers: list[tuple[float, int, Callable[[], None]]] = []
        self._live_timers: set[int] = set()

    def now(self) -> float:
        return float(self._clock())

    # ── Animation frames ────────────────────────────────────────────
    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._frames[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._frames.pop(handle, None)
        self._in_flight.pop(handle, None)

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    # ── One-shot timers ─────────────────────────────────────────────
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._handles)
        heapq.heappush(self._timers, (self.now() + max(0.0, delay_ms), handle, callback))
        self._live_timers.add(handle)
        return handle

    def cancel(self, handle: int) -> None:
        self._live_timers.discard(handle)

    @property
    def pending_timers(self) -> int:
        return len(self._live_timers)

    # ── Pump ────────────────────────────────────────────────────────
    def pump(self) -> None:
        now = self.now()
        self._run_timers(now)
        self._in_flight, self._frames = self._frames, {}
        for handle in sorted(self._in_flight):
            callback = self._in_flight.pop(handle, None)
            if callback is not None:
                callback(now)
        self._in_flight = {}

    def _run_timers(self, now: float) -> None:
        while self._timers and self._timers[0][0] <= now:
            _, handle, callback = heapq.heappop(self._timers)
            if handle not in self._live_timers:
                continue
            self._live_timers.discard(handle)
            callback()

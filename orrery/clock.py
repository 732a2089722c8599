#!/usr/bin/env python3
"""
Frame clock: elapsed simulation time and per-frame delta.

The clock owns the frame callbacks. Each `tick` reads the time source once,
advances elapsed time by the non-negative gap since the previous tick and
invokes every callback with (elapsed, delta) in registration order.
"""
import time
from typing import Callable, List, Tuple

FrameCallback = Callable[[float, float], None]


class FrameClock:
    def __init__(self, time_source: Callable[[], float] = time.perf_counter):
        self._time_source = time_source
        self._last = time_source()
        self.elapsed = 0.0
        self._callbacks: List[FrameCallback] = []

    def on_frame(self, callback: FrameCallback) -> None:
        self._callbacks.append(callback)

    def tick(self) -> Tuple[float, float]:
        now = self._time_source()
        # Guard against a time source stepping backwards
        delta = max(0.0, now - self._last)
        self._last = now
        self.elapsed += delta
        for cb in self._callbacks:
            cb(self.elapsed, delta)
        return self.elapsed, delta

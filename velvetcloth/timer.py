"""Frame timing, fixed-step scheduling and labelled stopwatches."""

from __future__ import annotations

import time
from typing import Callable


class Timer:
    """Tracks frame and physics time and named CPU timers (in seconds)."""

    MAX_DELTA_TIME = 0.2
    FIXED_DELTA_TIME = 1.0 / 60.0

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock if clock is not None else time.perf_counter
        self._times: dict[str, float] = {}
        self._history: dict[str, float] = {}
        self._frames: dict[str, int] = {}
        self._accumulated: dict[str, float] = {}

        self._frame_count = 0
        self._physics_frame_count = 0
        self._elapsed_time = 0.0
        self._delta_time = 0.0

        now = self.current_time()
        self._last_update_time = now
        self._fixed_update_timer = now

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def physics_frame_count(self) -> int:
        return self._physics_frame_count

    @property
    def elapsed_time(self) -> float:
        return self._elapsed_time

    @property
    def delta_time(self) -> float:
        return self._delta_time

    @property
    def fixed_delta_time(self) -> float:
        return self.FIXED_DELTA_TIME

    def current_time(self) -> float:
        return float(self._clock())

    def start_timer(self, label: str) -> None:
        self._times[label] = self.current_time()

    def end_timer(self, label: str, frame: int = -1) -> float:
        """Seconds since ``start_timer``; repeated calls in one frame accumulate."""
        if label not in self._times:
            raise KeyError(f"end_timer with undefined label {label!r}")
        elapsed = self.current_time() - self._times[label]
        if frame == -1:
            frame = self._frame_count
        if frame > self._frames.get(label, 0):
            self._history[label] = elapsed
        else:
            self._history[label] = self._history.get(label, 0.0) + elapsed
        self._frames[label] = frame
        return self._history[label]

    def get_timer(self, label: str) -> float:
        return self._history.get(label, 0.0)

    def update_delta_time(self) -> None:
        current = self.current_time()
        self._delta_time = min(current - self._last_update_time, self.MAX_DELTA_TIME)
        self._last_update_time = current

    def next_frame(self) -> None:
        self._frame_count += 1
        self._elapsed_time += self._delta_time

    def next_fixed_frame(self) -> bool:
        """True when a fixed (physics) update should run this frame."""
        self._fixed_update_timer += self._delta_time
        if self._fixed_update_timer > self.FIXED_DELTA_TIME:
            self._fixed_update_timer = 0.0
            self._physics_frame_count += 1
            return True
        return False

    def periodic_update(self, label: str, interval: float, allow_repetition: bool = True) -> bool:
        """True at most once per ``interval`` of elapsed frame time for ``label``."""
        accumulated = self._accumulated.setdefault(label, 0.0)
        if accumulated < self._elapsed_time:
            self._accumulated[label] = (
                accumulated + interval if allow_repetition else self._elapsed_time + interval
            )
            return True
        return False
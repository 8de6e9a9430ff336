# scheduler.py
"""
Frame and interval scheduling.

FrameScheduler holds at most one "run before the next frame" callback and
runs it when asked, which makes frame-by-frame behavior deterministic in
tests. ClockScheduler adds the pygame frame clock on top of it for the real
display. IntervalTimer fires a callback every fixed interval against an
explicit millisecond clock.
"""
import logging
import pygame
from typing import Callable, Optional

# --- Data Contracts ---
#
# class FrameScheduler:
#   - schedule(self, callback: Callable[[], None]) -> None:
#     - Side Effects: Replaces the pending callback. Only one frame callback
#       is ever pending.
#   - cancel(self) -> None: drops the pending callback, if any.
#   - run_pending(self) -> bool:
#     - Outputs: False if nothing was pending, True after running the callback.
#     - Invariants: The callback is detached before it runs, so a callback
#       that reschedules itself runs again on the next call, not this one.
#
# class IntervalTimer:
#   - start(self, callback: Callable[[float], None], now_ms: float) -> None
#   - poll(self, now_ms: float) -> int:
#     - Outputs: number of ticks fired. At most one per poll; a late poll
#       does not replay missed intervals.
#     - Side Effects: Calls callback(elapsed_ms) where elapsed_ms is measured
#       from start().
#   - stop(self) -> None: no further ticks fire.


class FrameScheduler:
    """
    A deterministic single-slot frame scheduler.
    """
    def __init__(self):
        self._pending: Optional[Callable[[], None]] = None
        self.frames_run = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def cancel(self) -> None:
        if self._pending is not None:
            logging.debug("Pending frame callback cancelled.")
        self._pending = None

    def _wait_for_frame(self) -> None:
        pass

    def run_pending(self) -> bool:
        """
        Waits for the next frame and runs the pending callback.

        Returns:
            bool: False if no callback was pending, True otherwise.
        """
        if self._pending is None:
            return False
        self._wait_for_frame()
        callback, self._pending = self._pending, None
        callback()
        self.frames_run += 1
        return True


class ClockScheduler(FrameScheduler):
    """
    Paces frame callbacks to the display rate with a pygame clock.
    """
    def __init__(self, fps: int):
        super().__init__()
        self.fps = fps
        self.clock = pygame.time.Clock()

    def _wait_for_frame(self) -> None:
        self.clock.tick(self.fps)


class IntervalTimer:
    """
    Fires a callback every `interval_ms` milliseconds of an external clock.
    """
    def __init__(self, interval_ms: float):
        if interval_ms <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval_ms}.")
        self.interval_ms = float(interval_ms)
        self._callback: Optional[Callable[[float], None]] = None
        self._start_ms = 0.0
        self._last_ms = 0.0
        self.ticks = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[float], None], now_ms: float) -> None:
        self._callback = callback
        self._start_ms = float(now_ms)
        self._last_ms = float(now_ms)
        self.ticks = 0
        logging.debug(f"Interval timer started ({self.interval_ms:.0f} ms).")

    def stop(self) -> None:
        if self._callback is not None:
            logging.debug(f"Interval timer stopped after {self.ticks} ticks.")
        self._callback = None

    def poll(self, now_ms: float) -> int:
        if self._callback is None or now_ms - self._last_ms < self.interval_ms:
            return 0
        self._last_ms = float(now_ms)
        self.ticks += 1
        self._callback(now_ms - self._start_ms)
        return 1

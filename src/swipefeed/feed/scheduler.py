"""
Cancellable timers for the feed engine.

The engine never sleeps or polls; it asks a scheduler to call it back.
QtScheduler runs on the Qt event loop, ManualScheduler advances virtual
time explicitly (tests and script replay).
"""
import heapq
import itertools
import time
from typing import Callable, List, Tuple

from PyQt5.QtCore import QTimer


class TimerHandle:
    """Handle returned by Scheduler.schedule()."""

    def __init__(self):
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self):
        self._cancelled = True


class Scheduler:
    """Interface: a millisecond clock plus one-shot callbacks."""

    def now(self) -> float:
        raise NotImplementedError

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


class ManualScheduler(Scheduler):
    """
    Scheduler driven by advance().

    Callbacks due at the same instant run in the order they were scheduled.
    Callbacks scheduled while advancing run in the same advance() call if
    they fall due before its end.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, TimerHandle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle()
        due = self._now + max(0.0, float(delay_ms))
        heapq.heappush(self._queue, (due, next(self._seq), handle, callback))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if entry[2].active)

    def advance(self, ms: float):
        """Move virtual time forward by ms, firing every callback that falls due."""
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now = due
            handle._fired = True
            callback()
        self._now = target

    def run_until_idle(self, limit_ms: float = 60000.0):
        """Advance until no active callback remains (bounded by limit_ms)."""
        start = self._now
        while self.pending and self._now - start < limit_ms:
            next_due = min(entry[0] for entry in self._queue if entry[2].active)
            self.advance(max(0.0, next_due - self._now))


class _QtTimerHandle(TimerHandle):
    def __init__(self, timer: QTimer, owner: "QtScheduler"):
        super().__init__()
        self._timer = timer
        self._owner = owner

    def cancel(self):
        super().cancel()
        self._timer.stop()
        self._owner._release(self)


class QtScheduler(Scheduler):
    """Scheduler backed by single-shot QTimers on the calling thread's event loop."""

    def __init__(self, parent=None):
        self._parent = parent
        self._live: List[_QtTimerHandle] = []  # keep timers referenced until they fire

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = _QtTimerHandle(timer, self)

        def fire():
            if not handle.active:
                return
            handle._fired = True
            self._release(handle)
            callback()

        timer.timeout.connect(fire)
        self._live.append(handle)
        timer.start(max(0, int(round(delay_ms))))
        return handle

    def _release(self, handle: _QtTimerHandle):
        if handle in self._live:
            self._live.remove(handle)

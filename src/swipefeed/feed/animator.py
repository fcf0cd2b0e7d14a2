"""
Card transition animation.

Motion is modelled explicitly (a timed tween for card exit, a
spring-damper for everything that settles) and visual parameters are
plain functions of the current offset, so any renderer can draw a frame
from a CardVisuals snapshot.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Sequence

import numpy as np

from ..config import AnimationConfig
from ..models import Offset, ORIGIN
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class MotionKind(Enum):
    """What the card is currently doing."""
    EXIT = auto()       # leaving the screen after like/dislike
    RETURN = auto()     # springing back to origin (cancel, details dismissed)
    REENTER = auto()    # coming back after undo
    PEEK = auto()       # lifting up while the detail view is open


@dataclass(frozen=True)
class CardVisuals:
    """Everything a renderer needs for one frame of the card stack."""
    offset: Offset = ORIGIN
    rotation_deg: float = 0.0
    like_opacity: float = 0.0
    nope_opacity: float = 0.0
    next_scale: float = 0.9
    next_translate_y: float = 40.0


def interpolate(value: float, input_range: Sequence[float], output_range: Sequence[float]) -> float:
    """Piecewise-linear interpolation, clamped outside input_range."""
    return float(np.interp(value, input_range, output_range))


def card_visuals(offset: Offset, next_scale: float, config: AnimationConfig) -> CardVisuals:
    """Derive rotation, label opacities and next-card transform from the offset."""
    w = config.screen_width
    return CardVisuals(
        offset=offset,
        rotation_deg=interpolate(offset.x, [-w / 2, 0, w / 2], [-10.0, 0.0, 10.0]),
        like_opacity=interpolate(offset.x, [10, w / 4], [0.0, 1.0]),
        nope_opacity=interpolate(offset.x, [-w / 4, -10], [1.0, 0.0]),
        next_scale=next_scale,
        next_translate_y=interpolate(next_scale, [config.next_card_scale, 1.0], [40.0, 0.0]),
    )


class _Tween:
    """Ease-in-out timed motion between two offsets."""

    def __init__(self, start: Offset, end: Offset, start_ms: float, duration_ms: float):
        self.start = start
        self.end = end
        self.start_ms = start_ms
        self.duration_ms = duration_ms

    def progress(self, now: float) -> float:
        p = (now - self.start_ms) / self.duration_ms
        return max(0.0, min(1.0, p))

    def offset_at(self, now: float) -> Offset:
        p = 0.5 - math.cos(math.pi * self.progress(now)) / 2.0
        return Offset(
            self.start.x + (self.end.x - self.start.x) * p,
            self.start.y + (self.end.y - self.start.y) * p,
        )


class _Spring:
    """
    Spring-damper pulling the card toward a target.

    F = -k * (pos - target) - c * vel, integrated with semi-implicit Euler
    in sub-steps for stability.
    """

    SUB_STEPS = 4

    def __init__(self, start: Offset, target: Offset, start_ms: float, config: AnimationConfig):
        self.target = target
        self.start_ms = start_ms
        self._config = config
        self._pos = (start.x, start.y)
        self._vel = (0.0, 0.0)
        self._last_ms = start_ms

    @property
    def offset(self) -> Offset:
        return Offset(*self._pos)

    def step_to(self, now: float):
        # Clamp dt to avoid blow-ups after a stalled frame
        dt = min(now - self._last_ms, 100.0) / 1000.0
        self._last_ms = now
        if dt <= 0:
            return

        k = self._config.spring_stiffness
        c = self._config.spring_damping
        m = self._config.spring_mass
        sub_dt = dt / self.SUB_STEPS

        px, py = self._pos
        vx, vy = self._vel
        tx, ty = self.target.x, self.target.y
        for _ in range(self.SUB_STEPS):
            ax = (-k * (px - tx) - c * vx) / m
            ay = (-k * (py - ty) - c * vy) / m
            vx += ax * sub_dt
            vy += ay * sub_dt
            px += vx * sub_dt
            py += vy * sub_dt
        self._pos = (px, py)
        self._vel = (vx, vy)

    def settled(self, now: float) -> bool:
        if now - self.start_ms >= self._config.spring_max_ms:
            return True
        dist = math.hypot(self._pos[0] - self.target.x, self._pos[1] - self.target.y)
        speed = math.hypot(*self._vel)
        return (dist < self._config.spring_rest_distance
                and speed < self._config.spring_rest_speed)


class TransitionAnimator:
    """
    Runs at most one card motion at a time.

    When a motion completes its callback runs from the scheduler. Starting
    a new motion replaces the running one without firing its callback.
    """

    def __init__(self, scheduler: Scheduler, config: AnimationConfig):
        self._scheduler = scheduler
        self._config = config
        self._rest = ORIGIN
        self._kind: Optional[MotionKind] = None
        self._motion = None
        self._timer: Optional[TimerHandle] = None
        self._on_complete: Optional[Callable[[], None]] = None

    @property
    def kind(self) -> Optional[MotionKind]:
        return self._kind

    @property
    def running(self) -> bool:
        return self._kind is not None

    def offset(self) -> Offset:
        """Offset of the top card at the scheduler's current time."""
        if isinstance(self._motion, _Tween):
            return self._motion.offset_at(self._scheduler.now())
        if isinstance(self._motion, _Spring):
            return self._motion.offset
        return self._rest

    def next_scale(self) -> float:
        """Scale of the card underneath; grows to 1.0 while the top card exits."""
        base = self._config.next_card_scale
        if self._kind is MotionKind.EXIT:
            p = self._motion.progress(self._scheduler.now())
            return base + (1.0 - base) * p
        return base

    def visuals(self, offset: Optional[Offset] = None) -> CardVisuals:
        return card_visuals(offset if offset is not None else self.offset(),
                            self.next_scale(), self._config)

    def exit_distance(self) -> float:
        return self._config.screen_width * 1.5

    def play_exit(self, start: Offset, sign: int, on_complete: Callable[[], None]):
        """Tween the card off-screen horizontally."""
        self.stop()
        end = Offset(sign * self.exit_distance(), 0.0)
        self._kind = MotionKind.EXIT
        self._motion = _Tween(start, end, self._scheduler.now(), self._config.exit_duration_ms)
        self._on_complete = on_complete
        self._timer = self._scheduler.schedule(self._config.exit_duration_ms, self._complete)

    def play_spring(self, kind: MotionKind, start: Offset, target: Offset,
                    on_complete: Optional[Callable[[], None]] = None):
        """Spring from start to target."""
        self.stop()
        self._kind = kind
        self._motion = _Spring(start, target, self._scheduler.now(), self._config)
        self._on_complete = on_complete
        self._timer = self._scheduler.schedule(self._config.frame_interval_ms, self._tick)

    def _tick(self):
        spring = self._motion
        now = self._scheduler.now()
        spring.step_to(now)
        if spring.settled(now):
            self._complete()
        else:
            self._timer = self._scheduler.schedule(self._config.frame_interval_ms, self._tick)

    def _complete(self):
        motion = self._motion
        self._rest = motion.end if isinstance(motion, _Tween) else motion.target
        callback = self._on_complete
        self._clear()
        if callback is not None:
            callback()

    def finish(self, run_callback: bool = True):
        """Jump the running motion to its end and, unless told not to, fire its callback now."""
        if not self.running:
            return
        logger.debug("Finishing %s motion early", self._kind.name)
        if self._timer is not None:
            self._timer.cancel()
        if not run_callback:
            self._on_complete = None
        self._complete()

    def stop(self, rest: Optional[Offset] = None):
        """Abandon the running motion without its callback."""
        if self._timer is not None:
            self._timer.cancel()
        if rest is not None:
            self._rest = rest
        elif self.running:
            self._rest = self.offset()
        self._clear()

    def set_rest(self, offset: Offset):
        self.stop(rest=offset)

    def _clear(self):
        self._kind = None
        self._motion = None
        self._timer = None
        self._on_complete = None

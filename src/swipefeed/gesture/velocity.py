"""
Drag velocity estimation.
Raw per-sample velocity is noisy on touch screens, so each axis is run
through a One Euro filter before being reported.
"""
import math
from typing import Optional, Tuple

from ..config import GestureConfig


class OneEuroFilter:
    def __init__(self, t0, x0, dx0=0.0, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        """
        Initialize the One Euro Filter.

        Args:
            t0: Initial time in seconds
            x0: Initial value
            dx0: Initial derivative, default 0.0
            min_cutoff: Minimum cutoff frequency in Hz. Lower = more smoothing at low speed.
            beta: Speed coefficient. Higher = less lag at high speed.
            d_cutoff: Cutoff frequency for derivative smoothing (Hz).
        """
        self.min_cutoff = min_cutoff
        self.beta = beta
        self.d_cutoff = d_cutoff

        self.x_prev = float(x0)
        self.dx_prev = float(dx0)
        self.t_prev = float(t0)

    @staticmethod
    def _alpha(t_e, cutoff):
        r = 2 * math.pi * cutoff * t_e
        return r / (r + 1)

    def __call__(self, t, x):
        """Filter one sample and return the smoothed value."""
        t_e = t - self.t_prev

        # Out-of-order or duplicate timestamps keep the last estimate
        if t_e <= 0.0:
            return self.x_prev

        a_d = self._alpha(t_e, self.d_cutoff)
        dx = (x - self.x_prev) / t_e
        dx_hat = a_d * dx + (1 - a_d) * self.dx_prev

        # Cutoff rises with speed so fast flicks are not lagged
        cutoff = self.min_cutoff + self.beta * abs(dx_hat)
        a = self._alpha(t_e, cutoff)
        x_hat = a * x + (1 - a) * self.x_prev

        self.x_prev = x_hat
        self.dx_prev = dx_hat
        self.t_prev = t
        return x_hat


class VelocityEstimator:
    """Smoothed 2-D velocity (px/s) from timestamped pointer positions."""

    def __init__(self, config: GestureConfig):
        self._config = config
        self._last: Optional[Tuple[float, float, float]] = None  # (t, x, y)
        self._filter_x: Optional[OneEuroFilter] = None
        self._filter_y: Optional[OneEuroFilter] = None
        self._velocity: Tuple[float, float] = (0.0, 0.0)

    @property
    def velocity(self) -> Tuple[float, float]:
        return self._velocity

    def reset(self, t: float, x: float, y: float):
        self._last = (t, x, y)
        self._filter_x = None
        self._filter_y = None
        self._velocity = (0.0, 0.0)

    def update(self, t: float, x: float, y: float) -> Tuple[float, float]:
        if self._last is None:
            self.reset(t, x, y)
            return self._velocity

        lt, lx, ly = self._last
        dt = t - lt
        if dt <= 0:
            return self._velocity
        self._last = (t, x, y)

        vx = (x - lx) / dt
        vy = (y - ly) / dt

        if self._filter_x is None:
            cfg = self._config
            self._filter_x = OneEuroFilter(
                lt, vx, min_cutoff=cfg.velocity_min_cutoff,
                beta=cfg.velocity_beta, d_cutoff=cfg.velocity_d_cutoff,
            )
            self._filter_y = OneEuroFilter(
                lt, vy, min_cutoff=cfg.velocity_min_cutoff,
                beta=cfg.velocity_beta, d_cutoff=cfg.velocity_d_cutoff,
            )
            self._velocity = (vx, vy)
        else:
            self._velocity = (self._filter_x(t, vx), self._filter_y(t, vy))
        return self._velocity

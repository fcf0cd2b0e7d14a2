"""
Gesture tracking for the card stack.
Turns a pointer press/move/release stream into a drag offset and velocity.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import GestureConfig
from ..models import Offset, ORIGIN
from .velocity import VelocityEstimator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GestureRelease:
    """Finalized gesture handed to the classifier."""
    offset: Offset
    velocity: Tuple[float, float] = (0.0, 0.0)
    was_drag: bool = False


class GestureTracker:
    """
    Tracks a single active drag.

    The tracker only knows about pointer geometry. Whether a gesture is
    allowed to start is decided by the caller and passed to begin().
    """

    def __init__(self, config: GestureConfig):
        self._config = config
        self._active = False
        self._is_drag = False
        self._origin: Tuple[float, float] = (0.0, 0.0)
        self._offset = ORIGIN
        self._velocity = VelocityEstimator(config)

    @property
    def active(self) -> bool:
        return self._active

    @property
    def is_drag(self) -> bool:
        return self._is_drag

    @property
    def offset(self) -> Offset:
        return self._offset

    @property
    def velocity(self) -> Tuple[float, float]:
        return self._velocity.velocity

    def begin(self, x: float, y: float, t: float, allowed: bool = True) -> bool:
        """
        Start tracking a press at (x, y).

        Args:
            x, y: Pointer position in pixels
            t: Timestamp in seconds
            allowed: Start condition evaluated by the owner (not animating,
                no overlay shown, feed non-empty)

        Returns:
            True if the gesture is now being tracked.
        """
        if not allowed:
            logger.debug("Gesture start ignored")
            return False
        self._active = True
        self._is_drag = False
        self._origin = (x, y)
        self._offset = ORIGIN
        self._velocity.reset(t, x, y)
        return True

    def move(self, x: float, y: float, t: float) -> Offset:
        """Update the drag with a new pointer position."""
        if not self._active:
            return self._offset

        dx = x - self._origin[0]
        dy = y - self._origin[1]
        self._velocity.update(t, x, y)

        if not self._is_drag:
            threshold = self._config.drag_start_threshold
            if abs(dx) < threshold and abs(dy) < threshold:
                return self._offset
            self._is_drag = True

        # 1:1 with the pointer, no damping
        self._offset = Offset(dx, dy)
        return self._offset

    def release(self) -> Optional[GestureRelease]:
        """Finish the gesture and reset the offset to origin."""
        if not self._active:
            return None
        result = GestureRelease(
            offset=self._offset if self._is_drag else ORIGIN,
            velocity=self._velocity.velocity,
            was_drag=self._is_drag,
        )
        self.cancel()
        return result

    def cancel(self):
        """Drop the active gesture without producing a release."""
        self._active = False
        self._is_drag = False
        self._offset = ORIGIN

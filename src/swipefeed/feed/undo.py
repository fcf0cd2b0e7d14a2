"""
Undo window: one-level undo of the most recent like/dislike, for a limited time.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..models import Decision
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UndoState:
    """Public view of the undo window."""
    available: bool = False
    direction: Optional[Decision] = None
    armed_at: Optional[float] = None


@dataclass(frozen=True)
class UndoTicket:
    """What consume() hands back so the caller can reverse the decision."""
    direction: Decision
    prior_index: int
    item_id: str


IDLE = UndoState()


class UndoWindow:
    """
    State machine idle -> armed -> idle.

    arm() always starts a fresh window, discarding whatever was armed.
    The expiry timer is cancelled on every exit from armed.
    """

    def __init__(self, scheduler: Scheduler, window_ms: int = 3000,
                 on_change: Optional[Callable[[UndoState], None]] = None):
        self._scheduler = scheduler
        self._window_ms = window_ms
        self._on_change = on_change
        self._state = IDLE
        self._ticket: Optional[UndoTicket] = None
        self._timer: Optional[TimerHandle] = None

    @property
    def state(self) -> UndoState:
        return self._state

    @property
    def armed(self) -> bool:
        return self._state.available

    def arm(self, direction: Decision, prior_index: int, item_id: str):
        self._cancel_timer()
        now = self._scheduler.now()
        self._ticket = UndoTicket(direction, prior_index, item_id)
        self._timer = self._scheduler.schedule(self._window_ms, self._expire)
        self._set(UndoState(available=True, direction=direction, armed_at=now))

    def consume(self) -> Optional[UndoTicket]:
        """Take the armed undo, or None when idle."""
        if not self.armed:
            return None
        ticket = self._ticket
        self.disarm()
        return ticket

    def disarm(self):
        self._cancel_timer()
        self._ticket = None
        if self._state != IDLE:
            self._set(IDLE)

    def _expire(self):
        self._timer = None
        logger.debug("Undo window expired for %s", self._ticket.item_id if self._ticket else None)
        self._ticket = None
        self._set(IDLE)

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set(self, state: UndoState):
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

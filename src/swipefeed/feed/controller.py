"""
Swipe feed controller.

Owns the card-stack state machine: gesture tracking, decision
classification, cursor movement, transition animation and the undo
window. Collaborators (scheduler, interaction log, clock) are injected so
the whole engine can run against virtual time.
"""
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from ..config import Config
from ..gesture import GestureTracker, classify
from ..models import Decision, Item, Offset, ORIGIN
from ..ranking import InteractionLog
from .animator import CardVisuals, MotionKind, TransitionAnimator
from .cursor import FeedCursor
from .scheduler import Scheduler
from .undo import UndoState, UndoWindow

logger = logging.getLogger(__name__)


def epoch_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class FeedState:
    """Snapshot of the controller for hosts and tests."""
    items: Tuple[Item, ...]
    cursor: int
    drag_offset: Offset
    animating: bool
    details_visible: bool
    undo: UndoState
    velocity: Tuple[float, float] = (0.0, 0.0)


class SwipeFeedController:
    """
    Gesture-driven card feed.

    Host callbacks (all optional, assign after construction):
        on_decision(decision, item): every completed gesture or button swipe
        on_details(item): the detail view should be shown for item
        on_item_changed(item): the visible card changed (None when empty)
        on_undo_changed(state): undo availability changed

    Args:
        config: Full configuration
        scheduler: Timer source (QtScheduler in an app, ManualScheduler in tests)
        log: Interaction log receiving committed likes/dislikes
        items: Initial item list
        clock: Returns epoch milliseconds for interaction timestamps
    """

    def __init__(
        self,
        config: Config,
        scheduler: Scheduler,
        log: InteractionLog,
        items: Optional[Sequence[Item]] = None,
        clock: Callable[[], int] = epoch_ms,
    ):
        self._config = config
        self._scheduler = scheduler
        self._log = log
        self._clock = clock

        self._tracker = GestureTracker(config.gestures)
        self._cursor = FeedCursor(items)
        self._animator = TransitionAnimator(scheduler, config.animation)
        self._undo = UndoWindow(scheduler, config.undo.window_ms, on_change=self._undo_changed)

        self._animating = False
        self._details_visible = False
        self._closed = False
        self._release_velocity: Tuple[float, float] = (0.0, 0.0)

        self.on_decision: Optional[Callable[[Decision, Optional[Item]], None]] = None
        self.on_details: Optional[Callable[[Item], None]] = None
        self.on_item_changed: Optional[Callable[[Optional[Item]], None]] = None
        self.on_undo_changed: Optional[Callable[[UndoState], None]] = None

    # ------------------------------------------------------------------
    # State

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._cursor.items

    @property
    def cursor(self) -> int:
        return self._cursor.index

    @property
    def current_item(self) -> Optional[Item]:
        return self._cursor.current

    @property
    def next_item(self) -> Optional[Item]:
        return self._cursor.next

    @property
    def animating(self) -> bool:
        return self._animating

    @property
    def details_visible(self) -> bool:
        return self._details_visible

    @property
    def undo_state(self) -> UndoState:
        return self._undo.state

    @property
    def drag_offset(self) -> Offset:
        if self._tracker.active:
            return self._tracker.offset
        return self._animator.offset()

    @property
    def velocity(self) -> Tuple[float, float]:
        """Pointer velocity in px/s: live while dragging, else as of the last release."""
        if self._tracker.active:
            return self._tracker.velocity
        return self._release_velocity

    @property
    def history(self):
        return self._log.history

    def state(self) -> FeedState:
        return FeedState(
            items=self.items,
            cursor=self.cursor,
            drag_offset=self.drag_offset,
            animating=self._animating,
            details_visible=self._details_visible,
            undo=self._undo.state,
            velocity=self.velocity,
        )

    def visuals(self) -> CardVisuals:
        """Rotation, label opacities and next-card transform for the current frame."""
        return self._animator.visuals(self.drag_offset)

    def can_start_gesture(self) -> bool:
        return not (self._closed or self._animating or self._details_visible or self._cursor.empty)

    # ------------------------------------------------------------------
    # Input

    def _now_s(self, t: Optional[float]) -> float:
        return t if t is not None else self._scheduler.now() / 1000.0

    def press(self, x: float, y: float, t: Optional[float] = None) -> bool:
        """Pointer down. Returns False when the gesture is not accepted."""
        allowed = self.can_start_gesture()
        started = self._tracker.begin(x, y, self._now_s(t), allowed=allowed)
        if started and self._animator.running:
            # A settling spring is interrupted by the new drag
            self._animator.stop(rest=ORIGIN)
        return started

    def move(self, x: float, y: float, t: Optional[float] = None) -> Offset:
        return self._tracker.move(x, y, self._now_s(t))

    def release(self, t: Optional[float] = None) -> Optional[Decision]:
        """
        Pointer up. Classifies the drag and applies the outcome.

        Returns:
            The decision, or None when no gesture was being tracked.
        """
        released = self._tracker.release()
        if released is None:
            return None
        self._release_velocity = released.velocity

        item = self._cursor.current
        decision = classify(released.offset, self._config.gestures, animating=self._animating)

        if decision.is_swipe:
            self._commit(decision, released.offset)
        elif decision is Decision.OPEN_DETAILS:
            self._open_details(released.offset)
        elif not self._animator.running:
            self._animator.play_spring(MotionKind.RETURN, released.offset, ORIGIN)

        logger.debug("Gesture %s (v=%.0f,%.0f px/s) -> %s", released.offset.as_tuple(),
                     released.velocity[0], released.velocity[1], decision.value)
        self._notify(self.on_decision, decision, item)
        return decision

    def swipe(self, decision: Decision) -> Decision:
        """
        Commit a like/dislike without a drag (button press).

        Returns:
            The decision applied, or CANCEL when it was rejected.
        """
        if not decision.is_swipe:
            raise ValueError(f"swipe() takes like or dislike, got {decision.value}")
        if not self.can_start_gesture():
            logger.debug("Swipe %s rejected", decision.value)
            return Decision.CANCEL

        item = self._cursor.current
        self._tracker.cancel()
        self._commit(decision, self._animator.offset())
        self._notify(self.on_decision, decision, item)
        return decision

    def undo(self) -> bool:
        """
        Revert the most recent like/dislike if its window is still open.

        Only the local feed moves back; the logged record and the backend
        call already made for the decision stand.
        """
        ticket = self._undo.consume()
        if ticket is None:
            return False

        self._tracker.cancel()
        if self._animator.kind is MotionKind.EXIT:
            # The restored card is announced below, not the one the exit revealed
            self._animator.finish(run_callback=False)
            self._exit_done(notify=False)

        self._cursor.restore(ticket.prior_index)
        self._animating = True
        start = Offset(ticket.direction.exit_sign * self._animator.exit_distance(), 0.0)
        self._animator.play_spring(MotionKind.REENTER, start, ORIGIN, on_complete=self._reenter_done)

        logger.info("Undo %s of %s", ticket.direction.value, ticket.item_id)
        self._notify(self.on_item_changed, self._cursor.current)
        return True

    def dismiss_details(self):
        """The host closed the detail view; gestures are accepted again."""
        if not self._details_visible:
            return
        self._details_visible = False
        if not self._animating:
            self._animator.play_spring(MotionKind.RETURN, self._animator.offset(), ORIGIN)

    def set_items(self, items: Optional[Sequence[Item]]):
        """Replace the feed (filter/search change). Resets all session state."""
        self._tracker.cancel()
        self._animator.stop(rest=ORIGIN)
        self._undo.disarm()
        self._cursor.reset(items)
        self._animating = False
        logger.info("Feed replaced with %d items", len(self._cursor.items))
        self._notify(self.on_item_changed, self._cursor.current)

    def close(self):
        """Tear down: cancel every pending timer and refuse further input."""
        self._tracker.cancel()
        self._animator.stop(rest=ORIGIN)
        self._undo.disarm()
        self._animating = False
        self._closed = True

    # ------------------------------------------------------------------
    # Transitions

    def _commit(self, decision: Decision, start: Offset):
        item = self._cursor.current
        prior = self._cursor.index
        self._log.record(decision, item, self._clock())

        self._animating = True
        self._undo.arm(decision, prior, item.id)
        self._animator.play_exit(start, decision.exit_sign, self._exit_done)
        logger.info("%s %s (cursor %d)", decision.value, item.id, prior)

    def _exit_done(self, notify: bool = True):
        self._cursor.advance()
        self._animator.set_rest(ORIGIN)
        self._animating = False
        if notify:
            self._notify(self.on_item_changed, self._cursor.current)

    def _reenter_done(self):
        self._animating = False

    def _open_details(self, start: Offset):
        item = self._cursor.current
        self._details_visible = True
        peek = Offset(0.0, self._config.animation.details_peek_offset)
        self._animator.play_spring(MotionKind.PEEK, start, peek)
        self._notify(self.on_details, item)

    def _undo_changed(self, state: UndoState):
        self._notify(self.on_undo_changed, state)

    @staticmethod
    def _notify(callback, *args):
        if callback is not None:
            callback(*args)

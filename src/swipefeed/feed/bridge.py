"""
Qt bridge for the swipe feed controller.
Lets a PyQt5 card-stack widget drive the engine through slots and react
to signals, the same way the host app's workers talk to the UI.
"""
from typing import Optional, Sequence

from PyQt5.QtCore import QObject, pyqtSignal, pyqtSlot

from ..models import Decision, Item
from .controller import SwipeFeedController
from .undo import UndoState


class FeedBridge(QObject):
    """
    Wraps a SwipeFeedController and re-emits its callbacks as Qt signals.
    Must live on the thread that owns the controller's QtScheduler.
    """
    # Signals
    decision_made = pyqtSignal(str, object)   # Decision value, Item or None
    details_requested = pyqtSignal(object)    # Item
    item_changed = pyqtSignal(object)         # Item or None
    undo_changed = pyqtSignal(bool, object)   # available, direction value or None

    def __init__(self, controller: SwipeFeedController, parent=None):
        super().__init__(parent)
        self._controller = controller
        controller.on_decision = self._emit_decision
        controller.on_details = self.details_requested.emit
        controller.on_item_changed = self.item_changed.emit
        controller.on_undo_changed = self._emit_undo

    @property
    def controller(self) -> SwipeFeedController:
        return self._controller

    def _emit_decision(self, decision: Decision, item: Optional[Item]):
        self.decision_made.emit(decision.value, item)

    def _emit_undo(self, state: UndoState):
        direction = state.direction.value if state.direction else None
        self.undo_changed.emit(state.available, direction)

    @pyqtSlot(float, float)
    def press(self, x: float, y: float):
        self._controller.press(x, y)

    @pyqtSlot(float, float)
    def move(self, x: float, y: float):
        self._controller.move(x, y)

    @pyqtSlot()
    def release(self):
        self._controller.release()

    @pyqtSlot()
    def like(self):
        self._controller.swipe(Decision.LIKE)

    @pyqtSlot()
    def dislike(self):
        self._controller.swipe(Decision.DISLIKE)

    @pyqtSlot()
    def undo(self):
        self._controller.undo()

    @pyqtSlot()
    def dismiss_details(self):
        self._controller.dismiss_details()

    @pyqtSlot(list)
    def set_items(self, items: Sequence[Item]):
        self._controller.set_items(items)

    @pyqtSlot()
    def close(self):
        self._controller.close()

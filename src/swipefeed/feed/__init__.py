"""
SwipeFeed Feed Module

Card-stack state machine: cursor, transitions, undo and the Qt bridge.
"""
from .animator import CardVisuals, MotionKind, TransitionAnimator, card_visuals, interpolate
from .bridge import FeedBridge
from .controller import FeedState, SwipeFeedController
from .cursor import FeedCursor
from .scheduler import ManualScheduler, QtScheduler, Scheduler, TimerHandle
from .undo import UndoState, UndoWindow

__all__ = [
    'CardVisuals',
    'MotionKind',
    'TransitionAnimator',
    'card_visuals',
    'interpolate',
    'FeedBridge',
    'FeedState',
    'SwipeFeedController',
    'FeedCursor',
    'ManualScheduler',
    'QtScheduler',
    'Scheduler',
    'TimerHandle',
    'UndoState',
    'UndoWindow',
]

"""
Decision classification for released drags.
"""
from ..config import GestureConfig
from ..models import Decision, Offset


def classify(offset: Offset, config: GestureConfig, animating: bool = False) -> Decision:
    """
    Map a finalized drag offset onto exactly one decision.

    Horizontal thresholds are checked before the vertical one, so a
    diagonal drag past the like threshold is a like even if it also went
    far enough up to open details.

    Args:
        offset: Offset at release
        config: Thresholds
        animating: A transition is in flight; like/dislike become cancel

    Returns:
        The decision for this gesture.
    """
    if offset.x > config.like_threshold:
        decision = Decision.LIKE
    elif offset.x < -config.like_threshold:
        decision = Decision.DISLIKE
    elif offset.y < -config.details_threshold:
        return Decision.OPEN_DETAILS
    else:
        return Decision.CANCEL

    if animating:
        return Decision.CANCEL
    return decision

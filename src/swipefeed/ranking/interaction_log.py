"""
Interaction log: records committed likes/dislikes and fans them out.
"""
import logging
from collections import deque
from typing import Deque, Optional, Tuple

from ..models import Decision, InteractionRecord, Item

logger = logging.getLogger(__name__)


class InteractionLog:
    """
    Capped, append-only history of committed decisions.

    Each record is pushed synchronously to the ranking sink and handed to
    the remote sink, which is expected to return immediately (fire-and-forget).

    Args:
        max_records: Oldest records are dropped past this size
        ranking: Object with update(action, item)
        remote: Object with send_interaction(action, item_id)
    """

    def __init__(self, max_records: int = 200, ranking=None, remote=None):
        self._history: Deque[InteractionRecord] = deque(maxlen=max_records)
        self._ranking = ranking
        self._remote = remote

    def __len__(self) -> int:
        return len(self._history)

    @property
    def history(self) -> Tuple[InteractionRecord, ...]:
        return tuple(self._history)

    def recent(self, n: int) -> Tuple[InteractionRecord, ...]:
        if n <= 0:
            return ()
        return tuple(self._history)[-n:]

    def record(self, action: Decision, item: Item, timestamp: int) -> InteractionRecord:
        if not action.is_swipe:
            raise ValueError(f"only like/dislike are logged, got {action.value}")

        entry = InteractionRecord(
            item_id=item.id,
            action=action,
            timestamp=timestamp,
            tags=tuple(item.tags),
            price_tier=item.price_tier,
        )
        self._history.append(entry)

        if self._ranking is not None:
            try:
                self._ranking.update(action, item)
            except Exception:
                # Ranking is advisory; the recorded decision stands
                logger.exception("Ranking update failed for %s", item.id)

        if self._remote is not None:
            try:
                self._remote.send_interaction(action, item.id)
            except Exception:
                # Remote sync is best-effort; the local decision stands
                logger.exception("Could not dispatch %s for %s", action.value, item.id)

        return entry

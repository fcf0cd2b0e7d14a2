"""
Feed cursor over an externally owned item list.
"""
from typing import Optional, Sequence, Tuple

from ..models import Item


class FeedCursor:
    """
    Index of the visible card.

    Invariant: 0 <= index < len(items) whenever items is non-empty.
    With an empty list the cursor is inert and reports no items.
    """

    def __init__(self, items: Optional[Sequence[Item]] = None):
        self._items: Tuple[Item, ...] = tuple(items or ())
        self._index = 0

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._items

    @property
    def index(self) -> int:
        return self._index

    @property
    def empty(self) -> bool:
        return not self._items

    @property
    def current(self) -> Optional[Item]:
        if not self._items:
            return None
        return self._items[self._index]

    @property
    def next(self) -> Optional[Item]:
        """Card shown underneath the current one (wraps; may equal current)."""
        if not self._items:
            return None
        return self._items[(self._index + 1) % len(self._items)]

    def reset(self, items: Optional[Sequence[Item]] = None):
        """Replace the item list and go back to the first card."""
        self._items = tuple(items or ())
        self._index = 0

    def advance(self) -> int:
        if self._items:
            self._index = (self._index + 1) % len(self._items)
        return self._index

    def restore(self, index: int) -> int:
        """Jump back to a previously visible index (used by undo)."""
        if self._items:
            self._index = index % len(self._items)
        return self._index

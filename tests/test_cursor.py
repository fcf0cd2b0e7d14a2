from swipefeed.feed import FeedCursor


def test_advance_wraps(items):
    cursor = FeedCursor(items)
    assert cursor.current.id == "a"
    assert cursor.next.id == "b"
    assert [cursor.advance() for _ in range(4)] == [1, 2, 0, 1]


def test_single_item_redisplays(items):
    cursor = FeedCursor(items[:1])
    assert cursor.advance() == 0
    assert cursor.current is cursor.next


def test_empty_cursor_is_inert():
    cursor = FeedCursor([])
    assert cursor.empty
    assert cursor.current is None
    assert cursor.next is None
    assert cursor.advance() == 0
    assert cursor.restore(3) == 0


def test_reset_and_restore(items):
    cursor = FeedCursor(items)
    cursor.advance()
    cursor.advance()
    cursor.restore(1)
    assert cursor.current.id == "b"

    cursor.reset(items[::-1])
    assert cursor.index == 0
    assert cursor.current.id == "c"

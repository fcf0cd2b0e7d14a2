import pytest

from swipefeed.feed import UndoWindow
from swipefeed.models import Decision


@pytest.fixture
def changes():
    return []


@pytest.fixture
def window(scheduler, changes):
    return UndoWindow(scheduler, window_ms=3000, on_change=changes.append)


def test_arm_then_expire(window, scheduler):
    scheduler.advance(500)
    window.arm(Decision.LIKE, prior_index=0, item_id="a")
    assert window.state.available
    assert window.state.direction is Decision.LIKE
    assert window.state.armed_at == 500

    scheduler.advance(2999)
    assert window.armed
    scheduler.advance(1)
    assert not window.armed
    assert window.consume() is None


def test_consume_once(window, scheduler):
    window.arm(Decision.DISLIKE, prior_index=2, item_id="c")
    ticket = window.consume()
    assert ticket.direction is Decision.DISLIKE
    assert ticket.prior_index == 2
    assert window.consume() is None
    # Timer was cancelled with the consume
    assert scheduler.pending == 0


def test_rearm_discards_previous(window, scheduler):
    window.arm(Decision.LIKE, prior_index=0, item_id="a")
    scheduler.advance(2000)
    window.arm(Decision.DISLIKE, prior_index=1, item_id="b")
    assert scheduler.pending == 1

    # The fresh window runs a full 3s from the second arm
    scheduler.advance(2000)
    ticket = window.consume()
    assert ticket.item_id == "b"
    assert window.consume() is None


def test_disarm_notifies_once(window, changes):
    window.arm(Decision.LIKE, prior_index=0, item_id="a")
    window.disarm()
    window.disarm()
    assert [s.available for s in changes] == [True, False]

import pytest

from swipefeed.config import AnimationConfig
from swipefeed.feed import MotionKind, TransitionAnimator, card_visuals, interpolate
from swipefeed.models import Offset, ORIGIN


@pytest.fixture
def anim_config():
    return AnimationConfig(screen_width=400)


@pytest.fixture
def animator(scheduler, anim_config):
    return TransitionAnimator(scheduler, anim_config)


def test_interpolate_clamps():
    assert interpolate(-50, [0, 100], [0, 1]) == 0.0
    assert interpolate(50, [0, 100], [0, 1]) == 0.5
    assert interpolate(500, [0, 100], [0, 1]) == 1.0


def test_visuals_at_rest(anim_config):
    v = card_visuals(ORIGIN, 0.9, anim_config)
    assert v.rotation_deg == 0.0
    assert v.like_opacity == 0.0
    assert v.nope_opacity == 0.0
    assert v.next_translate_y == 40.0


def test_visuals_follow_horizontal_offset(anim_config):
    right = card_visuals(Offset(100, 0), 0.9, anim_config)
    assert right.rotation_deg == pytest.approx(5.0)
    assert right.like_opacity == 1.0
    assert right.nope_opacity == 0.0

    far_left = card_visuals(Offset(-1000, 0), 1.0, anim_config)
    assert far_left.rotation_deg == -10.0
    assert far_left.nope_opacity == 1.0
    assert far_left.next_translate_y == 0.0


def test_exit_tween(animator, scheduler):
    done = []
    animator.play_exit(Offset(150, 0), +1, lambda: done.append(True))
    assert animator.kind is MotionKind.EXIT

    scheduler.advance(150)
    mid = animator.offset()
    assert 150 < mid.x < 600
    assert 0.9 < animator.next_scale() < 1.0

    scheduler.advance(150)
    assert done == [True]
    assert not animator.running
    assert animator.offset() == Offset(600, 0)
    assert animator.next_scale() == 0.9


def test_spring_settles_at_target(animator, scheduler, anim_config):
    done = []
    animator.play_spring(MotionKind.RETURN, Offset(80, -30), ORIGIN, lambda: done.append(True))
    scheduler.advance(48)
    assert 0 < animator.offset().x < 80

    scheduler.advance(anim_config.spring_max_ms)
    assert done == [True]
    assert animator.offset() == ORIGIN


def test_finish_completes_now(animator):
    done = []
    animator.play_exit(ORIGIN, -1, lambda: done.append(True))
    animator.finish()
    assert done == [True]
    assert animator.offset() == Offset(-600, 0)


def test_finish_without_callback(animator, scheduler):
    done = []
    animator.play_exit(ORIGIN, +1, lambda: done.append(True))
    animator.finish(run_callback=False)
    scheduler.advance(1000)
    assert done == []
    assert not animator.running
    assert animator.offset() == Offset(600, 0)


def test_stop_skips_callback(animator, scheduler):
    done = []
    animator.play_exit(ORIGIN, +1, lambda: done.append(True))
    animator.stop(rest=ORIGIN)
    scheduler.advance(1000)
    assert done == []
    assert animator.offset() == ORIGIN
    assert scheduler.pending == 0

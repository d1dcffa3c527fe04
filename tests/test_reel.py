"""Tests for odometer.reel."""

from odometer.clock import ManualFrameClock
from odometer.easing import ease_out_quad, linear
from odometer.matrix import RotatingColumn, StaticColumn
from odometer.reel import Reel, ReelStatus
from odometer.render import TextRenderer


def _reel(column, **kwargs):
    renderer = TextRenderer()
    node = renderer.create_symbol_node(column, ("reel",))
    renderer.attach(None, node)
    return Reel(column, node, renderer, **kwargs), renderer


def test_static_reel_settles_without_frames():
    clock = ManualFrameClock()
    reel, _ = _reel(StaticColumn(","))
    future = reel.animate(clock, linear, 100)
    assert future.done()
    assert future.result() is reel
    assert reel.status is ReelStatus.SETTLED
    assert clock.pending_ticks == 0


def test_single_symbol_rotation_settles_without_frames():
    clock = ManualFrameClock()
    reel, _ = _reel(RotatingColumn(("4",)))
    assert reel.is_animatable is False
    assert reel.animate(clock, linear, 100).done()
    assert clock.pending_ticks == 0


def test_rolls_to_travel_distance():
    clock = ManualFrameClock(frame_ms=10)
    reel, renderer = _reel(RotatingColumn(tuple("34567")))
    future = reel.animate(clock, linear, 100)
    assert reel.status is ReelStatus.ANIMATING
    assert reel.travel == 4
    assert not future.done()

    clock.run_until_idle()
    assert future.done()
    assert reel.status is ReelStatus.SETTLED
    assert reel.position == 4
    assert reel.node.offset == 4
    assert renderer.display_text() == "7"


def test_duration_bounds_the_roll():
    clock = ManualFrameClock(frame_ms=10)
    reel, _ = _reel(RotatingColumn(tuple("0123456789")))
    reel.animate(clock, ease_out_quad, 200)
    frames = clock.run_until_idle()
    # first frame fixes the start time, then 200ms of frames
    assert frames == 21


def test_position_never_regresses():
    clock = ManualFrameClock(frame_ms=10)
    reel, _ = _reel(RotatingColumn(tuple("0123")))
    samples = iter([0, 2, 1, 0.5, 2.5, 1])

    def wobbly(t, b, c, d):
        return next(samples, c)

    positions = []
    original = reel._renderer.set_offset

    def record(node, distance):
        positions.append(distance)
        original(node, distance)

    reel._renderer.set_offset = record
    reel.animate(clock, wobbly, 1000)
    clock.run_until_idle()
    assert positions == sorted(positions)
    assert positions[:6] == [0, 2, 2, 2, 2.5, 2.5]
    assert positions[-1] == 3


def test_overshooting_easing_is_clamped():
    clock = ManualFrameClock(frame_ms=10)
    reel, _ = _reel(RotatingColumn(tuple("012")))
    reel.animate(clock, lambda t, b, c, d: c * 5, 1000)
    clock.tick()
    assert reel.position == 2
    assert reel.status is ReelStatus.SETTLED


def test_cancel_stops_rolling():
    clock = ManualFrameClock(frame_ms=10)
    reel, _ = _reel(RotatingColumn(tuple("0123456789")))
    future = reel.animate(clock, linear, 1000)
    clock.tick()
    clock.tick()
    reel.cancel()
    offset = reel.node.offset
    clock.run_until_idle()
    assert future.cancelled()
    assert reel.status is ReelStatus.CANCELLED
    assert reel.node.offset == offset


def test_stale_epoch_frames_are_noops():
    clock = ManualFrameClock(frame_ms=10)
    live = {"current": True}
    reel, _ = _reel(RotatingColumn(tuple("0123456789")), epoch=3, is_current=lambda: live["current"])
    future = reel.animate(clock, linear, 1000)
    clock.tick()
    live["current"] = False
    offset = reel.node.offset
    clock.tick()
    assert reel.node.offset == offset
    assert future.cancelled()
    assert clock.idle


def test_removed_node_is_left_alone():
    clock = ManualFrameClock(frame_ms=10)
    reel, renderer = _reel(RotatingColumn(tuple("0123456789")))
    reel.animate(clock, linear, 100)
    renderer.remove(reel.node)
    clock.run_until_idle()
    assert reel.node.offset == 0
    assert reel.status is ReelStatus.SETTLED

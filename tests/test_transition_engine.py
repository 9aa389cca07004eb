import math
import threading

import pytest

from agentworld_animator.cinematic import CameraMovement, EngineMode, InterpolationSpeed, Pose, TransitionEngine
from agentworld_animator.cinematic.geometry import distance

UP = (0.0, 0.0, 1.0)


def _enqueue_x(engine, x, duration, style=InterpolationSpeed.FULL):
    return engine.enqueue((x, 0.0, 0.0), (x + 1.0, 0.0, 0.0), UP, duration, style)


def test_negative_duration_is_rejected_without_side_effects(engine):
    assert engine.enqueue((1, 2, 3), (0, 0, 0), UP, -1.0) is False
    assert engine.enqueue((1, 2, 3), (0, 0, 0), UP, float('nan')) is False

    assert engine.queue_size() == 0
    assert engine.mode is EngineMode.IDLE
    assert engine.tick() is None


def test_enqueue_from_idle_adds_synthetic_start_element(engine, origin_pose):
    for index in range(3):
        assert _enqueue_x(engine, float(index + 1), 1.0)

    assert engine.queue_size() == 4
    assert engine.is_animating
    assert engine.movement_buffer[0].pose == origin_pose


def test_midpoint_and_goal_of_linear_segment(engine, clock):
    _enqueue_x(engine, 10.0, 2.0)

    pose = engine.tick(clock.advance(1.0))
    assert pose.eye == pytest.approx((5.0, 0.0, 0.0))
    assert engine.is_animating

    pose = engine.tick(clock.advance(1.0))
    assert pose.eye == (10.0, 0.0, 0.0)
    assert pose.focus == (11.0, 0.0, 0.0)
    assert engine.mode is EngineMode.IDLE
    assert engine.queue_size() == 0


def test_overshooting_tick_lands_exactly_on_goal(engine, clock):
    _enqueue_x(engine, 3.0, 0.5, InterpolationSpeed.WAVE)

    pose = engine.tick(clock.advance(7.0))

    assert pose.eye == (3.0, 0.0, 0.0)
    assert not engine.is_animating


def test_zero_duration_is_stretched_and_completes_quickly(engine, clock):
    _enqueue_x(engine, 4.0, 0.0)
    assert engine.movement_buffer[1].transition_duration == pytest.approx(0.001)

    engine.tick(clock.advance(0.0005))
    engine.tick(clock.advance(0.016))

    assert engine.current_pose.eye == (4.0, 0.0, 0.0)
    assert not engine.is_animating


def test_half_second_then_one_second_segments(engine, clock):
    _enqueue_x(engine, 1.0, 0.5)
    _enqueue_x(engine, 3.0, 1.0)

    assert engine.tick(clock.advance(0.25)).eye == pytest.approx((0.5, 0.0, 0.0))
    assert engine.tick(clock.advance(0.25)).eye == (1.0, 0.0, 0.0)
    assert engine.is_animating
    assert engine.queue_size() == 2

    assert engine.tick(clock.advance(0.5)).eye == pytest.approx((2.0, 0.0, 0.0))
    assert engine.is_animating
    assert engine.tick(clock.advance(0.5)).eye == (3.0, 0.0, 0.0)
    assert not engine.is_animating
    assert engine.completed_segments == 2


def test_easing_style_shapes_progress(engine, clock):
    _enqueue_x(engine, 10.0, 2.0, InterpolationSpeed.RISING)

    pose = engine.tick(clock.advance(1.0))

    assert pose.eye[0] == pytest.approx(10.0 * (1.0 - math.cos(math.pi / 4)))


def test_cancel_goes_idle_and_keeps_last_pose(engine, clock):
    _enqueue_x(engine, 10.0, 2.0)
    emitted = engine.tick(clock.advance(1.0))

    engine.cancel_transition()
    engine.cancel_transition()

    assert engine.mode is EngineMode.IDLE
    assert engine.queue_size() == 0
    assert engine.tick(clock.advance(1.0)) is None
    assert engine.current_pose == emitted
    assert engine.finished_sink.calls == []


def test_enqueue_after_cancel_starts_from_current_pose(engine, clock):
    _enqueue_x(engine, 10.0, 2.0)
    engine.tick(clock.advance(1.0))
    engine.cancel_transition()

    _enqueue_x(engine, 9.0, 1.0)
    pose = engine.tick(clock.advance(0.5))

    assert pose.eye == pytest.approx((7.0, 0.0, 0.0))


def test_pause_holds_progress_then_continues(engine, clock):
    _enqueue_x(engine, 10.0, 2.0)
    engine.tick(clock.advance(1.0))

    assert engine.pause_for(3.0) is True
    held = engine.tick(clock.advance(0.5))
    assert held.eye == pytest.approx((7.5, 0.0, 0.0))

    assert engine.tick(clock.advance(2.0)).eye == pytest.approx((7.5, 0.0, 0.0))
    assert engine.tick(clock.advance(1.25)).eye == pytest.approx((8.75, 0.0, 0.0))
    assert engine.tick(clock.advance(0.25)).eye == (10.0, 0.0, 0.0)
    assert not engine.is_animating


def test_pause_rejects_non_positive_and_replaces_pending(engine):
    assert engine.pause_for(0.0) is False
    assert engine.pause_for(-2.0) is False

    engine.pause_for(5.0)
    engine.pause_for(1.0)

    assert engine.clock_state.pending_pause == 1.0


def test_frame_by_frame_counts_frames_and_signals_once(engine, clock):
    assert engine.enable_frame_by_frame(10) == 10
    _enqueue_x(engine, 10.0, 1.0)

    poses = [engine.tick(clock.now) for _ in range(11)]

    assert poses[0].eye == (0.0, 0.0, 0.0)
    assert poses[5].eye == pytest.approx((5.0, 0.0, 0.0))
    assert poses[10].eye == (10.0, 0.0, 0.0)
    assert engine.tick(clock.now) is None
    assert engine.finished_sink.calls == [True]
    assert len(engine.capture_sink.calls) == 11
    assert engine.frame_by_frame is False


@pytest.mark.parametrize('fps', [0.5, 0, -24, float('inf'), float('nan')])
def test_unusable_frame_rate_falls_back_to_default(engine, clock, fps):
    assert engine.enable_frame_by_frame(fps) == 60
    _enqueue_x(engine, 6.0, 1.0)

    assert engine.tick(clock.now).eye == (0.0, 0.0, 0.0)
    assert engine.get_queue_status(now=clock.now)['target_fps'] == 60


def test_queue_status_in_frame_mode_counts_rendered_frames(engine, clock):
    engine.enable_frame_by_frame(10)
    _enqueue_x(engine, 10.0, 2.0)
    for _ in range(5):
        engine.tick(clock.now)

    status = engine.get_queue_status(now=clock.now)

    assert status['frame_by_frame'] is True
    assert status['progress'] == pytest.approx(0.25)
    assert status['remaining_duration'] == pytest.approx(1.5)


@pytest.mark.parametrize('duration', [float('inf'), float('-inf')])
def test_infinite_duration_is_rejected(engine, clock, duration):
    assert _enqueue_x(engine, 1.0, duration) is False
    assert _enqueue_x(engine, 2.0, 1.0) is True

    engine.tick(clock.advance(1.0))

    assert engine.queue_size() == 0
    assert engine.current_pose.eye == (2.0, 0.0, 0.0)


@pytest.mark.parametrize('duration', [float('inf'), float('nan')])
def test_non_finite_pause_is_ignored(engine, duration):
    assert engine.pause_for(duration) is False
    assert engine.clock_state.pending_pause == 0.0


def test_tick_without_timestamp_reads_engine_clock(engine, clock):
    _enqueue_x(engine, 10.0, 2.0)
    clock.advance(1.0)

    assert engine.tick().eye == pytest.approx((5.0, 0.0, 0.0))


def test_capture_not_triggered_without_image_publishing(engine, clock):
    _enqueue_x(engine, 1.0, 1.0)
    engine.tick(clock.advance(0.5))

    assert engine.capture_sink.calls == []
    assert len(engine.pose_sink.calls) == 1


def test_capacity_grows_instead_of_rejecting(engine):
    for index in range(150):
        assert _enqueue_x(engine, float(index), 1.0)

    assert engine.queue_size() == 151
    assert engine.capacity == 160


def test_queue_drains_after_every_segment_completes(engine, clock):
    for index in range(5):
        _enqueue_x(engine, float(index + 1), 1.0)

    for remaining in range(5, 0, -1):
        assert engine.queue_size() == remaining + 1
        engine.tick(clock.advance(1.0))

    assert engine.queue_size() == 0
    assert engine.completed_segments == 5


def test_coincident_eye_and_focus_keep_minimal_separation(engine, clock):
    engine.enqueue((1.0, 0.0, 0.0), (1.0, 0.0, 0.0), UP, 1.0, InterpolationSpeed.FULL)

    pose = engine.tick(clock.advance(1.0))

    assert distance(pose.eye, pose.focus) == pytest.approx(engine.min_view_separation)
    assert pose.focus[0] > pose.eye[0]


def test_zero_length_up_keeps_previous_up(engine, clock):
    engine.enqueue((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, -1.0), 2.0, InterpolationSpeed.FULL)

    pose = engine.tick(clock.advance(1.0))

    assert pose.up == UP


def test_queue_status_reports_progress_and_remaining(engine, clock):
    _enqueue_x(engine, 1.0, 2.0)
    _enqueue_x(engine, 2.0, 2.0)

    status = engine.get_queue_status(now=clock.advance(1.0))

    assert status['queue_state'] == 'animating'
    assert status['queued_count'] == 2
    assert status['progress'] == pytest.approx(0.5)
    assert status['remaining_duration'] == pytest.approx(3.0)


def test_set_pose_cancels_active_transition(engine):
    _enqueue_x(engine, 5.0, 1.0)
    target = Pose((2.0, 2.0, 2.0), (0.0, 0.0, 0.0), UP)

    engine.set_pose(target)

    assert not engine.is_animating
    assert engine.current_pose == target


def test_failing_sink_does_not_stop_animation(engine, clock):
    def broken(_pose):
        raise RuntimeError('sink down')

    engine.pose_sink = broken
    _enqueue_x(engine, 2.0, 1.0)

    assert engine.tick(clock.advance(0.5)).eye == pytest.approx((1.0, 0.0, 0.0))


def test_concurrent_enqueue_while_ticking(origin_pose, clock):
    engine = TransitionEngine(origin_pose, clock=clock)

    def producer():
        for index in range(200):
            _enqueue_x(engine, float(index), 1.0)

    threads = [threading.Thread(target=producer) for _ in range(4)]
    for thread in threads:
        thread.start()
    for _ in range(100):
        engine.tick(clock.now)
    for thread in threads:
        thread.join()

    assert engine.queue_size() + engine.completed_segments == 801


def test_enqueue_movement_accepts_prepared_descriptor(engine, clock):
    movement = CameraMovement((2.0, 0.0, 0.0), (3.0, 0.0, 0.0), UP, 1.0, InterpolationSpeed.FULL)

    assert engine.enqueue_movement(movement)
    assert engine.tick(clock.advance(1.0)).eye == (2.0, 0.0, 0.0)

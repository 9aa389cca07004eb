import math

import pytest

from agentworld_animator.camera_controller import AnimatedViewController
from agentworld_animator.cinematic import CameraPoseStamped, InteractionMode
from agentworld_animator.cinematic.geometry import UNIT_X, UNIT_Y, UNIT_Z, rotate


def test_defaults_come_from_config(view_controller):
    pose = view_controller.current_pose

    assert pose.eye == (5.0, 5.0, 10.0)
    assert pose.focus == (0.0, 0.0, 0.0)
    assert view_controller.distance == pytest.approx(math.sqrt(150.0))
    assert view_controller.attached_frame == 'map'


def test_begin_transition_uses_default_duration(view_controller):
    assert view_controller.begin_transition((1, 1, 1), (0, 0, 0), (0, 0, 1))

    assert view_controller.engine.movement_buffer[1].transition_duration == pytest.approx(0.5)


def test_update_publishes_stamped_pose(view_controller, clock):
    view_controller.begin_transition((1, 0, 0), (0, 0, 0), (0, 0, 1), 1.0)

    pose = view_controller.update(clock.advance(0.25))

    assert pose is not None
    published = view_controller.pose_publisher.calls
    assert len(published) == 1
    assert isinstance(published[0], CameraPoseStamped)
    assert published[0].frame_id == 'map'
    assert published[0].position == pose.eye


def test_update_while_idle_publishes_nothing(view_controller, clock):
    assert view_controller.update(clock.advance(1.0)) is None
    assert view_controller.pose_publisher.calls == []


def test_orientation_x_axis_points_at_focus(view_controller):
    view_controller.set_pose((0, 0, 0), (1, 0, 0))
    identity = view_controller.camera_pose(stamp=0.0).orientation
    assert identity == pytest.approx((0.0, 0.0, 0.0, 1.0))

    view_controller.set_pose((0, 0, 0), (0, 3, 0))
    orientation = view_controller.camera_pose(stamp=0.0).orientation
    assert rotate(orientation, UNIT_X) == pytest.approx(UNIT_Y)
    assert rotate(orientation, UNIT_Z) == pytest.approx(UNIT_Z)


def test_set_pose_forces_vertical_up_when_fixed(view_controller):
    pose = view_controller.set_pose((0, 0, 0), (1, 0, 0), (0, 1, 0))
    assert pose.up == UNIT_Z

    view_controller.apply_control_parameters(allow_free_yaw_axis=True)
    pose = view_controller.set_pose((0, 0, 0), (1, 0, 0), (0, 1, 0))
    assert pose.up == (0.0, 1.0, 0.0)


def test_set_pose_cancels_transition(view_controller):
    view_controller.begin_transition((1, 1, 1), (0, 0, 0), (0, 0, 1), 2.0)

    view_controller.set_pose((2, 2, 2), (0, 0, 0))

    assert not view_controller.engine.is_animating


def test_look_at_ignored_when_interaction_disabled(view_controller):
    view_controller.apply_control_parameters(interaction_disabled=True)

    assert view_controller.look_at((1, 2, 3)) is False
    assert view_controller.engine.queue_size() == 0


def test_look_at_keeps_eye(view_controller, clock):
    view_controller.look_at((1, 2, 3))
    pose = view_controller.update(clock.advance(1.0))

    assert pose.eye == (5.0, 5.0, 10.0)
    assert pose.focus == (1.0, 2.0, 3.0)


def test_orbit_keeps_focus_and_move_translates_it(view_controller, clock):
    view_controller.orbit_camera_to((10, 0, 0))
    pose = view_controller.update(clock.advance(1.0))
    assert pose.eye == (10.0, 0.0, 0.0)
    assert pose.focus == (0.0, 0.0, 0.0)

    view_controller.move_eye_with_focus_to((12, 1, 0))
    pose = view_controller.update(clock.advance(1.0))
    assert pose.eye == (12.0, 1.0, 0.0)
    assert pose.focus == (2.0, 1.0, 0.0)


def test_transition_from_previous_controller(config, clock):
    previous = AnimatedViewController(config, clock=clock)
    previous.set_pose((1, 1, 1), (0, 0, 0))
    current = AnimatedViewController(config, clock=clock)

    assert current.transition_from(previous)
    assert current.current_pose.eye == (1.0, 1.0, 1.0)

    pose = current.update(clock.advance(1.0))
    assert pose.eye == (5.0, 5.0, 10.0)
    assert current.transition_from(object()) is False


def test_mouse_interaction_mode_no_change_keeps_mode(view_controller):
    view_controller.apply_control_parameters(mouse_interaction_mode=InteractionMode.FPS)
    view_controller.apply_control_parameters(mouse_interaction_mode=InteractionMode.NO_CHANGE)

    assert view_controller.interaction_mode is InteractionMode.FPS


def test_reset_restores_defaults(view_controller):
    view_controller.set_pose((1, 1, 1), (0, 0, 0))
    view_controller.apply_control_parameters(interaction_disabled=True,
                                             mouse_interaction_mode=InteractionMode.FPS)

    view_controller.reset()

    assert view_controller.current_pose.eye == (5.0, 5.0, 10.0)
    assert view_controller.mouse_enabled is True
    assert view_controller.interaction_mode is InteractionMode.ORBIT


def test_status_reports_pose_and_queue(view_controller):
    status = view_controller.get_status()

    assert status['connected'] is True
    assert status['position'] == [5.0, 5.0, 10.0]
    assert status['target'] == [0.0, 0.0, 0.0]
    assert status['queue']['queue_state'] == 'idle'


def test_stamped_pose_serializes(view_controller):
    payload = view_controller.camera_pose(stamp=12.5).to_dict()

    assert payload['frame_id'] == 'map'
    assert payload['stamp'] == 12.5
    assert payload['position'] == [5.0, 5.0, 10.0]
    assert len(payload['orientation']) == 4

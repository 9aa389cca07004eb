"""
Animated Camera View Controller

Owns the camera pose and the transition engine that animates it. The host
render loop calls ``update()`` once per frame; placement requests, convenience
moves and direct pose changes all go through this controller.
"""

import logging
import time
from typing import Callable, Dict, Optional, Sequence

from .cinematic import (
    CameraPoseStamped,
    InteractionMode,
    InterpolationSpeed,
    Pose,
    TransitionEngine,
)
from .cinematic.geometry import (
    EPSILON,
    UNIT_X,
    UNIT_Z,
    add,
    as_vector,
    distance,
    length,
    look_basis,
    quaternion_from_axes,
    subtract,
)
from .config import get_config


logger = logging.getLogger(__name__)


class AnimatedViewController:
    """Camera controller animating between requested eye/focus/up placements"""

    def __init__(
        self,
        config=None,
        *,
        clock: Callable[[], float] = time.monotonic,
        pose_publisher: Optional[Callable[[CameraPoseStamped], None]] = None,
        finished_publisher: Optional[Callable[[bool], None]] = None,
        image_capture: Optional[Callable[[Pose], None]] = None,
    ):
        self._config = config or get_config()

        self.fixed_up = bool(self._config.fixed_up)
        self.mouse_enabled = bool(self._config.mouse_enabled)
        self.interaction_mode = InteractionMode.ORBIT
        self.attached_frame = self._config.attached_frame
        self.default_transition_time = float(self._config.default_transition_time)
        self.pose_publisher = pose_publisher

        self.engine = TransitionEngine(
            self._default_pose(),
            config=self._config,
            clock=clock,
            finished_sink=finished_publisher,
            capture_sink=image_capture,
        )
        logger.info(f"Animated view controller initialized (frame '{self.attached_frame}')")

    def _default_pose(self) -> Pose:
        return Pose.from_sequences(self._config.default_eye, self._config.default_focus, self._config.default_up)

    # ------------------------------------------------------------------
    # Per-frame update
    def update(self, now: Optional[float] = None) -> Optional[Pose]:
        """Advance any active transition and publish the new pose.

        ``now`` must share the time base of the ``clock`` given at construction.
        """
        pose = self.engine.tick(now)
        if pose is not None:
            self.publish_camera_pose()
        return pose

    @property
    def current_pose(self) -> Pose:
        return self.engine.current_pose

    @property
    def distance(self) -> float:
        """Distance between the camera position and the focus point"""
        pose = self.engine.current_pose
        return distance(pose.eye, pose.focus)

    # ------------------------------------------------------------------
    # Transitions
    def begin_transition(
        self,
        eye: Sequence[float],
        focus: Sequence[float],
        up: Sequence[float],
        duration: Optional[float] = None,
        style=InterpolationSpeed.WAVE,
    ) -> bool:
        """Queue a transition; ``duration`` defaults to the default transition time."""
        if duration is None:
            duration = self.default_transition_time
        accepted = self.engine.enqueue(eye, focus, up, duration, style)
        if accepted and self._config.log_camera_operations:
            logger.info(f"Camera transition queued: eye={list(eye)} focus={list(focus)} duration={duration}")
        return accepted

    def look_at(self, point: Sequence[float]) -> bool:
        """Turn the camera toward ``point`` without moving the eye."""
        if not self.mouse_enabled:
            return False
        pose = self.engine.current_pose
        return self.begin_transition(pose.eye, as_vector(point), pose.up)

    def orbit_camera_to(self, point: Sequence[float]) -> bool:
        """Move the eye to ``point`` while keeping the focus fixed."""
        pose = self.engine.current_pose
        return self.begin_transition(as_vector(point), pose.focus, pose.up)

    def move_eye_with_focus_to(self, point: Sequence[float]) -> bool:
        """Move the eye to ``point`` and translate the focus along with it."""
        pose = self.engine.current_pose
        point = as_vector(point)
        offset = subtract(point, pose.eye)
        return self.begin_transition(point, add(pose.focus, offset), pose.up)

    def transition_from(self, previous: "AnimatedViewController") -> bool:
        """Animate from another controller's pose to this controller's pose."""
        if not isinstance(previous, AnimatedViewController):
            return False
        target = self.engine.current_pose
        self.engine.set_pose(previous.current_pose)
        return self.begin_transition(target.eye, target.focus, target.up)

    def cancel_transition(self) -> None:
        self.engine.cancel_transition()

    def pause_for(self, duration: float) -> bool:
        return self.engine.pause_for(duration)

    def start_frame_by_frame(self, fps: Optional[float] = None) -> int:
        """Switch to frame-counted progress for deterministic capture."""
        return self.engine.enable_frame_by_frame(fps)

    # ------------------------------------------------------------------
    # Direct placement
    def set_pose(
        self,
        eye: Sequence[float],
        focus: Sequence[float],
        up: Optional[Sequence[float]] = None,
    ) -> Pose:
        """Place the camera immediately, e.g. while the user drags the view.

        Any active transition is cancelled first so the two do not fight.
        """
        if self.fixed_up:
            up = UNIT_Z
        elif up is None:
            up = self.engine.current_pose.up
        pose = Pose.from_sequences(eye, focus, up)
        self.engine.set_pose(pose)
        self.publish_camera_pose()
        return pose

    def set_fixed_up(self, fixed_up: bool) -> None:
        """Maintain the vertical axis (no camera roll) when enabled."""
        self.fixed_up = bool(fixed_up)
        if self.fixed_up and not self.engine.is_animating:
            pose = self.engine.current_pose
            self.engine.set_pose(Pose(pose.eye, pose.focus, UNIT_Z))

    def apply_control_parameters(
        self,
        interaction_disabled: bool = False,
        allow_free_yaw_axis: bool = False,
        mouse_interaction_mode: InteractionMode = InteractionMode.NO_CHANGE,
    ) -> None:
        """Apply the control flags carried by placement and trajectory requests."""
        self.mouse_enabled = not interaction_disabled
        self.set_fixed_up(not allow_free_yaw_axis)
        if mouse_interaction_mode is not InteractionMode.NO_CHANGE:
            self.interaction_mode = mouse_interaction_mode

    def reset(self) -> None:
        """Cancel transitions and restore the default camera placement."""
        self.engine.set_pose(self._default_pose())
        self.mouse_enabled = True
        self.interaction_mode = InteractionMode.ORBIT
        logger.info("Camera reset to default placement")

    # ------------------------------------------------------------------
    # Publishing
    def camera_pose(self, stamp: Optional[float] = None) -> CameraPoseStamped:
        """Current pose with an orientation whose +X axis looks at the focus."""
        pose = self.engine.current_pose
        forward = subtract(pose.focus, pose.eye)
        if length(forward) < EPSILON:
            forward = UNIT_X
        up = pose.up if length(pose.up) >= EPSILON else UNIT_Z
        x_axis, y_axis, z_axis = look_basis(forward, up)
        return CameraPoseStamped(
            frame_id=self.attached_frame,
            stamp=time.time() if stamp is None else stamp,
            position=pose.eye,
            orientation=quaternion_from_axes(x_axis, y_axis, z_axis),
        )

    def publish_camera_pose(self) -> Optional[CameraPoseStamped]:
        if self.pose_publisher is None:
            return None
        stamped = self.camera_pose()
        try:
            self.pose_publisher(stamped)
        except Exception as e:
            logger.error(f"Failed to publish camera pose: {e}")
        return stamped

    def get_status(self) -> Dict:
        """Get current camera status and queue state"""
        pose = self.engine.current_pose
        return {
            'connected': True,
            'position': list(pose.eye),
            'target': list(pose.focus),
            'up_vector': list(pose.up),
            'distance': self.distance,
            'attached_frame': self.attached_frame,
            'fixed_up': self.fixed_up,
            'mouse_enabled': self.mouse_enabled,
            'interaction_mode': self.interaction_mode.value,
            'queue': self.engine.get_queue_status(),
        }

"""
Transition engine for animated camera movements.

This module handles the queue of pending camera movements and plays them back:
- Movement queuing with elastic capacity (enqueue never fails for lack of room)
- Per-tick progress computation from wall-clock time or rendered frames
- Pose interpolation between the front (start) and second (goal) queue elements
- Segment completion, advancement, pausing and cancellation

Queue invariant: while animating, ``movement_buffer[0]`` is where the camera
currently starts from (the synthetic "current pose" element, later the last
completed target) and ``movement_buffer[1]`` is the goal. The front element is
never animated toward.
"""

import logging
import math
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Sequence

from .easing import compute_space_fraction
from .geometry import EPSILON, UNIT_Z, add, as_vector, distance, length, lerp, normalize, scale, subtract
from .movement_state import CameraMovement, EngineMode, InterpolationSpeed, Pose
from .transition_clock import TransitionClock


logger = logging.getLogger(__name__)

PoseSink = Callable[[Pose], None]


class TransitionEngine:
    """Queue of camera movements and the per-tick interpolation that plays them.

    All public operations take one re-entrant lock, so ``enqueue`` may be called
    from a message-delivery thread while the render loop calls ``tick``. Sinks are
    invoked while the lock is held; they may read engine state but should not block.
    """

    # Constants
    INITIAL_CAPACITY = 100
    CAPACITY_INCREMENT = 20
    MIN_TRANSITION_DURATION = 0.001  # Positional jumps become very fast movements
    MIN_VIEW_SEPARATION = 1e-4
    DEFAULT_FPS = 60

    def __init__(
        self,
        initial_pose: Pose,
        *,
        config=None,
        clock: Callable[[], float] = time.monotonic,
        pose_sink: Optional[PoseSink] = None,
        finished_sink: Optional[Callable[[bool], None]] = None,
        capture_sink: Optional[PoseSink] = None,
    ):
        self._lock = threading.RLock()
        self._clock = clock

        # Sinks (external collaborators)
        self.pose_sink = pose_sink
        self.finished_sink = finished_sink
        self.capture_sink = capture_sink

        # Tunables
        self.capacity = int(getattr(config, 'queue_initial_capacity', self.INITIAL_CAPACITY))
        self.capacity_increment = int(getattr(config, 'queue_capacity_increment', self.CAPACITY_INCREMENT))
        self.min_transition_duration = float(getattr(config, 'min_transition_duration', self.MIN_TRANSITION_DURATION))
        self.min_view_separation = float(getattr(config, 'min_view_separation', self.MIN_VIEW_SEPARATION))
        self.default_fps = max(1, int(getattr(config, 'target_fps', self.DEFAULT_FPS)))
        self.publish_view_images = bool(getattr(config, 'publish_view_images', False))

        # Queue and timing state
        self.mode = EngineMode.IDLE
        self.movement_buffer: Deque[CameraMovement] = deque()
        self.clock_state = TransitionClock(target_fps=self.default_fps)
        self.completed_segments = 0
        self._current_pose = initial_pose

        logger.info("TransitionEngine initialized")

    # ------------------------------------------------------------------
    # State accessors
    @property
    def current_pose(self) -> Pose:
        with self._lock:
            return self._current_pose

    @property
    def is_animating(self) -> bool:
        with self._lock:
            return self.mode is EngineMode.ANIMATING

    @property
    def frame_by_frame(self) -> bool:
        with self._lock:
            return self.clock_state.frame_by_frame

    def queue_size(self) -> int:
        """Number of queue elements, including the synthetic start element."""
        with self._lock:
            return len(self.movement_buffer)

    # ------------------------------------------------------------------
    # Queue operations
    def enqueue(
        self,
        eye: Sequence[float],
        focus: Sequence[float],
        up: Sequence[float],
        duration: float,
        style=InterpolationSpeed.WAVE,
    ) -> bool:
        """Queue a movement to the given pose; returns False when rejected.

        A negative or non-finite duration is rejected without side effects. A zero duration
        is stretched to ``min_transition_duration`` so a jump still runs
        through the normal interpolation path.
        """
        duration = float(duration)
        if not math.isfinite(duration) or duration < 0.0:
            logger.debug(f"Rejected camera movement with transition duration {duration}")
            return False
        if duration == 0.0:
            duration = self.min_transition_duration

        speed = InterpolationSpeed.parse(style)
        movement = CameraMovement(as_vector(eye), as_vector(focus), as_vector(up), duration, speed)

        with self._lock:
            if not self.movement_buffer:
                # Transition starts from wherever the camera is now
                self.clock_state.restart(self._clock())
                self._push(CameraMovement.from_pose(self._current_pose, self.min_transition_duration, speed))
                logger.info("Starting camera transition sequence")

            self._push(movement)
            self.mode = EngineMode.ANIMATING

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Queued camera movement to eye={movement.eye} focus={movement.focus} "
                             f"over {duration:.3f}s ({speed.name}). Queue size: {len(self.movement_buffer)}")
            return True

    def enqueue_movement(self, movement: CameraMovement) -> bool:
        """Queue a prepared movement descriptor."""
        return self.enqueue(movement.eye, movement.focus, movement.up,
                            movement.transition_duration, movement.interpolation_speed)

    def _push(self, movement: CameraMovement) -> None:
        if len(self.movement_buffer) >= self.capacity:
            self.capacity += self.capacity_increment
            logger.debug(f"Movement queue full, capacity grown to {self.capacity}")
        self.movement_buffer.append(movement)

    def tick(self, now: Optional[float] = None) -> Optional[Pose]:
        """Advance the active segment; returns the emitted pose or None when idle.

        ``now`` must come from the same time base as the engine clock, since
        segment start times are taken from that clock. Omit it to read the clock.
        """
        with self._lock:
            if self.mode is not EngineMode.ANIMATING or len(self.movement_buffer) < 2:
                return None

            if now is None:
                now = self._clock()
            self.clock_state.apply_pending_pause(now)

            start = self.movement_buffer[0]
            goal = self.movement_buffer[1]

            time_fraction = max(0.0, self.clock_state.time_fraction(now, goal.transition_duration))
            # Make sure we get all the way there before moving on
            finished = False
            if time_fraction >= 1.0:
                time_fraction = 1.0
                finished = True

            space_fraction = compute_space_fraction(time_fraction, goal.interpolation_speed)
            pose = self._interpolate(start, goal, space_fraction)
            self._current_pose = pose

            self._notify(self.pose_sink, pose)
            if self.publish_view_images or self.clock_state.frame_by_frame:
                self._notify(self.capture_sink, pose)

            if finished:
                self._finish_segment(goal)
            return pose

    def _finish_segment(self, goal: CameraMovement) -> None:
        # The finished start element leaves; the reached goal becomes the new start
        self.movement_buffer.popleft()
        self.completed_segments += 1

        if len(self.movement_buffer) >= 2:
            self.clock_state.advance(goal.transition_duration)
            logger.debug(f"Camera movement complete, {len(self.movement_buffer) - 1} remaining")
        else:
            logger.info("Camera transition sequence complete")
            self.cancel_transition()

    def _interpolate(self, start: CameraMovement, goal: CameraMovement, fraction: float) -> Pose:
        eye = lerp(start.eye, goal.eye, fraction)
        focus = lerp(start.focus, goal.focus, fraction)
        up = lerp(start.up, goal.up, fraction)

        if length(up) < EPSILON:
            up = self._current_pose.up
        if distance(eye, focus) < self.min_view_separation:
            focus = self._separated_focus(eye, start, goal)
        return Pose(eye, focus, up)

    def _separated_focus(self, eye, start: CameraMovement, goal: CameraMovement):
        """Focus point at minimal separation, keeping the last usable view direction."""
        for candidate in (self._current_pose, start.pose, goal.pose):
            direction = subtract(candidate.focus, candidate.eye)
            if length(direction) >= self.min_view_separation:
                break
        else:
            direction = scale(UNIT_Z, -1.0)
        logger.debug("Degenerate view direction, keeping previous orientation")
        return add(eye, scale(normalize(direction), self.min_view_separation))

    def _notify(self, sink: Optional[Callable], payload) -> None:
        if sink is None:
            return
        try:
            sink(payload)
        except Exception as e:
            logger.error(f"Camera sink {getattr(sink, '__name__', sink)!r} failed: {e}")

    def cancel_transition(self) -> None:
        """Drop every pending movement and go idle. Safe to call at any time."""
        with self._lock:
            if self.movement_buffer:
                logger.debug(f"Cancelling camera transition ({len(self.movement_buffer)} queue elements)")
            self.mode = EngineMode.IDLE
            self.movement_buffer.clear()
            self.clock_state.rendered_frames = 0
            self.clock_state.hold_until = None

            if self.clock_state.frame_by_frame:
                self.clock_state.frame_by_frame = False
                logger.info("Frame-by-frame animation finished")
                self._notify(self.finished_sink, True)

    def pause_for(self, duration: float) -> bool:
        """Hold visible progress for ``duration`` seconds, applied at the next tick.

        Never blocks. Zero, negative and non-finite durations are ignored.
        """
        with self._lock:
            accepted = self.clock_state.request_pause(float(duration))
        if accepted:
            logger.info(f"Animation pause of {float(duration):.3f}s requested")
        return accepted

    def set_pose(self, pose: Pose) -> None:
        """Overwrite the current pose directly, cancelling any active transition."""
        with self._lock:
            self.cancel_transition()
            self._current_pose = pose

    def enable_frame_by_frame(self, fps: Optional[float] = None) -> int:
        """Drive progress by rendered frames at ``fps``; returns the rate in use."""
        with self._lock:
            rate = self.default_fps
            if fps is not None and math.isfinite(fps) and int(fps) > 0:
                rate = int(fps)
            elif fps is not None:
                logger.warning(f"Unusable frame rate {fps!r}, using {self.default_fps} FPS")
            self.clock_state.target_fps = rate
            self.clock_state.frame_by_frame = True
            logger.info(f"Frame-by-frame rendering enabled at {self.clock_state.target_fps} FPS")
            return self.clock_state.target_fps

    # ------------------------------------------------------------------
    # Reporting
    def get_queue_status(self, now: Optional[float] = None) -> Dict:
        """Get queue state, progress of the active segment and remaining time"""
        with self._lock:
            if now is None:
                now = self._clock()

            progress = 0.0
            remaining = 0.0
            if self.mode is EngineMode.ANIMATING and len(self.movement_buffer) >= 2:
                goal = self.movement_buffer[1]
                elapsed = self.clock_state.elapsed(now)
                progress = min(elapsed / goal.transition_duration, 1.0)
                remaining = max(0.0, goal.transition_duration - elapsed)
                remaining += sum(m.transition_duration for m in list(self.movement_buffer)[2:])

            return {
                'success': True,
                'queue_state': self.mode.value,
                'queued_count': max(0, len(self.movement_buffer) - 1),
                'queue_size': len(self.movement_buffer),
                'capacity': self.capacity,
                'progress': progress,
                'remaining_duration': remaining,
                'completed_segments': self.completed_segments,
                'frame_by_frame': self.clock_state.frame_by_frame,
                'target_fps': self.clock_state.target_fps,
                'pending_pause': self.clock_state.pending_pause,
                'timestamp': time.time(),
            }

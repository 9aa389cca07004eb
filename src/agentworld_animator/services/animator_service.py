"""Service layer turning placement, trajectory and pause requests into transitions."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..cinematic import InteractionMode, InterpolationSpeed
from ..cinematic.geometry import Vector3, as_vector
from ..errors import AnimatorError, CameraUnavailable, UnknownFrame, error_response


logger = logging.getLogger(__name__)


class IdentityFrameTransformer:
    """Frame transformer for hosts where every frame coincides with the attached frame.

    A real transformer exposes the same two methods and raises ``LookupError``
    when a frame is unknown.
    """

    def transform_point(self, point: Sequence[float], source_frame: str, target_frame: str) -> Vector3:
        return as_vector(point)

    def transform_vector(self, vector: Sequence[float], source_frame: str, target_frame: str) -> Vector3:
        return as_vector(vector)


class AnimatorService:
    """Wrap camera placement and animation operations exposed to transports."""

    def __init__(self, camera_controller, frame_transformer=None) -> None:
        self._camera_controller = camera_controller
        self._frames = frame_transformer or IdentityFrameTransformer()

    # ------------------------------------------------------------------
    # Helpers
    def _ensure_controller(self) -> Optional[Dict[str, Any]]:
        if self._camera_controller is None:
            return CameraUnavailable('Camera controller not initialized').to_payload()
        return None

    @staticmethod
    def _point(value: Any, key: str) -> Tuple[List[float], str]:
        """Split a stamped point/vector dict (or bare list) into values and frame id."""
        if isinstance(value, dict):
            return value[key], value.get('frame_id') or ''
        return value, ''

    def _to_attached_frame(self, entry: Dict[str, Any]) -> Tuple[Vector3, Vector3, Vector3]:
        """Transform eye, focus and up of a request entry into the attached frame."""
        target_frame = self._camera_controller.attached_frame
        eye, eye_frame = self._point(entry['eye'], 'point')
        focus, focus_frame = self._point(entry['focus'], 'point')
        up, up_frame = self._point(entry.get('up') or [0.0, 0.0, 1.0], 'vector')
        try:
            return (
                self._frames.transform_point(eye, eye_frame or target_frame, target_frame),
                self._frames.transform_point(focus, focus_frame or target_frame, target_frame),
                self._frames.transform_vector(up, up_frame or target_frame, target_frame),
            )
        except LookupError as exc:
            raise UnknownFrame(f'Cannot transform camera placement: {exc}',
                               details={'target_frame': target_frame}) from exc

    def _apply_controls(self, request: Dict[str, Any]) -> None:
        mode_name = str(request.get('mouse_interaction_mode') or 'no_change').lower()
        try:
            mode = InteractionMode(mode_name)
        except ValueError:
            logger.warning(f"Unknown mouse interaction mode '{mode_name}', leaving it unchanged")
            mode = InteractionMode.NO_CHANGE

        self._camera_controller.apply_control_parameters(
            interaction_disabled=bool(request.get('interaction_disabled', False)),
            allow_free_yaw_axis=bool(request.get('allow_free_yaw_axis', False)),
            mouse_interaction_mode=mode,
        )
        target_frame = request.get('target_frame')
        if target_frame:
            self._camera_controller.attached_frame = target_frame

    # ------------------------------------------------------------------
    # Requests
    def place_camera(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Move the camera to a single placement."""
        error = self._ensure_controller()
        if error is not None:
            return error

        self._apply_controls(request)

        time_from_start = float(request.get('time_from_start', 0.0))
        if time_from_start < 0.0:
            return {
                'success': True,
                'queued': False,
                'message': 'Placement ignored: time_from_start is negative',
            }

        try:
            eye, focus, up = self._to_attached_frame(request)
        except AnimatorError as exc:
            return exc.to_payload()

        speed = InterpolationSpeed.parse(request.get('interpolation_speed', InterpolationSpeed.WAVE))
        logger.debug(f"Received camera placement: eye={eye} focus={focus} up={up} in {time_from_start}s")
        accepted = self._camera_controller.begin_transition(eye, focus, up, time_from_start, speed)
        return {
            'success': True,
            'queued': accepted,
            'queue_size': self._camera_controller.engine.queue_size(),
        }

    def play_trajectory(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Queue every valid movement of a trajectory, in order.

        Each movement's ``transition_duration`` is the length of its own
        segment, not an offset from the start of the trajectory.
        """
        error = self._ensure_controller()
        if error is not None:
            return error

        entries = request.get('trajectory') or []
        if not entries:
            return {'success': True, 'queued_count': 0, 'skipped_count': 0, 'message': 'Trajectory is empty'}

        valid = []
        for index, entry in enumerate(entries):
            duration = float(entry.get('transition_duration', -1.0))
            if duration >= 0.0 and math.isfinite(duration):
                valid.append(entry)
            else:
                logger.warning(f"Transition duration of camera movement {index} is {duration}. Skipping that movement.")

        skipped = len(entries) - len(valid)
        if not valid:
            logger.warning("Trajectory contains no valid camera movements")
            return {'success': True, 'queued_count': 0, 'skipped_count': skipped,
                    'message': 'Trajectory contains no valid camera movements'}

        self._apply_controls(request)

        movements = []
        for entry in valid:
            try:
                eye, focus, up = self._to_attached_frame(entry)
            except UnknownFrame as exc:
                logger.warning(f"Skipping camera movement: {exc.message}")
                skipped += 1
                continue
            speed = InterpolationSpeed.parse(entry.get('interpolation_speed', InterpolationSpeed.WAVE))
            movements.append((eye, focus, up, float(entry['transition_duration']), speed))

        # Frame mode is entered only when at least one movement will play
        if not movements:
            logger.warning("No camera movement of the trajectory could be transformed")
            return {'success': True, 'queued_count': 0, 'skipped_count': skipped, 'frame_by_frame': False,
                    'message': 'Trajectory contains no camera movements in a known frame'}

        target_fps = None
        if request.get('render_frame_by_frame'):
            target_fps = self._camera_controller.start_frame_by_frame(request.get('frames_per_second'))

        queued = 0
        for eye, focus, up, duration, speed in movements:
            if self._camera_controller.begin_transition(eye, focus, up, duration, speed):
                queued += 1

        logger.info(f"Queued camera trajectory: {queued} movements, {skipped} skipped")
        response = {
            'success': True,
            'queued_count': queued,
            'skipped_count': skipped,
            'frame_by_frame': target_fps is not None,
        }
        if target_fps is not None:
            response['target_fps'] = target_fps
        return response

    def pause_animation(self, request: Dict[str, Any]) -> Dict[str, Any]:
        error = self._ensure_controller()
        if error is not None:
            return error
        duration = float(request.get('duration', 0.0))
        return {
            'success': True,
            'paused': self._camera_controller.pause_for(duration),
            'duration': duration,
        }

    def cancel_transition(self) -> Dict[str, Any]:
        error = self._ensure_controller()
        if error is not None:
            return error
        self._camera_controller.cancel_transition()
        return {'success': True, 'queue_state': 'idle'}

    def set_camera_pose(self, request: Dict[str, Any]) -> Dict[str, Any]:
        error = self._ensure_controller()
        if error is not None:
            return error
        pose = self._camera_controller.set_pose(request['eye'], request['focus'], request.get('up'))
        return {'success': True, **pose.to_dict()}

    def look_at(self, request: Dict[str, Any]) -> Dict[str, Any]:
        error = self._ensure_controller()
        if error is not None:
            return error
        point = request.get('point')
        if not point:
            return error_response('MISSING_PARAMETER', 'point parameter required', details={'parameter': 'point'})
        return {'success': True, 'queued': self._camera_controller.look_at(point)}

    # ------------------------------------------------------------------
    # Status
    def camera_status(self) -> Dict[str, Any]:
        error = self._ensure_controller()
        if error is not None:
            return error
        return {'success': True, **self._camera_controller.get_status()}

    def queue_status(self) -> Dict[str, Any]:
        error = self._ensure_controller()
        if error is not None:
            return error
        return self._camera_controller.engine.get_queue_status()


__all__ = ['AnimatorService', 'IdentityFrameTransformer']

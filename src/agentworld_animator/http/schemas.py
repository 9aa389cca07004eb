"""Request schema definitions for animator operations."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, conlist, field_validator

from ..errors import ValidationFailure


class AnimatorModel(BaseModel):
    """Base model configuration with permissive extra handling."""

    model_config = ConfigDict(extra='allow')


class PointStamped(AnimatorModel):
    point: conlist(float, min_length=3, max_length=3)
    frame_id: str = ''

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Accept a bare [x, y, z] list as a point in the attached frame."""
        if isinstance(value, (list, tuple)):
            return {'point': list(value)}
        return value


class Vector3Stamped(AnimatorModel):
    vector: conlist(float, min_length=3, max_length=3)
    frame_id: str = ''

    @classmethod
    def coerce(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return {'vector': list(value)}
        return value


class _PoseFields(AnimatorModel):
    eye: PointStamped
    focus: PointStamped
    up: Vector3Stamped = Field(default_factory=lambda: Vector3Stamped(vector=[0.0, 0.0, 1.0]))
    interpolation_speed: Union[int, str] = 3

    @field_validator('eye', 'focus', mode='before')
    @classmethod
    def _coerce_point(cls, value: Any) -> Any:
        return PointStamped.coerce(value)

    @field_validator('up', mode='before')
    @classmethod
    def _coerce_vector(cls, value: Any) -> Any:
        return Vector3Stamped.coerce(value)


class _ControlFields(AnimatorModel):
    target_frame: str = ''
    interaction_disabled: bool = False
    allow_free_yaw_axis: bool = False
    mouse_interaction_mode: Literal['no_change', 'orbit', 'fps'] = 'no_change'


class CameraMovementPayload(_PoseFields):
    # Negative durations pass validation; the service skips those entries
    transition_duration: float = Field(allow_inf_nan=False)


class CameraPlacementPayload(_PoseFields, _ControlFields):
    time_from_start: float = Field(allow_inf_nan=False)


class CameraTrajectoryPayload(_ControlFields):
    trajectory: List[CameraMovementPayload] = Field(default_factory=list)
    render_frame_by_frame: bool = False
    frames_per_second: float = Field(60.0, ge=1.0, allow_inf_nan=False)


class PauseAnimationPayload(AnimatorModel):
    duration: float = Field(allow_inf_nan=False)


class CameraPosePayload(AnimatorModel):
    eye: conlist(float, min_length=3, max_length=3)
    focus: conlist(float, min_length=3, max_length=3)
    up: Optional[conlist(float, min_length=3, max_length=3)] = None


class PointPayload(AnimatorModel):
    point: conlist(float, min_length=3, max_length=3)


MODEL_MAP = {
    'place_camera': CameraPlacementPayload,
    'play_trajectory': CameraTrajectoryPayload,
    'pause_animation': PauseAnimationPayload,
    'set_camera_pose': CameraPosePayload,
    'look_at': PointPayload,
}


def validate_payload(model_cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a payload and return its normalised dictionary form.

    Raises ``ValidationFailure`` (a ``ValueError``) listing the offending fields.
    """
    try:
        return model_cls(**(data or {})).model_dump()
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        raise ValidationFailure(str(exc), details={'fields': ['.'.join(str(p) for p in e['loc']) for e in errors]}) from exc


__all__ = [
    'MODEL_MAP',
    'PointStamped',
    'Vector3Stamped',
    'CameraMovementPayload',
    'CameraPlacementPayload',
    'CameraTrajectoryPayload',
    'PauseAnimationPayload',
    'CameraPosePayload',
    'PointPayload',
    'validate_payload',
]

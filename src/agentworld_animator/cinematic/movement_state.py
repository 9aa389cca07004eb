"""
Movement state data structures for animated camera control.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Sequence

from .geometry import Quaternion, Vector3, as_vector


class InterpolationSpeed(IntEnum):
    """Easing style of one camera movement.

    The integer values match the wire constants used by placement and
    trajectory requests.
    """
    RISING = 0      # slow start, fast finish
    DECLINING = 1   # fast start, slow finish
    FULL = 2        # constant speed
    WAVE = 3        # slow start and finish

    @classmethod
    def parse(cls, value) -> "InterpolationSpeed":
        """Resolve an enum, int or name; unknown values fall back to WAVE."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and not value.strip().isdigit():
            return cls.__members__.get(value.strip().upper(), cls.WAVE)
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.WAVE


class EngineMode(Enum):
    """Transition engine state"""
    IDLE = "idle"
    ANIMATING = "animating"


class InteractionMode(Enum):
    """Mouse interaction style requested alongside a placement"""
    NO_CHANGE = "no_change"
    ORBIT = "orbit"
    FPS = "fps"


@dataclass(frozen=True)
class Pose:
    """Camera eye position, focus point and up direction"""
    eye: Vector3
    focus: Vector3
    up: Vector3

    @classmethod
    def from_sequences(cls, eye: Sequence[float], focus: Sequence[float], up: Sequence[float]) -> "Pose":
        return cls(as_vector(eye), as_vector(focus), as_vector(up))

    def to_dict(self) -> Dict:
        return {
            'eye': list(self.eye),
            'focus': list(self.focus),
            'up': list(self.up),
        }


@dataclass(frozen=True)
class CameraMovement:
    """One queued camera movement: where to go, how long to take, how to ease.

    The first element of an animating queue is a synthetic movement holding the
    pose the camera starts from; every later element is a target.
    """
    eye: Vector3
    focus: Vector3
    up: Vector3
    transition_duration: float
    interpolation_speed: InterpolationSpeed = InterpolationSpeed.WAVE

    @property
    def pose(self) -> Pose:
        return Pose(self.eye, self.focus, self.up)

    @classmethod
    def from_pose(cls, pose: Pose, transition_duration: float,
                  interpolation_speed: InterpolationSpeed = InterpolationSpeed.WAVE) -> "CameraMovement":
        return cls(pose.eye, pose.focus, pose.up, transition_duration, interpolation_speed)


@dataclass(frozen=True)
class CameraPoseStamped:
    """Published camera pose: position plus orientation whose +X looks at the focus"""
    frame_id: str
    stamp: float
    position: Vector3
    orientation: Quaternion

    def to_dict(self) -> Dict:
        return {
            'frame_id': self.frame_id,
            'stamp': self.stamp,
            'position': list(self.position),
            'orientation': list(self.orientation),
        }

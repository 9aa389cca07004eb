"""
Easing functions for animated camera movements.

Each function maps a time fraction t (0.0 to 1.0) to a space fraction, the
portion of the straight-line path between two poses that has been covered.
Every curve returns 0.0 at t = 0.0 and 1.0 at t = 1.0.
"""

import math
from typing import Callable, Dict

from .movement_state import InterpolationSpeed


class EasingFunctions:
    """Collection of easing curves, one per interpolation speed"""

    @staticmethod
    def rising(t: float) -> float:
        """Quarter cosine - slow start, fast finish"""
        return 1.0 - math.cos(t * math.pi / 2)

    @staticmethod
    def declining(t: float) -> float:
        """Quarter cosine - fast start, slow finish"""
        return -math.cos(t * math.pi / 2 + math.pi / 2)

    @staticmethod
    def full(t: float) -> float:
        """Linear interpolation - constant speed"""
        return t

    @staticmethod
    def wave(t: float) -> float:
        """Half cosine - slow start and end, fast middle"""
        return 0.5 * (1.0 - math.cos(t * math.pi))


EASING_FUNCTION_MAP: Dict[InterpolationSpeed, Callable[[float], float]] = {
    InterpolationSpeed.RISING: EasingFunctions.rising,
    InterpolationSpeed.DECLINING: EasingFunctions.declining,
    InterpolationSpeed.FULL: EasingFunctions.full,
    InterpolationSpeed.WAVE: EasingFunctions.wave,
}


def get_easing_function(speed) -> Callable[[float], float]:
    """Get the easing curve for an interpolation speed (enum, int or name).

    Unrecognized speeds use the WAVE curve.
    """
    return EASING_FUNCTION_MAP[InterpolationSpeed.parse(speed)]


def compute_space_fraction(time_fraction: float, speed) -> float:
    """Map elapsed time fraction to eased path fraction.

    Boundary values are returned exactly so a finished segment lands on its
    goal pose without floating-point drift.
    """
    if time_fraction >= 1.0:
        return 1.0
    if time_fraction == 0.0:
        return 0.0
    return get_easing_function(speed)(time_fraction)

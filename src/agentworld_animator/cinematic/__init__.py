"""
Cinematic module for animated camera movements.

This module provides the components behind smooth camera transitions:
- Movement descriptors, poses and state enums
- Easing curves mapping time progress to path progress
- Transition clock (wall-clock or frame-by-frame progress)
- Transition engine (movement queue, ticking, pausing, cancellation)
"""

# Core data structures
from .movement_state import (
    CameraMovement,
    CameraPoseStamped,
    EngineMode,
    InteractionMode,
    InterpolationSpeed,
    Pose,
)

# Easing functions
from .easing import EasingFunctions, compute_space_fraction, get_easing_function

# Timing
from .transition_clock import TransitionClock

# Queue management
from .queue_manager import TransitionEngine

__all__ = [
    # Data structures
    'CameraMovement',
    'CameraPoseStamped',
    'EngineMode',
    'InteractionMode',
    'InterpolationSpeed',
    'Pose',

    # Easing functions
    'EasingFunctions',
    'compute_space_fraction',
    'get_easing_function',

    # Timing
    'TransitionClock',

    # Queue management
    'TransitionEngine',
]

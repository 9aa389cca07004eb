"""Animated camera view controller.

Queues camera placements (eye, focus, up) and eases the view between them,
one segment at a time, with pausing, cancellation and frame-by-frame capture.
"""

__version__ = "0.1.0"

from .api_interface import AnimatorInterface
from .camera_controller import AnimatedViewController
from .config import AnimatorConfig, get_config
from .http import AnimatorController
from .services import AnimatorService, IdentityFrameTransformer

__all__ = [
    'AnimatedViewController',
    'AnimatorInterface',
    'AnimatorConfig',
    'AnimatorController',
    'AnimatorService',
    'IdentityFrameTransformer',
    'get_config',
    '__version__',
]

"""Host-facing entry point wiring config, logging, camera, service and controller."""

import logging
import time
from typing import Any, Callable, Dict, Optional

from .camera_controller import AnimatedViewController
from .config import AnimatorConfig, get_config
from .http.controller import AnimatorController
from .logging import SERVICE_NAME, setup_logging
from .services.animator_service import AnimatorService


logger = logging.getLogger(__name__)


class AnimatorInterface:
    """Owns one animated view and exposes its operations to a host application.

    The host calls ``update()`` from its render loop and forwards requests via
    ``handle_route`` (HTTP style) or ``handle_tool`` (MCP style).
    """

    def __init__(
        self,
        config: Optional[AnimatorConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        pose_publisher=None,
        finished_publisher=None,
        image_capture=None,
        frame_transformer=None,
    ):
        setup_logging(SERVICE_NAME)
        self._config = config or get_config()

        self.camera_controller = AnimatedViewController(
            self._config,
            clock=clock,
            pose_publisher=pose_publisher,
            finished_publisher=finished_publisher,
            image_capture=image_capture,
        )
        self.service = AnimatorService(self.camera_controller, frame_transformer)
        self.controller = AnimatorController(self.service)

        if self._config.verbose_logging:
            logger.info(f"Animator interface ready (attached frame '{self.camera_controller.attached_frame}')")

    def update(self, now: Optional[float] = None):
        """Advance the animation by one rendered frame."""
        return self.camera_controller.update(now)

    def handle_route(self, route: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.controller.handle_route(route, payload)

    def handle_tool(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.controller.handle_tool(tool_name, arguments)

    def shutdown(self) -> None:
        """Stop any running animation; safe to call repeatedly."""
        self.camera_controller.cancel_transition()
        logger.info("Animator interface shut down")


__all__ = ['AnimatorInterface']

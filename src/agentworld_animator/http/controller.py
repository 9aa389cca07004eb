"""Controller functions for animator routes and tools."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from ..errors import AnimatorError
from ..logging import module_logger
from ..services.animator_service import AnimatorService
from ..transport import HTTP_OPERATIONS, MCP_OPERATIONS, normalize_transport_response
from .schemas import MODEL_MAP, validate_payload


logger = module_logger(service='animator', component='controller')


class AnimatorController:
    """Coordinate payload validation and service execution."""

    def __init__(self, service: AnimatorService) -> None:
        self._service = service

    # ------------------------------------------------------------------
    # Requests
    def place_camera(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._safe_call(
            'place_camera',
            lambda: self._service.place_camera(self._validated('place_camera', payload)),
            default_error_code='PLACE_CAMERA_FAILED',
        )

    def play_trajectory(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._safe_call(
            'play_trajectory',
            lambda: self._service.play_trajectory(self._validated('play_trajectory', payload)),
            default_error_code='PLAY_TRAJECTORY_FAILED',
        )

    def pause_animation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._safe_call(
            'pause_animation',
            lambda: self._service.pause_animation(self._validated('pause_animation', payload)),
            default_error_code='PAUSE_ANIMATION_FAILED',
        )

    def cancel_transition(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._safe_call('cancel_transition', self._service.cancel_transition, default_error_code='CANCEL_TRANSITION_FAILED')

    def set_camera_pose(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._safe_call(
            'set_camera_pose',
            lambda: self._service.set_camera_pose(self._validated('set_camera_pose', payload)),
            default_error_code='SET_CAMERA_POSE_FAILED',
        )

    def look_at(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._safe_call(
            'look_at',
            lambda: self._service.look_at(self._validated('look_at', payload)),
            default_error_code='LOOK_AT_FAILED',
        )

    # ------------------------------------------------------------------
    # Status
    def camera_status(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._safe_call('camera_status', self._service.camera_status, default_error_code='CAMERA_STATUS_FAILED')

    def queue_status(self, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._safe_call('queue_status', self._service.queue_status, default_error_code='QUEUE_STATUS_FAILED')

    # ------------------------------------------------------------------
    # Dispatch
    def handle_route(self, route: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Dispatch an HTTP route (e.g. ``camera/placement``) to its operation."""
        contract = HTTP_OPERATIONS.get(route.strip('/'))
        if contract is None:
            return {'success': False, 'error_code': 'UNKNOWN_ROUTE', 'error': f'Unknown route: {route}'}
        return self._dispatch(contract.operation, payload)

    def handle_tool(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Dispatch an MCP tool call to its operation."""
        contract = MCP_OPERATIONS.get(tool_name)
        if contract is None:
            return {'success': False, 'error_code': 'UNKNOWN_TOOL', 'error': f'Unknown tool: {tool_name}'}
        return self._dispatch(contract.operation, arguments)

    def _dispatch(self, operation: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        handler = getattr(self, operation)
        return handler(payload or {})

    @staticmethod
    def _validated(operation: str, payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return validate_payload(MODEL_MAP[operation], payload)

    # ------------------------------------------------------------------
    def _safe_call(self, operation: str, func: Callable[[], Dict[str, Any]], *, default_error_code: str) -> Dict[str, Any]:
        try:
            response = func()
        except AnimatorError as exc:
            logger.warning('animator_error', extra={'operation': operation, 'error': exc.message})
            response = exc.to_payload()
        except ValueError as exc:
            logger.warning('validation_failed', extra={'operation': operation, 'error': str(exc)})
            response = {'success': False, 'error': str(exc), 'error_code': 'VALIDATION_ERROR'}
        except Exception as exc:  # pragma: no cover - unexpected service failure
            logger.exception('controller_error', extra={'operation': operation, 'error': str(exc)})
            response = {'success': False, 'error': str(exc), 'error_code': default_error_code}
        return normalize_transport_response(operation, response, default_error_code=default_error_code)


__all__ = ['AnimatorController']

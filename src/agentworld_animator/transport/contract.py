"""Route and tool names under which animator operations are exposed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class ToolContract:
    operation: str
    http_route: str
    http_method: str
    mcp_tool: str


TOOL_CONTRACTS: List[ToolContract] = [
    ToolContract('place_camera', 'camera/placement', 'POST', 'animator_place_camera'),
    ToolContract('play_trajectory', 'camera/trajectory', 'POST', 'animator_play_trajectory'),
    ToolContract('pause_animation', 'camera/pause', 'POST', 'animator_pause_animation'),
    ToolContract('cancel_transition', 'camera/cancel', 'POST', 'animator_cancel_transition'),
    ToolContract('set_camera_pose', 'camera/set_pose', 'POST', 'animator_set_camera_pose'),
    ToolContract('look_at', 'camera/look_at', 'POST', 'animator_look_at'),
    ToolContract('camera_status', 'camera/status', 'GET', 'animator_get_camera_status'),
    ToolContract('queue_status', 'camera/queue_status', 'GET', 'animator_get_queue_status'),
]

HTTP_OPERATIONS: Dict[str, ToolContract] = {contract.http_route: contract for contract in TOOL_CONTRACTS}
MCP_OPERATIONS: Dict[str, ToolContract] = {contract.mcp_tool: contract for contract in TOOL_CONTRACTS}

__all__ = ['ToolContract', 'TOOL_CONTRACTS', 'HTTP_OPERATIONS', 'MCP_OPERATIONS']

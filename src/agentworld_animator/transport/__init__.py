"""Transport helper exports for animator integrations."""

from .contract import TOOL_CONTRACTS, HTTP_OPERATIONS, MCP_OPERATIONS, ToolContract
from .responses import normalize_transport_response

__all__ = [
    'normalize_transport_response',
    'TOOL_CONTRACTS',
    'HTTP_OPERATIONS',
    'MCP_OPERATIONS',
    'ToolContract',
]

"""Response normalisation shared by every animator transport."""

from __future__ import annotations

from typing import Any, Dict


def normalize_transport_response(
    operation: str,
    response: Any,
    *,
    default_error_code: str,
) -> Dict[str, Any]:
    """Coerce a service result into the ``success``/``error_code`` dictionary shape."""
    if response is None:
        return {
            "success": False,
            "error_code": "EMPTY_RESPONSE",
            "error": "Animator returned no data",
            "details": {"operation": operation},
        }

    if not isinstance(response, dict):
        return {
            "success": False,
            "error_code": "INVALID_RESPONSE",
            "error": f"Animator returned {type(response).__name__} instead of a dictionary",
            "details": {"operation": operation, "type": type(response).__name__},
        }

    response.setdefault("success", True)
    if response["success"] is False:
        response.setdefault("error_code", default_error_code)
        response.setdefault("error", "An unknown error occurred")
    response.setdefault("operation", operation)

    return response


__all__ = ["normalize_transport_response"]

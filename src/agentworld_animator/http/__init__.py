"""Request validation and dispatch for animator operations."""

from .controller import AnimatorController
from .schemas import MODEL_MAP, validate_payload

__all__ = ['AnimatorController', 'MODEL_MAP', 'validate_payload']

"""Service layer for animator operations."""

from .animator_service import AnimatorService, IdentityFrameTransformer

__all__ = ['AnimatorService', 'IdentityFrameTransformer']

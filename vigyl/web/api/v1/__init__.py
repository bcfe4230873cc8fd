"""API v1."""

from .router import router

__all__ = ["router"]

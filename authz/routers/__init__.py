"""API routers."""

from . import authorization

__all__ = ["authorization"]

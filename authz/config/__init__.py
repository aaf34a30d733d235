"""Configuration module."""

from .settings import DEFAULT_MATRIX_PATH, Settings, settings

__all__ = ["settings", "Settings", "DEFAULT_MATRIX_PATH"]

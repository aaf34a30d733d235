"""Middleware components."""

from .exception_handler import ExceptionHandlers, register_exception_handlers

__all__ = [
    "ExceptionHandlers",
    "register_exception_handlers",
]

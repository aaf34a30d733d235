"""Authorization decision engine for a multi-tenant task management platform."""

__version__ = "1.0.0"

"""Core: config, lifespan, and exception handlers."""

from changetrack.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]

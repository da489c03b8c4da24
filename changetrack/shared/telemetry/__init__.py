"""Telemetry: logging setup."""

from changetrack.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]

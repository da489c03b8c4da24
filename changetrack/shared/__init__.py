"""Shared cross-cutting helpers: context, telemetry, utils."""

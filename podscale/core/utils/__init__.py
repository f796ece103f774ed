"""Utility helpers for PodScale."""

from .logging import configure_runtime_logging  # noqa: F401

__all__ = [
    "configure_runtime_logging",
]

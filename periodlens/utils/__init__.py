"""Utility modules for logging."""

from periodlens.utils.logging import configure_logging

__all__ = ["configure_logging"]

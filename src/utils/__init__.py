"""Utility modules for the storefront content layer.

Sub-modules:
- logging: configure_logging() for structlog setup
"""

from .logging import configure_logging

__all__ = [
    "configure_logging",
]

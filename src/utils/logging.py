"""Centralized structlog configuration for the storefront scripts."""

import logging

import structlog

_configured = False


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure structlog with the project-standard processor chain.

    ``level`` filters events below the given stdlib level name; ``json``
    swaps the console renderer for one JSON object per line.

    Safe to call multiple times; only the first call takes effect.
    """
    global _configured
    if _configured:
        return
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
    )
    _configured = True

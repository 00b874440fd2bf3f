"""User-facing notification capability for slide operations."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger()


@runtime_checkable
class Notifier(Protocol):
    """Anything that can tell a person an operation worked or failed."""

    def success(self, title: str, message: Optional[str] = None) -> None: ...

    def error(self, title: str, message: Optional[str] = None) -> None: ...


class LoggingNotifier:
    """Default notifier: emits the notification as a log event."""

    def success(self, title: str, message: Optional[str] = None) -> None:
        logger.info("notify_success", title=title, message=message)

    def error(self, title: str, message: Optional[str] = None) -> None:
        logger.warning("notify_error", title=title, message=message)

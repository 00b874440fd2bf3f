"""Custom exceptions for the storefront content layer."""

from __future__ import annotations

from typing import Optional


class StorefrontError(Exception):
    """Base exception for all storefront errors."""


class ConfigError(StorefrontError):
    """Missing or invalid configuration."""


class ContentServiceError(StorefrontError):
    """The remote content service rejected or failed a request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        operation: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.operation = operation


class TransientNetworkError(ContentServiceError):
    """Timeout or connection failure. Safe to retry."""


class SlideNotFoundError(ContentServiceError):
    """No slide exists for the requested id."""


class RetriesExhaustedError(ContentServiceError):
    """Every attempt of a bounded retry sequence failed."""

    def __init__(self, last_error: Exception, *, attempts: int, operation: str = "") -> None:
        super().__init__(
            str(last_error),
            status_code=getattr(last_error, "status_code", None),
            operation=operation,
        )
        self.last_error = last_error
        self.attempts = attempts

"""HTTP client for the remote hero slider content service.

Translates transport failures into ``TransientNetworkError`` and service
rejections into ``ContentServiceError`` so callers above this module never
see raw ``httpx`` exceptions.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
import structlog

from src.exceptions import (
    ContentServiceError,
    SlideNotFoundError,
    TransientNetworkError,
)
from src.hero_slider.models import ReorderEntry, Slide

logger = structlog.get_logger()

HERO_SLIDER_PATH = "/api/hero-slider"


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


class ContentServiceClient:
    """Read and write operations on ``/api/hero-slider``."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        token: str = "",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def send(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: Any = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Issue one request and return the decoded body (None when empty)."""
        url = f"{self.base_url}{HERO_SLIDER_PATH}{path}"
        try:
            response = await self._get_client().request(
                method,
                url,
                json=json,
                headers=self._headers(),
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.TimeoutException as e:
            raise TransientNetworkError(
                f"timed out: {method} {url}", operation=operation
            ) from e
        except httpx.TransportError as e:
            raise TransientNetworkError(
                f"connection failed: {method} {url}: {e}", operation=operation
            ) from e

        if response.status_code == 404:
            raise SlideNotFoundError(
                _error_message(response, "slide not found"),
                status_code=404,
                operation=operation,
            )
        if response.is_error:
            raise ContentServiceError(
                _error_message(response, f"{operation} failed ({response.status_code})"),
                status_code=response.status_code,
                operation=operation,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ContentServiceError(
                f"{operation}: response is not JSON",
                status_code=response.status_code,
                operation=operation,
            ) from e

    @staticmethod
    def _slides_from(body: Any, operation: str) -> list[Slide]:
        rows = body.get("slides") if isinstance(body, dict) else None
        if not isinstance(rows, list):
            raise ContentServiceError(f"{operation}: response has no slides", operation=operation)
        try:
            return [Slide.from_dict(row) for row in rows]
        except (TypeError, ValueError) as e:
            raise ContentServiceError(f"{operation}: malformed slide: {e}", operation=operation) from e

    @staticmethod
    def _slide_from(body: Any, operation: str) -> Slide:
        row = body.get("slide") if isinstance(body, dict) else None
        try:
            return Slide.from_dict(row)
        except (TypeError, ValueError) as e:
            raise ContentServiceError(f"{operation}: response has no slide", operation=operation) from e

    # ── Reads ──────────────────────────────────────────────────────

    async def list_active(self, timeout: Optional[float] = None) -> list[Slide]:
        body = await self.send("GET", "", operation="list_active", timeout=timeout)
        return self._slides_from(body, "list_active")

    async def list_all(self, timeout: Optional[float] = None) -> list[Slide]:
        body = await self.send("GET", "/admin", operation="list_all", timeout=timeout)
        return self._slides_from(body, "list_all")

    async def get(self, slide_id: str) -> Slide:
        body = await self.send("GET", f"/{slide_id}", operation="get")
        return self._slide_from(body, "get")

    # ── Writes ─────────────────────────────────────────────────────

    async def create(self, payload: dict[str, Any]) -> Slide:
        body = await self.send("POST", "", operation="create", json=payload)
        return self._slide_from(body, "create")

    async def update(self, slide_id: str, payload: dict[str, Any]) -> Slide:
        body = await self.send("PUT", f"/{slide_id}", operation="update", json=payload)
        return self._slide_from(body, "update")

    async def delete(self, slide_id: str) -> None:
        await self.send("DELETE", f"/{slide_id}", operation="delete")

    async def reorder(self, entries: list[ReorderEntry]) -> None:
        await self.send(
            "POST", "/reorder", operation="reorder",
            json=[e.to_payload() for e in entries],
        )

    async def toggle_status(self, slide_id: str) -> Slide:
        body = await self.send("PATCH", f"/{slide_id}/toggle", operation="toggle_status")
        return self._slide_from(body, "toggle_status")

# src/hero_slider/coordinator.py
"""Single-flight, cached, retried reads of the hero slide collection.

At most one network read per resource class is in flight at any time;
callers arriving while it runs await the same outcome. A failed "active"
read degrades to the last snapshot or the static fallback slides, a failed
"all" read raises.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import structlog

from src.exceptions import ContentServiceError
from src.hero_slider.cache import SharedSlideCache
from src.hero_slider.client import ContentServiceClient
from src.hero_slider.models import ResourceClass, Slide, fallback_slides
from src.hero_slider.retry import attempt

logger = structlog.get_logger()

DEFAULT_TIMEOUTS = {
    ResourceClass.ACTIVE: 3.0,
    ResourceClass.ALL: 8.0,
}


class FetchCoordinator:
    def __init__(
        self,
        client: ContentServiceClient,
        cache: SharedSlideCache,
        *,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        timeouts: Optional[dict[ResourceClass, float]] = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.client = client
        self.cache = cache
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeouts = {**DEFAULT_TIMEOUTS, **(timeouts or {})}

    async def fetch(self, resource_class: ResourceClass, *, force: bool = False) -> list[Slide]:
        """Return the slides for ``resource_class``.

        ``force`` skips the freshness check but still joins a read that is
        already in flight. Every caller gets its own list; the cached one is
        never handed out.
        """
        if not force and self.cache.is_fresh(resource_class):
            snap = self.cache.read(resource_class)
            logger.debug("hero_slides_cache_hit", resource=resource_class.value,
                         count=len(snap.slides))
            return list(snap.slides)

        pending = self.cache.in_flight(resource_class)
        if pending is None:
            pending = asyncio.ensure_future(self._resolve(resource_class))
            self.cache.set_in_flight(resource_class, pending)
        else:
            logger.debug("hero_slides_fetch_joined", resource=resource_class.value)
        # a waiter that gets cancelled must not cancel the shared read
        return list(await asyncio.shield(pending))

    async def _load(self, resource_class: ResourceClass) -> list[Slide]:
        timeout = self.timeouts[resource_class]
        if resource_class is ResourceClass.ACTIVE:
            slides = await self.client.list_active(timeout=timeout)
        else:
            slides = await self.client.list_all(timeout=timeout)
        return [s for s in slides if resource_class.admits(s)]

    async def _resolve(self, resource_class: ResourceClass) -> list[Slide]:
        started_at = self.cache.generation(resource_class)
        try:
            slides = await attempt(
                lambda: self._load(resource_class),
                max_attempts=1 + self.max_retries,
                delay=self.retry_delay,
                operation=f"hero_slides_{resource_class.value}",
            )
        except ContentServiceError as e:
            if resource_class is ResourceClass.ALL:
                logger.error("hero_slides_fetch_failed", resource=resource_class.value,
                             error=str(e))
                raise
            return self._degrade(resource_class, e)
        else:
            snap = self.cache.fill(resource_class, slides, since=started_at)
            logger.info("hero_slides_fetched", resource=resource_class.value,
                        count=len(snap.slides))
            return snap.slides
        finally:
            self.cache.clear_in_flight(resource_class, asyncio.current_task())

    def _degrade(self, resource_class: ResourceClass, error: Exception) -> list[Slide]:
        snap = self.cache.read(resource_class)
        if snap is not None:
            logger.warning("hero_slides_stale_fallback", resource=resource_class.value,
                           error=str(error), count=len(snap.slides))
            return snap.slides
        # not cached: the next read should try the network again
        logger.warning("hero_slides_static_fallback", resource=resource_class.value,
                       error=str(error))
        return fallback_slides()

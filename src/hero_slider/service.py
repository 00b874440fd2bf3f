# src/hero_slider/service.py
from __future__ import annotations

import time
from typing import Callable, Optional

import httpx
import structlog

from config.settings import Settings, settings as default_settings
from src.hero_slider.cache import SharedSlideCache
from src.hero_slider.client import ContentServiceClient
from src.hero_slider.consumer import HeroSlider
from src.hero_slider.coordinator import FetchCoordinator
from src.hero_slider.models import ResourceClass
from src.hero_slider.notifier import Notifier
from src.hero_slider.reconciler import MutationReconciler

logger = structlog.get_logger()


class HeroSliderService:
    """Owns the one client, cache, coordinator and reconciler of a process.

    Build it once at startup and hand out consumers with ``consumer()``;
    every consumer shares the same cache and in-flight reads.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        cfg = config or default_settings
        self.client = ContentServiceClient(
            base_url=cfg.HERO_SLIDER_API_BASE_URL,
            token=cfg.HERO_SLIDER_API_TOKEN,
            timeout=cfg.HERO_SLIDER_REQUEST_TIMEOUT_SECONDS,
            client=http_client,
        )
        self.cache = SharedSlideCache(ttl=cfg.HERO_SLIDER_CACHE_TTL_SECONDS, clock=clock)
        self.coordinator = FetchCoordinator(
            self.client,
            self.cache,
            max_retries=cfg.HERO_SLIDER_MAX_RETRIES,
            retry_delay=cfg.HERO_SLIDER_RETRY_DELAY_SECONDS,
            timeouts={
                ResourceClass.ACTIVE: cfg.HERO_SLIDER_PUBLIC_TIMEOUT_SECONDS,
                ResourceClass.ALL: cfg.HERO_SLIDER_ADMIN_TIMEOUT_SECONDS,
            },
        )
        self.reconciler = MutationReconciler(self.client, self.cache)
        logger.debug("hero_slider_service_ready", base_url=self.client.base_url,
                     ttl=self.cache.ttl, max_retries=self.coordinator.max_retries)

    def consumer(self, *, manual: bool = False, notifier: Optional[Notifier] = None) -> HeroSlider:
        return HeroSlider(self.client, self.coordinator, self.reconciler,
                          notifier=notifier, manual=manual)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "HeroSliderService":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

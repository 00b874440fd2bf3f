# src/hero_slider/reconciler.py
"""Write-through of confirmed slide mutations into the shared cache.

Each operation is one request with no retry. The cache is patched only
after the service confirms the change, so a failure leaves it untouched.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import structlog

from src.hero_slider.cache import SharedSlideCache
from src.hero_slider.client import ContentServiceClient
from src.hero_slider.models import (
    ReorderEntry,
    ResourceClass,
    Slide,
    SlideDraft,
    apply_order,
    check_reorder_batch,
    drop_slide,
    merge_slide,
    normalize_changes,
)

logger = structlog.get_logger()


class MutationReconciler:
    def __init__(self, client: ContentServiceClient, cache: SharedSlideCache) -> None:
        self.client = client
        self.cache = cache

    def _merge_everywhere(self, slide: Slide) -> None:
        for rc in ResourceClass:
            self.cache.patch(rc, lambda slides, rc=rc: merge_slide(slides, slide, rc))

    async def create(self, draft: SlideDraft) -> Slide:
        slide = await self.client.create(draft.to_payload())
        self._merge_everywhere(slide)
        logger.info("hero_slide_created", slide_id=slide.id, order_index=slide.order_index)
        return slide

    async def update(self, slide_id: str, changes: Mapping[str, Any]) -> Slide:
        payload = normalize_changes(changes)
        slide = await self.client.update(slide_id, payload)
        self._merge_everywhere(slide)
        logger.info("hero_slide_updated", slide_id=slide.id, fields=sorted(payload))
        return slide

    async def remove(self, slide_id: str) -> bool:
        await self.client.delete(slide_id)
        for rc in ResourceClass:
            self.cache.patch(rc, lambda slides: drop_slide(slides, slide_id))
        logger.info("hero_slide_deleted", slide_id=slide_id)
        return True

    async def reorder(self, entries: Iterable[ReorderEntry]) -> bool:
        batch = check_reorder_batch(entries)
        await self.client.reorder(batch)
        for rc in ResourceClass:
            self.cache.patch(rc, lambda slides: apply_order(slides, batch))
        logger.info("hero_slides_reordered", count=len(batch))
        return True

    async def toggle_active(self, slide_id: str) -> Slide:
        slide = await self.client.toggle_status(slide_id)
        self._merge_everywhere(slide)
        logger.info("hero_slide_toggled", slide_id=slide.id, is_active=slide.is_active)
        return slide

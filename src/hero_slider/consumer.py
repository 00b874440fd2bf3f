# src/hero_slider/consumer.py
"""The slide surface presentation code talks to.

Each ``HeroSlider`` holds its own view state (``slides``, ``loading``,
``error``) while sharing one coordinator, reconciler and cache with every
other consumer in the process.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Iterable, Iterator, Mapping, Optional, TypeVar

import structlog

from src.exceptions import ContentServiceError
from src.hero_slider.client import ContentServiceClient
from src.hero_slider.coordinator import FetchCoordinator
from src.hero_slider.models import (
    ReorderEntry,
    ResourceClass,
    Slide,
    SlideDraft,
    apply_order,
    drop_slide,
    merge_slide,
    swap_with_neighbour,
)
from src.hero_slider.notifier import LoggingNotifier, Notifier
from src.hero_slider.reconciler import MutationReconciler

logger = structlog.get_logger()
T = TypeVar("T")


class HeroSlider:
    """Per-view slide state plus the read and write operations.

    In automatic mode ``initialize()`` loads the public "active" slides
    once. Manual mode (back office) loads nothing until asked.
    """

    def __init__(
        self,
        client: ContentServiceClient,
        coordinator: FetchCoordinator,
        reconciler: MutationReconciler,
        *,
        notifier: Optional[Notifier] = None,
        manual: bool = False,
    ) -> None:
        self.client = client
        self.coordinator = coordinator
        self.reconciler = reconciler
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.manual = manual

        self.slides: list[Slide] = []
        self.loading: bool = False
        self.error: Optional[str] = None

        self._view: Optional[ResourceClass] = None
        self._call_seq = 0
        self._initialized = False

    # ── Call tracking ──────────────────────────────────────────────

    @contextmanager
    def _call(self) -> Iterator[int]:
        self._call_seq += 1
        seq = self._call_seq
        self.loading = True
        self.error = None
        try:
            yield seq
        finally:
            # an older call finishing must not clear a newer call's flag
            if seq == self._call_seq:
                self.loading = False

    def _is_latest(self, seq: int) -> bool:
        return seq == self._call_seq

    def _fail(self, title: str, exc: ContentServiceError, seq: int) -> None:
        message = exc.message or title
        logger.error("hero_slider_operation_failed", title=title,
                     operation=exc.operation, status=exc.status_code, error=message)
        if self._is_latest(seq):
            self.error = message
        self.notifier.error(title, message)

    async def _mutate(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        done: str,
        failed: str,
        local: Callable[[T], None],
    ) -> Optional[T]:
        with self._call() as seq:
            try:
                result = await call()
            except ContentServiceError as e:
                self._fail(failed, e, seq)
                return None
            local(result)
            self.notifier.success(done)
            return result

    def _patch_local(self, mutation: Callable[[list[Slide]], list[Slide]]) -> None:
        self.slides = mutation(self.slides)

    # ── Lifecycle ──────────────────────────────────────────────────

    async def initialize(self) -> None:
        if self._initialized:
            return
        self._initialized = True
        if self.manual:
            logger.debug("hero_slider_init", mode="manual")
            return
        logger.debug("hero_slider_init", mode="automatic")
        await self.fetch_active_slides()

    # ── Reads ──────────────────────────────────────────────────────

    async def fetch_active_slides(self) -> list[Slide]:
        """Public slides. Never reports an error; degrades to fallback content."""
        with self._call() as seq:
            slides = await self.coordinator.fetch(ResourceClass.ACTIVE)
            if self._is_latest(seq):
                self.slides = slides
                self._view = ResourceClass.ACTIVE
            return slides

    async def fetch_all_slides(self, *, force: bool = False) -> list[Slide]:
        """Every slide, active or not. Returns [] and sets ``error`` on failure."""
        with self._call() as seq:
            try:
                slides = await self.coordinator.fetch(ResourceClass.ALL, force=force)
            except ContentServiceError as e:
                self._fail("Could not load slides", e, seq)
                return []
            if self._is_latest(seq):
                self.slides = slides
                self._view = ResourceClass.ALL
            return slides

    async def fetch_slide_by_id(self, slide_id: str) -> Optional[Slide]:
        with self._call() as seq:
            try:
                return await self.client.get(slide_id)
            except ContentServiceError as e:
                self._fail("Could not load slide", e, seq)
                return None

    # ── Writes ─────────────────────────────────────────────────────

    @property
    def _local_view(self) -> ResourceClass:
        return self._view or ResourceClass.ALL

    async def create_slide(self, draft: SlideDraft) -> Optional[Slide]:
        return await self._mutate(
            lambda: self.reconciler.create(draft),
            done="Slide created",
            failed="Could not create slide",
            local=lambda s: self._patch_local(lambda xs: merge_slide(xs, s, self._local_view)),
        )

    async def update_slide(self, slide_id: str, changes: Mapping[str, Any]) -> Optional[Slide]:
        return await self._mutate(
            lambda: self.reconciler.update(slide_id, changes),
            done="Slide updated",
            failed="Could not update slide",
            local=lambda s: self._patch_local(lambda xs: merge_slide(xs, s, self._local_view)),
        )

    async def delete_slide(self, slide_id: str) -> bool:
        ok = await self._mutate(
            lambda: self.reconciler.remove(slide_id),
            done="Slide deleted",
            failed="Could not delete slide",
            local=lambda _: self._patch_local(lambda xs: drop_slide(xs, slide_id)),
        )
        return bool(ok)

    async def reorder_slides(self, entries: Iterable[ReorderEntry]) -> bool:
        batch = list(entries)
        ok = await self._mutate(
            lambda: self.reconciler.reorder(batch),
            done="Slides reordered",
            failed="Could not reorder slides",
            local=lambda _: self._patch_local(lambda xs: apply_order(xs, batch)),
        )
        return bool(ok)

    async def toggle_slide_status(self, slide_id: str) -> Optional[Slide]:
        return await self._mutate(
            lambda: self.reconciler.toggle_active(slide_id),
            done="Slide status changed",
            failed="Could not change slide status",
            local=lambda s: self._patch_local(lambda xs: merge_slide(xs, s, self._local_view)),
        )

    async def move_slide(self, slide_id: str, direction: str) -> bool:
        """Swap a slide with its neighbour ("up" or "down") in the current view."""
        batch = swap_with_neighbour(self.slides, slide_id, direction)
        if batch is None:
            return False
        return await self.reorder_slides(batch)

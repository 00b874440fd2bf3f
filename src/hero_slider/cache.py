# src/hero_slider/cache.py
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from src.hero_slider.models import ResourceClass, Slide, sort_slides

logger = structlog.get_logger()

DEFAULT_TTL_SECONDS = 60.0

Mutation = Callable[[list[Slide]], list[Slide]]


@dataclass(frozen=True, slots=True)
class Snapshot:
    slides: list[Slide]
    fetched_at: float


class SharedSlideCache:
    """Last known-good slides per resource class, shared by every consumer.

    One instance per process. All methods are synchronous so each
    read-fill or patch runs without an await in the middle.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._snapshots: dict[ResourceClass, Snapshot] = {}
        self._in_flight: dict[ResourceClass, asyncio.Future] = {}
        # bumped by every patch; mutations confirmed during a read are kept
        # until the read lands so it can replay them
        self._generation: dict[ResourceClass, int] = {}
        self._journal: dict[ResourceClass, list[tuple[int, Mutation]]] = {}

    def now(self) -> float:
        return self._clock()

    # ── Snapshots ──────────────────────────────────────────────────

    def read(self, resource_class: ResourceClass) -> Optional[Snapshot]:
        return self._snapshots.get(resource_class)

    def is_fresh(self, resource_class: ResourceClass) -> bool:
        snap = self._snapshots.get(resource_class)
        if snap is None:
            return False
        return (self.now() - snap.fetched_at) < self.ttl

    def write(self, resource_class: ResourceClass, slides: list[Slide]) -> Snapshot:
        snap = Snapshot(slides=sort_slides(slides), fetched_at=self.now())
        self._snapshots[resource_class] = snap
        return snap

    def generation(self, resource_class: ResourceClass) -> int:
        return self._generation.get(resource_class, 0)

    def fill(self, resource_class: ResourceClass, slides: list[Slide], *, since: int) -> Snapshot:
        """Store a network read that started at generation ``since``.

        Mutations patched in after that point are replayed on top of the
        response, so a read that was already in flight cannot undo them.
        """
        replayed = 0
        for gen, mutation in self._journal.get(resource_class, []):
            if gen > since:
                slides = mutation(list(slides))
                replayed += 1
        if replayed:
            logger.info("hero_slides_fetch_reconciled", resource=resource_class.value,
                        replayed=replayed)
        return self.write(resource_class, slides)

    def patch(self, resource_class: ResourceClass, mutation: Mutation) -> Optional[Snapshot]:
        """Apply a confirmed mutation to a populated snapshot and re-stamp it.

        A class that was never fetched stays empty.
        """
        gen = self._generation.get(resource_class, 0) + 1
        self._generation[resource_class] = gen
        if resource_class in self._in_flight:
            self._journal.setdefault(resource_class, []).append((gen, mutation))
        snap = self._snapshots.get(resource_class)
        if snap is None:
            return None
        patched = self.write(resource_class, mutation(list(snap.slides)))
        logger.debug("hero_slides_cache_patched", resource=resource_class.value,
                     count=len(patched.slides))
        return patched

    def clear(self) -> None:
        self._snapshots.clear()

    # ── In-flight markers ──────────────────────────────────────────

    def in_flight(self, resource_class: ResourceClass) -> Optional[asyncio.Future]:
        return self._in_flight.get(resource_class)

    def set_in_flight(self, resource_class: ResourceClass, fut: asyncio.Future) -> None:
        self._in_flight[resource_class] = fut

    def clear_in_flight(self, resource_class: ResourceClass, fut: asyncio.Future) -> None:
        # only the owner of the marker may clear it
        if self._in_flight.get(resource_class) is fut:
            del self._in_flight[resource_class]
            self._journal.pop(resource_class, None)

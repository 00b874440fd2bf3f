from __future__ import annotations

import asyncio
from collections import Counter
from dataclasses import replace
from typing import Optional

import pytest

from src.exceptions import SlideNotFoundError
from src.hero_slider.cache import SharedSlideCache
from src.hero_slider.coordinator import FetchCoordinator
from src.hero_slider.models import ReorderEntry, Slide
from src.hero_slider.reconciler import MutationReconciler


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


class FakeContentService:
    """In-memory stand-in for ContentServiceClient.

    ``fail_reads`` is a list of exceptions raised (in order) by list calls;
    ``fail_writes`` does the same for mutations. Setting ``gate`` blocks
    list calls until the event is set; the rows are read before blocking,
    like a response that is slow on the wire.
    """

    def __init__(self, slides: Optional[list[Slide]] = None) -> None:
        self.store: dict[str, Slide] = {s.id: s for s in slides or []}
        self.calls: Counter = Counter()
        self.fail_reads: list[Exception] = []
        self.fail_writes: list[Exception] = []
        self.gate: Optional[asyncio.Event] = None
        self.reorder_batches: list[list[ReorderEntry]] = []
        self._next_id = 100

    def _ordered(self, active_only: bool) -> list[Slide]:
        rows = [s for s in self.store.values() if s.is_active or not active_only]
        return sorted(rows, key=lambda s: s.order_index)

    async def _read(self, name: str, active_only: bool) -> list[Slide]:
        self.calls[name] += 1
        rows = self._ordered(active_only)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.fail_reads:
            raise self.fail_reads.pop(0)
        return rows

    async def _write(self, name: str) -> None:
        self.calls[name] += 1
        await asyncio.sleep(0)
        if self.fail_writes:
            raise self.fail_writes.pop(0)

    async def list_active(self, timeout=None) -> list[Slide]:
        return await self._read("list_active", active_only=True)

    async def list_all(self, timeout=None) -> list[Slide]:
        return await self._read("list_all", active_only=False)

    async def get(self, slide_id: str) -> Slide:
        await self._write("get")
        if slide_id not in self.store:
            raise SlideNotFoundError("Slide not found", status_code=404, operation="get")
        return self.store[slide_id]

    async def create(self, payload: dict) -> Slide:
        await self._write("create")
        self._next_id += 1
        order = payload.get("orderIndex")
        if order is None:
            order = max((s.order_index for s in self.store.values()), default=0) + 1
        slide = Slide.from_dict({**payload, "id": f"s{self._next_id}", "orderIndex": order})
        self.store[slide.id] = slide
        return slide

    async def update(self, slide_id: str, payload: dict) -> Slide:
        await self._write("update")
        current = self.store[slide_id].to_dict()
        slide = Slide.from_dict({**current, **payload})
        self.store[slide_id] = slide
        return slide

    async def delete(self, slide_id: str) -> None:
        await self._write("delete")
        self.store.pop(slide_id, None)

    async def reorder(self, entries: list[ReorderEntry]) -> None:
        await self._write("reorder")
        self.reorder_batches.append(list(entries))
        for e in entries:
            if e.id in self.store:
                self.store[e.id] = replace(self.store[e.id], order_index=e.order_index)

    async def toggle_status(self, slide_id: str) -> Slide:
        await self._write("toggle_status")
        current = self.store[slide_id]
        slide = replace(current, is_active=not current.is_active)
        self.store[slide_id] = slide
        return slide


class RecordingNotifier:
    def __init__(self) -> None:
        self.successes: list[tuple[str, Optional[str]]] = []
        self.errors: list[tuple[str, Optional[str]]] = []

    def success(self, title, message=None):
        self.successes.append((title, message))

    def error(self, title, message=None):
        self.errors.append((title, message))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def seed_slides() -> list[Slide]:
    return [
        Slide(id="a", title="A", subtitle="sa", description="da", image_url="u/a",
              is_active=True, order_index=0),
        Slide(id="b", title="B", subtitle="sb", description="db", image_url="u/b",
              is_active=True, order_index=1),
        Slide(id="c", title="C", subtitle="sc", description="dc", image_url="u/c",
              is_active=False, order_index=2),
    ]


@pytest.fixture
def remote(seed_slides) -> FakeContentService:
    return FakeContentService(seed_slides)


@pytest.fixture
def cache(clock) -> SharedSlideCache:
    return SharedSlideCache(ttl=60.0, clock=clock)


@pytest.fixture
def coordinator(remote, cache) -> FetchCoordinator:
    return FetchCoordinator(remote, cache, max_retries=2, retry_delay=0)


@pytest.fixture
def reconciler(remote, cache) -> MutationReconciler:
    return MutationReconciler(remote, cache)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()

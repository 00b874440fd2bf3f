# src/hero_slider/models.py
"""Hero slide records and the list transforms that keep them ordered.

Every collection handed out by this package is sorted ascending by
``order_index``. The helpers here return new lists; callers never rely on
in-place mutation of a list someone else may hold.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Optional


class ResourceClass(Enum):
    """The two independently cached views of the slide collection."""

    ACTIVE = "active"  # public homepage, active slides only
    ALL = "all"        # back office, active and inactive

    def admits(self, slide: "Slide") -> bool:
        return self is ResourceClass.ALL or slide.is_active


# wire name -> attribute name for fields a client may send
_WRITABLE_FIELDS: dict[str, str] = {
    "title": "title",
    "subtitle": "subtitle",
    "description": "description",
    "imageUrl": "image_url",
    "ctaText": "cta_text",
    "ctaLink": "cta_link",
    "offerText": "offer_text",
    "isActive": "is_active",
    "orderIndex": "order_index",
}
_ATTR_TO_WIRE = {attr: wire for wire, attr in _WRITABLE_FIELDS.items()}
_REQUIRED_TEXT = ("title", "subtitle", "description", "image_url")


@dataclass(slots=True)
class Slide:
    """A promotional carousel entry confirmed by the content service."""

    id: str
    title: str
    subtitle: str
    description: str
    image_url: str
    is_active: bool = True
    order_index: int = 0
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    offer_text: Optional[str] = None
    created_at: Optional[str] = None  # server-stamped, opaque
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Slide":
        if not isinstance(raw, Mapping) or not raw.get("id"):
            raise ValueError(f"not a slide object: {raw!r}")
        # absent or null means active
        is_active = raw.get("isActive")
        is_active = True if is_active is None else bool(is_active)
        return cls(
            id=str(raw["id"]),
            title=str(raw.get("title") or ""),
            subtitle=str(raw.get("subtitle") or ""),
            description=str(raw.get("description") or ""),
            image_url=str(raw.get("imageUrl") or ""),
            is_active=is_active,
            order_index=int(raw.get("orderIndex") or 0),
            cta_text=raw.get("ctaText"),
            cta_link=raw.get("ctaLink"),
            offer_text=raw.get("offerText"),
            created_at=raw.get("createdAt"),
            updated_at=raw.get("updatedAt"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "imageUrl": self.image_url,
            "ctaText": self.cta_text,
            "ctaLink": self.cta_link,
            "offerText": self.offer_text,
            "isActive": self.is_active,
            "orderIndex": self.order_index,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(slots=True)
class SlideDraft:
    """Fields for a slide that does not exist yet.

    ``order_index`` left as ``None`` lets the service append the slide
    after the current last one.
    """

    title: str
    subtitle: str
    description: str
    image_url: str
    cta_text: Optional[str] = None
    cta_link: Optional[str] = None
    offer_text: Optional[str] = None
    is_active: Optional[bool] = None
    order_index: Optional[int] = None

    def __post_init__(self) -> None:
        missing = [
            name for name in _REQUIRED_TEXT
            if not str(getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValueError(f"missing required slide fields: {', '.join(missing)}")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for attr, wire in _ATTR_TO_WIRE.items():
            value = getattr(self, attr)
            if value is not None:
                payload[wire] = value
        return payload


@dataclass(frozen=True, slots=True)
class ReorderEntry:
    id: str
    order_index: int

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "orderIndex": self.order_index}


def normalize_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Turn a partial update (wire or attribute names) into a wire payload."""
    if not changes:
        raise ValueError("update needs at least one field")
    payload: dict[str, Any] = {}
    for key, value in changes.items():
        if key in _WRITABLE_FIELDS:
            payload[key] = value
        elif key in _ATTR_TO_WIRE:
            payload[_ATTR_TO_WIRE[key]] = value
        else:
            raise ValueError(f"unknown or read-only slide field: {key}")
    return payload


def check_reorder_batch(entries: Iterable[ReorderEntry]) -> list[ReorderEntry]:
    batch = list(entries)
    if not batch:
        raise ValueError("reorder batch is empty")
    ids = [e.id for e in batch]
    if len(set(ids)) != len(ids):
        raise ValueError("reorder batch lists the same slide twice")
    return batch


# ── List transforms ────────────────────────────────────────────────


def sort_slides(slides: Iterable[Slide]) -> list[Slide]:
    # sorted() is stable: equal indexes keep arrival order
    return sorted(slides, key=lambda s: s.order_index)


def merge_slide(
    slides: list[Slide], slide: Slide, resource_class: ResourceClass
) -> list[Slide]:
    """Insert or replace ``slide`` by id, dropping it if the view excludes it."""
    kept = [s for s in slides if s.id != slide.id]
    if resource_class.admits(slide):
        kept.append(slide)
    return sort_slides(kept)


def drop_slide(slides: list[Slide], slide_id: str) -> list[Slide]:
    return [s for s in slides if s.id != slide_id]


def apply_order(slides: list[Slide], entries: Iterable[ReorderEntry]) -> list[Slide]:
    """Reassign order indexes. Ids absent from ``slides`` are ignored."""
    new_index = {e.id: e.order_index for e in entries}
    return sort_slides(
        replace(s, order_index=new_index[s.id]) if s.id in new_index else s
        for s in slides
    )


def swap_with_neighbour(
    slides: list[Slide], slide_id: str, direction: str
) -> Optional[list[ReorderEntry]]:
    """Reorder batch that moves a slide one step "up" or "down".

    Returns None when the slide is unknown or already at that edge.
    """
    if direction not in ("up", "down"):
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")
    ordered = sort_slides(slides)
    pos = next((i for i, s in enumerate(ordered) if s.id == slide_id), None)
    if pos is None:
        return None
    other = pos - 1 if direction == "up" else pos + 1
    if other < 0 or other >= len(ordered):
        return None
    current, neighbour = ordered[pos], ordered[other]
    return [
        ReorderEntry(current.id, neighbour.order_index),
        ReorderEntry(neighbour.id, current.order_index),
    ]


# ── Static fallback ────────────────────────────────────────────────

_FALLBACK_STAMP = "1970-01-01T00:00:00.000Z"

_FALLBACK_ROWS: tuple[dict[str, Any], ...] = (
    {
        "id": "fallback-1",
        "title": "Timeless elegance",
        "subtitle": "Discover unique handcrafted pieces",
        "description": "Jewelry designed to shine in every special moment.",
        "imageUrl": "https://images.unsplash.com/photo-1515562141207-7a88fb7ce338?q=80&w=1600&auto=format&fit=crop",
        "ctaText": "View collection",
        "ctaLink": "/products",
        "offerText": "New collection",
        "isActive": True,
        "orderIndex": 0,
    },
    {
        "id": "fallback-2",
        "title": "Details you will love",
        "subtitle": "Gold and silver finishes of the finest quality",
        "description": "Every piece tells a story: yours.",
        "imageUrl": "https://images.unsplash.com/photo-1601057463239-28141b9d1b7a?q=80&w=1600&auto=format&fit=crop",
        "ctaText": "Explore now",
        "ctaLink": "/products",
        "offerText": "Limited edition",
        "isActive": True,
        "orderIndex": 1,
    },
)


def fallback_slides() -> list[Slide]:
    """Placeholder slides for when neither the service nor the cache can answer."""
    return [
        Slide.from_dict({**row, "createdAt": _FALLBACK_STAMP, "updatedAt": _FALLBACK_STAMP})
        for row in _FALLBACK_ROWS
    ]

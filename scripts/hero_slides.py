#!/usr/bin/env python3
"""Inspect and manage homepage hero slides from the command line.

Usage:
    python scripts/hero_slides.py list                 # public (active) slides
    python scripts/hero_slides.py list --all           # back-office view
    python scripts/hero_slides.py show <id>
    python scripts/hero_slides.py create --title T --subtitle S --description D --image-url U
    python scripts/hero_slides.py update <id> title="New title" isActive=false
    python scripts/hero_slides.py toggle <id>
    python scripts/hero_slides.py move <id> up
    python scripts/hero_slides.py reorder <id>=0 <id>=1
    python scripts/hero_slides.py delete <id>
"""

import argparse
import asyncio
import json
import sys

import structlog

from config.settings import settings
from src.utils.logging import configure_logging

configure_logging(level=settings.LOG_LEVEL, json=settings.LOG_JSON)

from config.validators import validate_hero_slider_admin, validate_retry_policy
from src.exceptions import ConfigError
from src.hero_slider import HeroSlider, HeroSliderService, ReorderEntry, Slide, SlideDraft

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage homepage hero slides")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="List slides")
    p.add_argument("--all", action="store_true", help="Include inactive slides (admin)")
    p.add_argument("--force", action="store_true", help="Bypass the cache")

    p = sub.add_parser("show", help="Show one slide")
    p.add_argument("slide_id")

    p = sub.add_parser("create", help="Create a slide")
    p.add_argument("--title", required=True)
    p.add_argument("--subtitle", required=True)
    p.add_argument("--description", required=True)
    p.add_argument("--image-url", required=True)
    p.add_argument("--cta-text")
    p.add_argument("--cta-link")
    p.add_argument("--offer-text")
    p.add_argument("--inactive", action="store_true")
    p.add_argument("--order-index", type=int)

    p = sub.add_parser("update", help="Update fields: key=value ...")
    p.add_argument("slide_id")
    p.add_argument("fields", nargs="+")

    for name in ("toggle", "delete"):
        p = sub.add_parser(name)
        p.add_argument("slide_id")

    p = sub.add_parser("move", help="Swap a slide with its neighbour")
    p.add_argument("slide_id")
    p.add_argument("direction", choices=["up", "down"])

    p = sub.add_parser("reorder", help="Assign order indexes: id=index ...")
    p.add_argument("pairs", nargs="+")
    return parser


def parse_field(raw: str) -> tuple[str, object]:
    """``key=value``; the value is read as JSON when it parses, else as text."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise ValueError(f"expected key=value, got {raw!r}")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def parse_reorder(raw: str) -> ReorderEntry:
    slide_id, sep, index = raw.partition("=")
    if not sep or not slide_id:
        raise ValueError(f"expected id=index, got {raw!r}")
    return ReorderEntry(slide_id, int(index))


def print_slides(slides: list[Slide]) -> None:
    for s in slides:
        flag = "on " if s.is_active else "off"
        print(f"{s.order_index:>4}  [{flag}]  {s.id}  {s.title}")


async def run(args: argparse.Namespace, slider: HeroSlider) -> int:
    cmd = args.command
    if cmd == "list":
        if args.all:
            slides = await slider.fetch_all_slides(force=args.force)
        else:
            slides = await slider.fetch_active_slides()
        print_slides(slides)
        return 1 if slider.error else 0

    if cmd == "show":
        slide = await slider.fetch_slide_by_id(args.slide_id)
        if slide is None:
            return 1
        print(json.dumps(slide.to_dict(), indent=2, ensure_ascii=False))
        return 0

    if cmd == "create":
        draft = SlideDraft(
            title=args.title,
            subtitle=args.subtitle,
            description=args.description,
            image_url=args.image_url,
            cta_text=args.cta_text,
            cta_link=args.cta_link,
            offer_text=args.offer_text,
            is_active=False if args.inactive else None,
            order_index=args.order_index,
        )
        slide = await slider.create_slide(draft)
        if slide is not None:
            print_slides([slide])
        return 0 if slide else 1

    if cmd == "update":
        changes = dict(parse_field(f) for f in args.fields)
        return 0 if await slider.update_slide(args.slide_id, changes) else 1

    if cmd == "toggle":
        return 0 if await slider.toggle_slide_status(args.slide_id) else 1

    if cmd == "delete":
        return 0 if await slider.delete_slide(args.slide_id) else 1

    if cmd == "move":
        # move needs the neighbours, so load the admin view first
        await slider.fetch_all_slides(force=True)
        if slider.error:
            return 1
        moved = await slider.move_slide(args.slide_id, args.direction)
        if not moved and not slider.error:
            logger.warning("hero_slide_not_moved", slide_id=args.slide_id,
                           direction=args.direction, msg="unknown id or already at edge")
        print_slides(slider.slides)
        return 0 if moved else 1

    if cmd == "reorder":
        entries = [parse_reorder(p) for p in args.pairs]
        return 0 if await slider.reorder_slides(entries) else 1

    raise AssertionError(f"unhandled command {cmd}")


async def main() -> int:
    args = build_parser().parse_args()
    try:
        validate_retry_policy()
        if not (args.command == "list" and not args.all):
            validate_hero_slider_admin()
    except ConfigError as exc:
        logger.error("config_invalid", error=str(exc))
        return 2

    async with HeroSliderService(settings) as service:
        slider = service.consumer(manual=True)
        try:
            return await run(args, slider)
        except ValueError as exc:
            logger.error("invalid_input", error=str(exc))
            return 2


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

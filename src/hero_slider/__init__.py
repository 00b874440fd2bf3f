from src.hero_slider.cache import SharedSlideCache, Snapshot
from src.hero_slider.client import ContentServiceClient
from src.hero_slider.consumer import HeroSlider
from src.hero_slider.coordinator import FetchCoordinator
from src.hero_slider.models import (
    ReorderEntry,
    ResourceClass,
    Slide,
    SlideDraft,
    fallback_slides,
)
from src.hero_slider.notifier import LoggingNotifier, Notifier
from src.hero_slider.reconciler import MutationReconciler
from src.hero_slider.retry import attempt
from src.hero_slider.service import HeroSliderService

__all__ = [
    "ContentServiceClient",
    "FetchCoordinator",
    "HeroSlider",
    "HeroSliderService",
    "LoggingNotifier",
    "MutationReconciler",
    "Notifier",
    "ReorderEntry",
    "ResourceClass",
    "SharedSlideCache",
    "Slide",
    "SlideDraft",
    "Snapshot",
    "attempt",
    "fallback_slides",
]

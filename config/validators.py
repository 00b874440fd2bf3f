"""Credential and configuration validators."""

from src.exceptions import ConfigError


def validate_hero_slider_admin() -> None:
    """Raise ConfigError if the back-office API token or base URL is missing."""
    from config.settings import settings
    if not settings.HERO_SLIDER_API_BASE_URL:
        raise ConfigError("HERO_SLIDER_API_BASE_URL is required")
    if not settings.HERO_SLIDER_API_TOKEN:
        raise ConfigError("HERO_SLIDER_API_TOKEN is required for admin operations")


def validate_retry_policy() -> None:
    """Raise ConfigError if the retry/cache knobs are out of range."""
    from config.settings import settings
    if settings.HERO_SLIDER_MAX_RETRIES < 0:
        raise ConfigError("HERO_SLIDER_MAX_RETRIES must be >= 0")
    if settings.HERO_SLIDER_RETRY_DELAY_SECONDS < 0:
        raise ConfigError("HERO_SLIDER_RETRY_DELAY_SECONDS must be >= 0")
    if settings.HERO_SLIDER_CACHE_TTL_SECONDS <= 0:
        raise ConfigError("HERO_SLIDER_CACHE_TTL_SECONDS must be > 0")

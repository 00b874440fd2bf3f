import pytest
from config.settings import Settings


def test_settings_has_hero_slider_service_config():
    s = Settings()
    assert hasattr(s, "HERO_SLIDER_API_BASE_URL")
    assert hasattr(s, "HERO_SLIDER_API_TOKEN")


def test_settings_cache_and_retry_defaults(monkeypatch):
    for name in ("HERO_SLIDER_CACHE_TTL_SECONDS", "HERO_SLIDER_MAX_RETRIES",
                 "HERO_SLIDER_RETRY_DELAY_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.HERO_SLIDER_CACHE_TTL_SECONDS == 60.0
    assert s.HERO_SLIDER_MAX_RETRIES == 2
    assert s.HERO_SLIDER_RETRY_DELAY_SECONDS == 1.0


def test_settings_timeouts_public_shorter_than_admin():
    s = Settings(_env_file=None)
    assert s.HERO_SLIDER_PUBLIC_TIMEOUT_SECONDS < s.HERO_SLIDER_ADMIN_TIMEOUT_SECONDS


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("HERO_SLIDER_MAX_RETRIES", "5")
    monkeypatch.setenv("HERO_SLIDER_API_BASE_URL", "https://api.example.com")
    s = Settings(_env_file=None)
    assert s.HERO_SLIDER_MAX_RETRIES == 5
    assert s.HERO_SLIDER_API_BASE_URL == "https://api.example.com"

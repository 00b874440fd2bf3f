import pytest

from config.settings import settings
from config.validators import validate_hero_slider_admin, validate_retry_policy
from src.exceptions import ConfigError


def test_admin_validator_requires_token(monkeypatch):
    monkeypatch.setattr(settings, "HERO_SLIDER_API_TOKEN", "")
    with pytest.raises(ConfigError, match="HERO_SLIDER_API_TOKEN"):
        validate_hero_slider_admin()


def test_admin_validator_passes_with_token(monkeypatch):
    monkeypatch.setattr(settings, "HERO_SLIDER_API_BASE_URL", "http://api.test")
    monkeypatch.setattr(settings, "HERO_SLIDER_API_TOKEN", "secret")
    validate_hero_slider_admin()


@pytest.mark.parametrize("field,value", [
    ("HERO_SLIDER_MAX_RETRIES", -1),
    ("HERO_SLIDER_RETRY_DELAY_SECONDS", -0.5),
    ("HERO_SLIDER_CACHE_TTL_SECONDS", 0),
])
def test_retry_policy_rejects_out_of_range(monkeypatch, field, value):
    monkeypatch.setattr(settings, field, value)
    with pytest.raises(ConfigError):
        validate_retry_policy()


def test_retry_policy_accepts_defaults(monkeypatch):
    monkeypatch.setattr(settings, "HERO_SLIDER_MAX_RETRIES", 2)
    monkeypatch.setattr(settings, "HERO_SLIDER_RETRY_DELAY_SECONDS", 1.0)
    monkeypatch.setattr(settings, "HERO_SLIDER_CACHE_TTL_SECONDS", 60.0)
    validate_retry_policy()

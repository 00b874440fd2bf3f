"""Runtime configuration for the hero slider content layer."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # === Remote content service ===
    HERO_SLIDER_API_BASE_URL: str = "http://localhost:3001"
    HERO_SLIDER_API_TOKEN: str = ""  # Bearer token for admin endpoints
    HERO_SLIDER_REQUEST_TIMEOUT_SECONDS: float = 10.0
    HERO_SLIDER_PUBLIC_TIMEOUT_SECONDS: float = 3.0  # keep the homepage snappy
    HERO_SLIDER_ADMIN_TIMEOUT_SECONDS: float = 8.0

    # === Cache / retry ===
    HERO_SLIDER_CACHE_TTL_SECONDS: float = 60.0
    HERO_SLIDER_MAX_RETRIES: int = 2  # extra attempts after the first
    HERO_SLIDER_RETRY_DELAY_SECONDS: float = 1.0

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    model_config = {"env_file": ".env"}


settings = Settings()

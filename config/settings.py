from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


def _float_env(name: str, default: str) -> float:
    return float(os.getenv(name, default))


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Values are read when the
    object is built, so ``get_settings.cache_clear()`` picks up new env vars.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.cors_origins: List[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        self.provider: str = os.getenv("PROVIDER", "openai").lower()

        self.openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY") or None
        self.openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
        self.openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o")

        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY") or None
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.temperature: float = _float_env("MODEL_TEMPERATURE", "0.3")
        self.top_p: float = _float_env("MODEL_TOP_P", "0.9")

        self.provider_timeout: float = _float_env("PROVIDER_TIMEOUT", "30")
        self.provider_max_retries: int = int(os.getenv("PROVIDER_MAX_RETRIES", "1"))

        self.relay_url: str = os.getenv("RELAY_URL", "http://127.0.0.1:8000/api/rutdoc")
        self.widget_timeout: float = _float_env("WIDGET_TIMEOUT", "60")

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}

    @property
    def model(self) -> str:
        if self.provider == "gemini":
            return self.gemini_model
        return self.openai_model

    @property
    def api_key_set(self) -> bool:
        if self.provider == "gemini":
            return bool(self.google_api_key)
        return bool(self.openai_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

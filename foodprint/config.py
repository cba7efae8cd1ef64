# foodprint/config.py
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


class ConfigError(Exception):
    """Bad value in the environment"""
    pass


def _float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}")


class Settings:
    def __init__(self):
        self.api_key: Optional[str] = os.getenv("AI_GATEWAY_API_KEY") or None
        self.gateway_url = os.getenv("AI_GATEWAY_URL", DEFAULT_GATEWAY_URL).rstrip("/")
        self.model = os.getenv("MODEL", DEFAULT_MODEL)
        self.timeout = _float_env("AI_TIMEOUT", 60.0)

        # client side
        self.proxy_url = os.getenv("PROXY_URL", "http://localhost:8000").rstrip("/")
        self.food_min_confidence = _float_env("FOOD_MIN_CONFIDENCE", 90.0)
        self.waste_min_confidence = _float_env("WASTE_MIN_CONFIDENCE", 80.0)

        self._validate()

    def _validate(self):
        if self.timeout <= 0:
            raise ConfigError("AI_TIMEOUT must be greater than 0")
        for name in ("food_min_confidence", "waste_min_confidence"):
            value = getattr(self, name)
            if value < 0 or value > 100:
                raise ConfigError(f"{name.upper()} must be between 0 and 100")

    def missing(self) -> list[str]:
        """Env vars the proxy needs before it can call the model."""
        return [] if self.api_key else ["AI_GATEWAY_API_KEY"]


def get_settings() -> Settings:
    # re-read every call so tests and reloads see env changes
    return Settings()

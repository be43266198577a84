from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import dotenv_values


def getenv(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name, default)
    return v


# repo_root/.env; this file lives at repo_root/api/palette_api/core/config.py
DEFAULT_ENV_FILE = Path(__file__).resolve().parents[3] / ".env"

API_KEY_NAME = "OPENROUTER_API_KEY"


def _dotenv_source(path: str | Path | None = None) -> Dict[str, Optional[str]]:
    env_path = Path(path or getenv("ENV_FILE") or DEFAULT_ENV_FILE)
    if not env_path.is_file():
        return {}
    return dict(dotenv_values(env_path))


def resolve_api_key(
    sources: Tuple[Dict[str, Optional[str]], ...] | None = None,
) -> str | None:
    """Return the first non-empty OpenRouter key among the candidate sources.

    The project ``.env`` file is consulted before the process environment.
    """
    if sources is None:
        sources = (_dotenv_source(), dict(os.environ))
    for source in sources:
        value = source.get(API_KEY_NAME)
        if value:
            return value
    return None


@dataclass
class Settings:
    # Service
    service_name: str = getenv("SERVICE_NAME", "ai-color-picker") or "ai-color-picker"
    service_env: str = getenv("SERVICE_ENV", "dev") or "dev"
    log_level: str = getenv("LOG_LEVEL", "INFO") or "INFO"

    # OpenRouter
    openrouter_api_key: str | None = field(default_factory=resolve_api_key)
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    openrouter_model: str = getenv("OPENROUTER_MODEL", "openai/gpt-4o") or "openai/gpt-4o"
    openrouter_temperature: float = float(getenv("OPENROUTER_TEMPERATURE", "0.7") or "0.7")
    openrouter_timeout: float = float(getenv("OPENROUTER_TIMEOUT", "30") or "30")  # seconds
    openrouter_referer: str = getenv("OPENROUTER_REFERER", "https://ai-color-picker.app") or "https://ai-color-picker.app"
    openrouter_title: str = getenv("OPENROUTER_TITLE", "AI Color Picker Tool") or "AI Color Picker Tool"

    # Security & policy
    cors_allow_origins: str | None = getenv("CORS_ALLOW_ORIGINS")

    @property
    def is_production(self) -> bool:
        return self.service_env in ["prod", "production"]


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency; tests override it instead of touching os.environ."""
    return settings

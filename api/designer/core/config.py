from __future__ import annotations

import os
from dataclasses import dataclass


def getenv(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name, default)
    return v


@dataclass
class Settings:
    # Service
    service_name: str = getenv("SERVICE_NAME", "ai-designer") or "ai-designer"
    service_env: str = getenv("SERVICE_ENV", "dev") or "dev"
    log_level: str = getenv("LOG_LEVEL", "INFO") or "INFO"

    # Generation backend (OpenRouter chat completions)
    openrouter_api_key: str | None = getenv("OPENROUTER_API_KEY")
    openrouter_base_url: str = getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1") or "https://openrouter.ai/api/v1"
    openrouter_timeout: int = int(getenv("OPENROUTER_TIMEOUT", "30") or "30")
    design_model: str = getenv("DESIGN_MODEL", "google/gemini-2.0-flash-001") or "google/gemini-2.0-flash-001"
    design_max_tokens: int = int(getenv("DESIGN_MAX_TOKENS", "3000") or "3000")
    design_temperature: float = float(getenv("DESIGN_TEMPERATURE", "0.8") or "0.8")

    # Generation service as seen from the host side
    design_server_url: str = getenv("DESIGN_SERVER_URL", "http://localhost:3000") or "http://localhost:3000"
    design_server_timeout: int = int(getenv("DESIGN_SERVER_TIMEOUT", "60") or "60")

    # Rendering
    default_font_family: str = getenv("DEFAULT_FONT_FAMILY", "Inter") or "Inter"

    # HTTP surface
    host: str = getenv("HOST", "0.0.0.0") or "0.0.0.0"
    port: int = int(getenv("PORT", "3000") or "3000")
    cors_allow_origins: str = getenv("CORS_ALLOW_ORIGINS", "*") or "*"

    @property
    def is_production(self) -> bool:
        return self.service_env in ["prod", "production"]


settings = Settings()

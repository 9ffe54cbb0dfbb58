# astra/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    gateway_base_url: str
    gateway_api_key: Optional[str]
    gateway_model: str
    gateway_max_tokens: int
    gateway_timeout: Optional[float]
    netlify_base_url: str
    netlify_token: Optional[str]
    deploy_poll_attempts: int
    deploy_poll_interval: float
    log_level: str

    @staticmethod
    def from_env() -> "Settings":
        gateway_base = os.getenv("ASTRA_GATEWAY_BASE_URL", "https://ai.gateway.lovable.dev/v1").rstrip("/")
        netlify_base = os.getenv("NETLIFY_API_BASE_URL", "https://api.netlify.com/api/v1").rstrip("/")
        return Settings(
            gateway_base_url=gateway_base,
            gateway_api_key=os.getenv("LOVABLE_API_KEY") or None,
            gateway_model=os.getenv("ASTRA_GATEWAY_MODEL", "google/gemini-2.5-flash"),
            gateway_max_tokens=int(os.getenv("ASTRA_GATEWAY_MAX_TOKENS", "120000")),
            gateway_timeout=_optional_float("ASTRA_GATEWAY_TIMEOUT"),
            netlify_base_url=netlify_base,
            netlify_token=os.getenv("NETLIFY_ACCESS_TOKEN") or None,
            deploy_poll_attempts=int(os.getenv("ASTRA_DEPLOY_POLL_ATTEMPTS", "30")),
            deploy_poll_interval=float(os.getenv("ASTRA_DEPLOY_POLL_INTERVAL", "1")),
            log_level=os.getenv("ASTRA_LOG_LEVEL", "INFO").upper(),
        )

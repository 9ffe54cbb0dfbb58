# astra/services/gateway_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import requests as http_requests

from astra.core.config import Settings
from astra.core.errors import ConfigurationError, GatewayError, PaymentRequiredError, RateLimitError
from astra.models.workshop import Message
from astra.services.prompt_builder import build_model_messages

logger = logging.getLogger(__name__)


class GatewayClient:
    """Chat-completion client for the hosted LLM gateway. One call, no retries."""

    def __init__(self, settings: Settings | None = None, session: Optional[http_requests.Session] = None):
        self.settings = settings or Settings.from_env()
        self.base_url = self.settings.gateway_base_url.rstrip("/")
        self.url = f"{self.base_url}/chat/completions"
        # module-level requests.post/get unless a session is injected
        self.session = session or http_requests

    def chat(self, history: Iterable[Message]) -> str:
        if not self.settings.gateway_api_key:
            raise ConfigurationError("LOVABLE_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "model": self.settings.gateway_model,
            "messages": build_model_messages(history),
            "stream": False,
            "max_tokens": self.settings.gateway_max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.settings.gateway_api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self.session.post(self.url, json=payload, headers=headers, timeout=self.settings.gateway_timeout)
        except http_requests.RequestException as ex:
            logger.error("AI gateway request failed: %s", ex)
            raise GatewayError(f"Failed to reach AI gateway: {type(ex).__name__}") from ex

        if resp.status_code == 429:
            raise RateLimitError()
        if resp.status_code == 402:
            raise PaymentRequiredError()
        if not resp.ok:
            logger.error("AI gateway error: %s %s", resp.status_code, resp.text)
            raise GatewayError("AI gateway error")

        try:
            data = resp.json()
        except ValueError as ex:
            raise GatewayError("Invalid response format from AI") from ex
        choices = data.get("choices") if isinstance(data, dict) else None
        first = choices[0] if isinstance(choices, list) and choices else None
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if content is None:
            content = ""
        if not isinstance(message, dict) or not isinstance(content, str):
            raise GatewayError("Invalid response format from AI")

        return content

"""OpenRouter chat-completion client used for palette generation."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import Settings
from ..models.exceptions import UpstreamException

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """Issue a single, non-retried chat completion against OpenRouter."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": self.settings.openrouter_referer,
            "X-Title": self.settings.openrouter_title,
            "Content-Type": "application/json",
        }

    def build_payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        return {
            "model": self.settings.openrouter_model,
            "messages": messages,
            "temperature": self.settings.openrouter_temperature,
        }

    async def chat_completion(self, api_key: str, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        """POST the conversation and return the decoded response document.

        Raises UpstreamException on transport failures, timeouts, non-2xx
        statuses and bodies that are not JSON.
        """
        model = self.settings.openrouter_model
        logger.debug(f"OpenRouter request: model={model}, messages={len(messages)}")
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.openrouter_timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.settings.openrouter_url,
                    headers=self._headers(api_key),
                    json=self.build_payload(messages),
                )
        except httpx.TimeoutException as e:
            logger.error(f"OpenRouter request timed out after {self.settings.openrouter_timeout}s: {e!r}")
            raise UpstreamException("timeout", model=model) from e
        except httpx.HTTPError as e:
            logger.error(f"OpenRouter request failed: {e!r}")
            raise UpstreamException("transport", model=model) from e

        if not response.is_success:
            error_text = response.text
            logger.error(f"OpenRouter API error {response.status_code}: {error_text}")
            raise UpstreamException("status", status_code=response.status_code, body=error_text, model=model)

        try:
            result = response.json()
        except ValueError as e:
            logger.error(f"OpenRouter returned a non-JSON body: {response.text[:500]}")
            raise UpstreamException("decode", status_code=response.status_code, body=response.text, model=model) from e

        logger.info(f"OpenRouter API call successful using {model}")
        return result

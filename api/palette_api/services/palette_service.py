from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..core.config import Settings
from ..models.exceptions import UpstreamMalformedException
from ..models.schemas import ValidationFailureKind
from .gatekeeper import require_api_key, validate_prompt
from .openrouter import OpenRouterClient
from .palette_validator import validate_response
from .prompts import palette_messages

logger = logging.getLogger(__name__)


class PaletteService:
    """Prompt in, validated palette out.

    Gatekeeper checks run before the OpenRouter call, so a bad prompt or a
    missing key never reaches the network.
    """

    def __init__(self, settings: Settings, client: Optional[OpenRouterClient] = None):
        self.settings = settings
        self.client = client or OpenRouterClient(settings)

    async def generate(self, body: Any) -> Dict[str, Any]:
        request = validate_prompt(body)
        api_key = require_api_key(self.settings)

        response = await self.client.chat_completion(api_key, palette_messages(request.prompt))

        result = validate_response(response)
        if not result.ok:
            raw: Any = response
            if result.failure is not ValidationFailureKind.MISSING_CONTENT:
                raw = response["choices"][0]["message"]["content"]
            logger.error(f"Rejected palette completion ({result.failure.value}): {result.detail}; raw={raw!r}")
            raise UpstreamMalformedException(result.failure, detail=result.detail, raw=raw)

        logger.info(f"Palette generated with {len(result.palette['colors'])} colors")
        return result.palette

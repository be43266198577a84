"""Checks that run before any call to OpenRouter is made."""

import logging
from typing import Any

from pydantic import ValidationError

from ..core.config import API_KEY_NAME, Settings
from ..models.exceptions import ConfigurationException, InvalidInputException
from ..models.schemas import PaletteRequest

logger = logging.getLogger(__name__)


def validate_prompt(body: Any) -> PaletteRequest:
    """Build a PaletteRequest from the decoded request body.

    The prompt is kept exactly as sent; trimming is only used to reject
    blank prompts.
    """
    if not isinstance(body, dict):
        logger.warning(f"Rejected palette request: body is {type(body).__name__}, not an object")
        raise InvalidInputException("body_not_object")
    try:
        return PaletteRequest.model_validate(body)
    except ValidationError as e:
        reasons = [err["type"] for err in e.errors()]
        logger.warning(f"Rejected palette request: {reasons}")
        raise InvalidInputException(",".join(reasons)) from e


def require_api_key(settings: Settings) -> str:
    api_key = settings.openrouter_api_key
    if not api_key:
        logger.error(f"{API_KEY_NAME} is not set in the .env file or the process environment")
        raise ConfigurationException(API_KEY_NAME)
    return api_key

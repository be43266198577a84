from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.config import Settings, get_settings
from ..models.exceptions import InvalidInputException
from ..models.schemas import ErrorResponse, PaletteResponse
from ..services.palette_service import PaletteService


router = APIRouter(tags=["palette"])


def get_palette_service(settings: Settings = Depends(get_settings)) -> PaletteService:
    return PaletteService(settings)


@router.post(
    "/api/generate-palette",
    response_model=PaletteResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_palette(request: Request, service: PaletteService = Depends(get_palette_service)):
    """
    Generate a 7-color UI palette from a free-text prompt.

    Flow:
    1. Validate the prompt and the OpenRouter credential
    2. Ask the model for a palette with the fixed system instruction
    3. Strip fences, parse and validate the completion
    4. Return the palette exactly as the model produced it
    """
    # A body that is not JSON, or JSON null, carries no prompt: an input error, not a 500
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidInputException("body_not_json") from e

    palette = await service.generate(body)
    return JSONResponse(content=palette)

import time
from typing import Dict, Any

from fastapi import APIRouter, Depends

from ..core.config import Settings, get_settings

router = APIRouter(tags=["health"])

_start_time = time.time()


@router.get("/healthz")
async def health(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Liveness probe; never calls OpenRouter."""
    return {
        "ok": True,
        "status": "healthy",
        "service": settings.service_name,
        "api_key_configured": bool(settings.openrouter_api_key),
        "uptime_seconds": round(time.time() - _start_time, 2),
    }

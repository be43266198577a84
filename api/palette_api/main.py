import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, get_settings, settings as default_settings
from .core.logging import setup_logging
from .middleware.request_response import RequestResponseMiddleware
from .models.exceptions import PaletteAPIException, to_http_exception
from .routers import health, palette

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. An explicit ``settings`` replaces the environment-derived one."""
    cfg = settings or default_settings
    setup_logging(cfg.log_level, json_output=cfg.service_env != "dev")

    app = FastAPI(
        title=cfg.service_name,
        description="AI Color Picker API - 7-color UI palettes generated from a text prompt",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    if settings is not None:
        app.dependency_overrides[get_settings] = lambda: settings

    origins = [o.strip() for o in (cfg.cors_allow_origins or "").split(",") if o.strip()]
    if not origins:
        # Default: wildcard in dev; restrict in production
        origins = [] if cfg.is_production else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    app.add_middleware(RequestResponseMiddleware)

    @app.exception_handler(PaletteAPIException)
    async def palette_exception_handler(request: Request, exc: PaletteAPIException):
        """Log the diagnostic detail, answer with the client-safe message only."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}",
            extra={"details": exc.details},
        )
        http_exc = to_http_exception(exc)
        return JSONResponse(status_code=http_exc.status_code, content=http_exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Keep routing errors (404, 405) in the same ``{"error": ...}`` shape."""
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    app.include_router(palette.router)
    app.include_router(health.router)
    return app


app = create_app()

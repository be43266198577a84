"""Request/Response middleware for consistent API behavior.

Assigns a request ID, binds it to the logging context, times the request,
logs it, and turns any exception nobody else handled into the generic
``{"error": ...}`` body with status 500.
"""

from __future__ import annotations

import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.logging import request_id_var
from ..models.exceptions import UNEXPECTED_MESSAGE

logger = logging.getLogger(__name__)


class RequestResponseMiddleware(BaseHTTPMiddleware):
    """Middleware for consistent request/response handling."""

    def __init__(
        self,
        app: ASGIApp,
        log_requests: bool = True,
        include_processing_time: bool = True,
    ):
        super().__init__(app)
        self.log_requests = log_requests
        self.include_processing_time = include_processing_time

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start_time = time.time()

        try:
            if self.log_requests:
                logger.info(
                    f"Incoming request: {request.method} {request.url.path}",
                    extra={"method": request.method, "path": request.url.path},
                )
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(f"Unhandled exception for {request.method} {request.url.path}")
                response = JSONResponse(status_code=500, content={"error": UNEXPECTED_MESSAGE})

            processing_time_ms = int((time.time() - start_time) * 1000)
            response.headers["X-Request-ID"] = request_id
            if self.include_processing_time:
                response.headers["X-Processing-Time"] = f"{processing_time_ms}ms"

            if self.log_requests:
                self._log_response(request, response, processing_time_ms)
            return response
        finally:
            request_id_var.reset(token)

    def _log_response(self, request: Request, response: Response, processing_time_ms: int) -> None:
        if response.status_code >= 500:
            log_level = logging.ERROR
            log_message = f"Server error response: {response.status_code}"
        elif response.status_code >= 400:
            log_level = logging.WARNING
            log_message = f"Client error response: {response.status_code}"
        else:
            log_level = logging.INFO
            log_message = f"Successful response: {response.status_code}"

        logger.log(
            log_level,
            f"{log_message} for {request.method} {request.url.path} ({processing_time_ms}ms)",
            extra={"status_code": response.status_code, "processing_time_ms": processing_time_ms},
        )

"""Custom exception classes for the palette API.

Each exception carries the HTTP status it maps to and a client-safe message.
Diagnostic detail lives in ``details`` and is only ever written to the server
log, never to the response body.
"""

from typing import Dict, Any, Optional

from fastapi import HTTPException

from .schemas import ValidationFailureKind


class PaletteAPIException(Exception):
    """Base exception for all palette API errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputException(PaletteAPIException):
    """Raised when the inbound prompt is missing, not a string or blank."""

    status_code = 400

    def __init__(self, reason: str, message: str = "Prompt is required"):
        self.reason = reason
        super().__init__(message, {"reason": reason})


class ConfigurationException(PaletteAPIException):
    """Raised when the OpenRouter credential is not configured."""

    def __init__(self, setting: str = "OPENROUTER_API_KEY"):
        self.setting = setting
        message = f"API key not configured. Please add {setting} to your .env file."
        super().__init__(message, {"setting": setting})


class UpstreamException(PaletteAPIException):
    """Raised when the OpenRouter call fails or returns a non-success status."""

    def __init__(self,
                 reason: str,
                 status_code: Optional[int] = None,
                 body: Optional[str] = None,
                 model: Optional[str] = None):
        self.upstream_status = status_code
        self.body = body
        self.model = model
        details: Dict[str, Any] = {"reason": reason}
        if status_code is not None:
            details["upstream_status"] = status_code
        if body is not None:
            details["body"] = body
        if model:
            details["model"] = model
        super().__init__("Failed to generate palette. Please try again.", details)


MALFORMED_MESSAGES = {
    ValidationFailureKind.MISSING_CONTENT: "Invalid response from AI",
    ValidationFailureKind.INVALID_JSON: "Failed to parse color data",
    ValidationFailureKind.INVALID_STRUCTURE: "Invalid palette structure received",
    ValidationFailureKind.MISSING_ROLE: "Incomplete color palette received",
    ValidationFailureKind.INVALID_HEX: "Invalid color format received",
}


class UpstreamMalformedException(PaletteAPIException):
    """Raised when the model answered but its content is not a valid palette."""

    def __init__(self, kind: ValidationFailureKind, detail: Optional[str] = None, raw: Any = None):
        self.kind = kind
        self.detail = detail
        self.raw = raw
        details: Dict[str, Any] = {"kind": kind.value}
        if detail:
            details["detail"] = detail
        if raw is not None:
            details["raw"] = raw
        super().__init__(MALFORMED_MESSAGES[kind], details)


UNEXPECTED_MESSAGE = "An unexpected error occurred"


def to_http_exception(exc: PaletteAPIException) -> HTTPException:
    """Convert a palette exception into a FastAPI HTTPException."""
    return HTTPException(status_code=exc.status_code, detail={"error": exc.message})

"""Pydantic models for the palette API request and response bodies.

The response models document the wire format in the OpenAPI schema. The
handler itself returns the validated upstream object unchanged, so these
models are never used to re-serialize a palette.
"""

from pydantic import BaseModel, Field, validator
from typing import List
from enum import Enum


HEX_COLOR_PATTERN = r'^#[0-9A-Fa-f]{6}$'
PALETTE_SIZE = 7


class ColorRole(str, Enum):
    """Semantic roles every palette must cover."""
    BACKGROUND = "Background"
    SURFACE = "Surface"
    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    ACCENT = "Accent"
    TEXT = "Text"
    SUBTEXT = "Subtext"


REQUIRED_ROLES = [role.value for role in ColorRole]


class ValidationFailureKind(str, Enum):
    """Reasons a model completion is rejected."""
    MISSING_CONTENT = "missing_content"
    INVALID_JSON = "invalid_json"
    INVALID_STRUCTURE = "invalid_structure"
    MISSING_ROLE = "missing_role"
    INVALID_HEX = "invalid_hex"


class PaletteRequest(BaseModel):
    """Inbound palette generation request."""

    prompt: str = Field(
        ...,
        strict=True,
        description="Free-text description of the desired palette",
        examples=["A calm fintech dashboard with deep navy and mint accents"]
    )

    @validator('prompt')
    def validate_prompt(cls, v):
        """Reject prompts that are blank once whitespace is trimmed."""
        if not v.strip():
            raise ValueError('Prompt must not be blank')
        return v


class ColorEntry(BaseModel):
    """One color of a palette."""

    role: str = Field(..., description="Semantic role", examples=["Primary"])
    hex: str = Field(..., pattern=HEX_COLOR_PATTERN, examples=["#1E3A8A"])


class PaletteResponse(BaseModel):
    """Validated palette returned to the caller."""

    colors: List[ColorEntry] = Field(..., min_length=PALETTE_SIZE, max_length=PALETTE_SIZE)


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str = Field(..., examples=["Prompt is required"])

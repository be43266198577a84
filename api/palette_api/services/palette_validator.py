"""Validation of raw model completions into palettes.

The validator is a linear pipeline over the completion text: presence,
fence-stripping, JSON parsing, structural contract, role coverage and hex
format. Each step either hands its output to the next one or ends the
pipeline with a single ``ValidationFailureKind``. Nothing here performs I/O or
keeps state, so validating the same text twice always yields the same result.

On success the parsed object is handed back exactly as the model produced it.
Colors are not case-folded, entries are not reordered, and unknown fields are
kept.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..models.schemas import REQUIRED_ROLES, ValidationFailureKind
from .guardrails import contract_errors

PALETTE_CONTRACT = "palette.json"

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")
_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


@dataclass(frozen=True)
class PaletteValidation:
    """Outcome of validating one completion: a palette or a failure kind."""

    palette: Optional[Dict[str, Any]] = None
    failure: Optional[ValidationFailureKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, palette: Dict[str, Any]) -> "PaletteValidation":
        return cls(palette=palette)

    @classmethod
    def failed(cls, kind: ValidationFailureKind, detail: Optional[str] = None) -> "PaletteValidation":
        return cls(failure=kind, detail=detail)


def extract_completion_text(response: Any) -> Optional[str]:
    """Return the first choice's message content, or None when there is none.

    Content given as a list of parts is joined from its text parts.
    """
    if not isinstance(response, dict):
        return None
    choices = response.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if isinstance(content, list):
        parts = [p.get("text", "") for p in content if isinstance(p, dict) and "text" in p]
        content = "\n".join([p for p in parts if isinstance(p, str) and p])
    if not isinstance(content, str) or not content:
        return None
    return content


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} is out of range")
    return value


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence markers and trim surrounding whitespace."""
    return _FENCE.sub("", _JSON_FENCE.sub("", text)).strip()


def _missing_role(colors: List[Any]) -> Optional[str]:
    roles = [entry.get("role") if isinstance(entry, dict) else None for entry in colors]
    for role in REQUIRED_ROLES:
        if role not in roles:
            return role
    return None


def _invalid_hex(colors: List[Any]) -> Optional[int]:
    for index, entry in enumerate(colors):
        value = entry.get("hex") if isinstance(entry, dict) else None
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value):
            return index
    return None


def validate_completion(text: Optional[str]) -> PaletteValidation:
    """Run the validation pipeline over the completion text."""
    if not text:
        return PaletteValidation.failed(ValidationFailureKind.MISSING_CONTENT)

    cleaned = strip_code_fences(text)
    try:
        palette = json.loads(cleaned, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError as e:
        return PaletteValidation.failed(ValidationFailureKind.INVALID_JSON, str(e))

    errors = contract_errors(PALETTE_CONTRACT, palette)
    if errors:
        return PaletteValidation.failed(ValidationFailureKind.INVALID_STRUCTURE, "; ".join(errors))

    colors = palette["colors"]
    role = _missing_role(colors)
    if role is not None:
        return PaletteValidation.failed(ValidationFailureKind.MISSING_ROLE, role)

    index = _invalid_hex(colors)
    if index is not None:
        entry = colors[index]
        value = entry.get("hex") if isinstance(entry, dict) else entry
        return PaletteValidation.failed(ValidationFailureKind.INVALID_HEX, f"colors[{index}]: {value!r}")

    return PaletteValidation.success(palette)


def validate_response(response: Any) -> PaletteValidation:
    """Validate a full chat-completion response document."""
    return validate_completion(extract_completion_text(response))

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft7Validator


GUARDRAILS_DIR = Path(__file__).resolve().parents[1] / "guardrails"

_SCHEMA_CACHE: Dict[str, Draft7Validator] = {}


def _load_schema(name: str) -> Draft7Validator:
    if name in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[name]

    schema_path = GUARDRAILS_DIR / name
    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft7Validator.check_schema(schema)
    validator = Draft7Validator(schema)
    _SCHEMA_CACHE[name] = validator
    return validator


def contract_errors(name: str, payload: Any) -> List[str]:
    """Return the contract violations of ``payload``, sorted by path."""
    validator = _load_schema(name)
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
    return [f"{list(e.path)}: {e.message}" for e in errors]

"""Turns raw model output into a list of candidate listing records."""

import json
from enum import Enum
from typing import Any

from carlisting.logging.logger import Log
from carlisting.parsing.exceptions import ResponseFormatError


class ResponseShape(str, Enum):
    """Recognized top-level shapes of a provider's JSON reply."""

    WRAPPED_LIST = "wrapped_list"
    BARE_LIST = "bare_list"
    SINGLE_OBJECT = "single_object"
    INVALID = "invalid"


def classify_response(parsed: Any) -> ResponseShape:
    """Classify a decoded JSON value. Checks run in precedence order."""
    if isinstance(parsed, dict) and isinstance(parsed.get("listings"), list):
        return ResponseShape.WRAPPED_LIST
    if isinstance(parsed, list):
        return ResponseShape.BARE_LIST
    if isinstance(parsed, dict):
        return ResponseShape.SINGLE_OBJECT
    return ResponseShape.INVALID


def parse_response(text: str) -> list[Any]:
    """Decode model output and extract candidate records without validating them.

    Raises:
        ResponseFormatError: if the text is not JSON or the JSON is a scalar
            or null.
    """
    cleaned = _strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"Failed to parse AI response: {exc}") from exc

    shape = classify_response(parsed)
    Log.debug(f"AI response classified as {shape.value}")
    if shape is ResponseShape.WRAPPED_LIST:
        return list(parsed["listings"])
    if shape is ResponseShape.BARE_LIST:
        return parsed
    if shape is ResponseShape.SINGLE_OBJECT:
        return [parsed]
    raise ResponseFormatError("Failed to parse AI response: Invalid response format")


def _strip_code_fences(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)
    return cleaned

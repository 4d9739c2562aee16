import json
from typing import Any, Dict, Optional

from synthrec.core.exceptions import EmptyResponseError, MalformedResponseError


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```) if present."""
    cleaned_text = text.strip()
    if cleaned_text.startswith("```json"):
        cleaned_text = cleaned_text[7:]
    elif cleaned_text.startswith("```"):
        cleaned_text = cleaned_text[3:]

    if cleaned_text.endswith("```"):
        cleaned_text = cleaned_text[:-3]

    return cleaned_text.strip()


def parse_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Parse model output that must be exactly one JSON object.

    Unlike lenient extraction parsers, no repair is attempted beyond dropping
    markdown fences: arrays, scalars, null and concatenated objects are all
    rejected so the caller can retry the request.

    Args:
        text: Raw message content returned by the model

    Returns:
        The parsed JSON object

    Raises:
        EmptyResponseError: If the content is missing or blank
        MalformedResponseError: If the content is not a single JSON object
    """
    if text is None or not text.strip():
        raise EmptyResponseError("Empty response from model")

    cleaned_text = strip_code_fences(text)

    try:
        parsed = json.loads(cleaned_text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Response is not valid JSON: {e}", original_error=e
        ) from e

    if not isinstance(parsed, dict):
        kind = "null" if parsed is None else type(parsed).__name__
        raise MalformedResponseError(
            f"Invalid JSON structure: expected object, got {kind}"
        )

    return parsed

"""Parsing of structured (non tool call) JSON replies.

Used when the model was asked to answer with JSON, e.g. "return a JSON array
of boat makers". Unlike :func:`toolcall_extractor.parse_tool_calls` these
helpers raise :class:`ResponseParseError` when nothing usable is found.
"""

import json
import re
from typing import Any, Literal

from loguru import logger

from toolcall_extractor.errors import ResponseParseError
from toolcall_extractor.json_repair import repair_json

JsonKind = Literal["object", "array"]

_OPENING_FENCE = re.compile(r"^```(?:json|js|javascript|python|tsx|ts)?[ \t]*\n?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\n?\s*```$")
_LEADING_JSON_TOKEN = re.compile(r"^\s*json\b\s*", re.IGNORECASE)

_DELIMITERS = {"object": ("{", "}"), "array": ("[", "]")}


def remove_markdown_code_blocks(text: str) -> str:
    """Strip one surrounding code fence and a stray leading ``json`` label.

    Example:
        >>> remove_markdown_code_blocks('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    cleaned = _OPENING_FENCE.sub("", text.strip())
    cleaned = _CLOSING_FENCE.sub("", cleaned)
    cleaned = cleaned.strip()

    if cleaned.startswith("```"):
        cleaned = cleaned[3:].strip()
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3].strip()

    return _LEADING_JSON_TOKEN.sub("", cleaned).strip()


def _detect_kind(text: str) -> JsonKind:
    brace = text.find("{")
    bracket = text.find("[")
    if bracket != -1 and (brace == -1 or bracket < brace):
        return "array"
    return "object"


def extract_json_from_text(text: str, kind: JsonKind | None = None) -> str | None:
    """Return the first-opener to last-closer substring for ``kind``.

    With no ``kind``, whichever of ``{`` and ``[`` appears first decides.
    Returns None when there is no such substring.
    """
    opener, closer = _DELIMITERS[kind or _detect_kind(text)]
    first = text.find(opener)
    last = text.rfind(closer)
    if first == -1 or last <= first:
        return None
    return text[first:last + 1]


def fix_json_errors(text: str) -> str:
    """Balance brackets, close a dangling string and drop trailing commas."""
    return repair_json(text)


def parse_json_from_ai_response(
    text: str,
    kind: JsonKind | None = None,
    fix_errors: bool = True,
    extract_from_text: bool = True,
) -> Any:
    """Parse a JSON value out of a model reply.

    Args:
        text: The raw reply.
        kind: Expected top-level type; auto-detected when None.
        fix_errors: Apply :func:`fix_json_errors` before parsing.
        extract_from_text: Cut the JSON out of surrounding prose first.

    Returns:
        The decoded value.

    Raises:
        ResponseParseError: If no JSON can be decoded.
    """
    logger.debug("[response] parsing {} chars (kind={})", len(text or ""), kind)

    json_text = remove_markdown_code_blocks(text or "")

    if extract_from_text:
        extracted = extract_json_from_text(json_text, kind)
        if extracted is not None:
            json_text = extracted

    if fix_errors:
        json_text = fix_json_errors(json_text)

    try:
        return json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.debug("[response] JSON parse failed: {} ({!r})", e, json_text[:200])
        raise ResponseParseError(f"Failed to parse JSON from AI response: {e}") from e


def parse_json_object_from_ai_response(text: str) -> dict[str, Any]:
    """Parse a JSON object reply.

    Raises:
        ResponseParseError: If the reply is not a JSON object.
    """
    parsed = parse_json_from_ai_response(text, kind="object")
    if not isinstance(parsed, dict):
        raise ResponseParseError(f"Expected JSON object but got {type(parsed).__name__}")
    return parsed


def parse_json_array_from_ai_response(text: str) -> list[Any]:
    """Parse a JSON array reply.

    Raises:
        ResponseParseError: If the reply is not a JSON array.
    """
    parsed = parse_json_from_ai_response(text, kind="array")
    if not isinstance(parsed, list):
        raise ResponseParseError(f"Expected JSON array but got {type(parsed).__name__}")
    return parsed

"""Structural repair for truncated or slightly malformed JSON.

Model output is often cut off mid-object when a response hits its token
limit. The repair here is purely structural: close an unterminated string,
close unbalanced brackets in nesting order, and drop trailing commas. It never
invents keys or values.
"""

import json
from typing import Any

from loguru import logger

from toolcall_extractor.errors import NotJsonError
from toolcall_extractor.scanning import JSON_QUOTES, PAIRS, iter_unquoted, unclosed


def repair_json(text: str) -> str:
    """Return ``text`` with its structure balanced and trailing commas removed."""
    fixed = text.strip()
    stack, quote = unclosed(fixed, JSON_QUOTES)

    if quote is not None:
        # A lone backslash would escape the closing quote.
        if fixed.endswith("\\") and not fixed.endswith("\\\\"):
            fixed = fixed[:-1]
        fixed += quote

    fixed += "".join(PAIRS[opener] for opener in reversed(stack))
    return strip_trailing_commas(fixed)


def strip_trailing_commas(text: str) -> str:
    """Remove commas that directly precede a closing brace or bracket."""
    drop: set[int] = set()
    for i, ch, _ in iter_unquoted(text, 0, JSON_QUOTES):
        if ch != ",":
            continue
        j = i + 1
        while j < len(text) and text[j].isspace():
            j += 1
        if j < len(text) and text[j] in "}]":
            drop.add(i)

    if not drop:
        return text
    return "".join(ch for i, ch in enumerate(text) if i not in drop)


def repair_and_parse(candidate: str) -> Any:
    """Parse ``candidate`` as JSON, repairing its structure if needed.

    Args:
        candidate: Substring suspected of being JSON.

    Returns:
        The decoded value.

    Raises:
        NotJsonError: If the candidate does not parse even after repair.
    """
    text = candidate.strip()
    if not text:
        raise NotJsonError(candidate, "empty input")

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    repaired = repair_json(text)
    try:
        value = json.loads(repaired)
    except json.JSONDecodeError as e:
        logger.debug("[repair] giving up on candidate ({}): {!r}", e.msg, text[:120])
        raise NotJsonError(candidate, e.msg) from e

    logger.debug("[repair] repaired truncated JSON ({} -> {} chars)", len(text), len(repaired))
    return value


def loads_lenient(candidate: str | None) -> Any | None:
    """Like :func:`repair_and_parse` but returns None instead of raising."""
    if not candidate:
        return None
    try:
        return repair_and_parse(candidate)
    except NotJsonError:
        return None


def loads_strict(candidate: str | None) -> Any | None:
    """Plain ``json.loads`` that returns None on failure."""
    if not candidate:
        return None
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        return None

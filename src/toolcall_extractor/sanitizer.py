"""Removal of tool-call-looking leftovers from user-visible content.

Run after extraction on the cleaned content. A fragment is only removed when
it carries a call signature (``"name":`` or ``name=``), so example code in a
fenced block without one is left alone.
"""

import re
from typing import Iterable

from loguru import logger

from toolcall_extractor.scanning import iter_delimited, iter_fenced_blocks

TOOL_CALL_MARKERS = (
    re.compile(r"\*\*TOOL CALL:\*\*", re.IGNORECASE),
    re.compile(r"TOOL CALL:\s*", re.IGNORECASE),
    re.compile(r"^TOOL CALL\s*$", re.IGNORECASE | re.MULTILINE),
)
STANDALONE_CALL_LINE = re.compile(
    r'^[ \t]*\{\s*"name"\s*:\s*"[^"]+"\s*,\s*"arguments"\s*:\s*\{[^}]*\}\s*\}[ \t]*$',
    re.MULTILINE,
)
JSON_NAME_FIELD = re.compile(r'"name"\s*:', re.IGNORECASE)
NAME_ASSIGNMENT = re.compile(r"name\s*=", re.IGNORECASE)
WHITESPACE_ONLY_LINE = re.compile(r"^[ \t\r\f\v]+$", re.MULTILINE)
EXCESS_NEWLINES = re.compile(r"\n{3,}")

SANITIZED_FENCE_LABELS = ("tool_call", "tool_calls", "tool_code")


def _looks_like_call(fragment: str) -> bool:
    return bool(JSON_NAME_FIELD.search(fragment) or NAME_ASSIGNMENT.search(fragment))


def _cut(text: str, regions: Iterable[tuple[int, int]]) -> str:
    pieces = []
    pos = 0
    for start, end in regions:
        pieces.append(text[pos:start])
        pos = end
    pieces.append(text[pos:])
    return "".join(pieces)


def sanitize_content(content: str, had_successful_tool_calls: bool = False) -> str:
    """Strip residual tool call syntax that extraction could not parse.

    Rules, in order: drop ``TOOL CALL:`` markers; drop fenced
    ``tool_call(s)``/``tool_code`` blocks whose body has a ``"name":`` field;
    drop lines that are exactly one ``{"name": ..., "arguments": {...}}``
    object; drop ``<tool_call>`` and ``<|tool_call_start|>`` blocks carrying a
    name signature; then clean up whitespace.

    Args:
        content: Message text, usually ``ParseOutcome.content``.
        had_successful_tool_calls: Whether extraction found calls in this
            message. Only used for logging.

    Returns:
        The sanitized, trimmed text.
    """
    if not content:
        return ""

    sanitized = content
    for marker in TOOL_CALL_MARKERS:
        sanitized = marker.sub("", sanitized)

    blocks = [
        (block.start, block.end)
        for block in iter_fenced_blocks(sanitized, SANITIZED_FENCE_LABELS)
        if JSON_NAME_FIELD.search(block.body)
    ]
    if blocks:
        logger.debug("[sanitize] removing {} unparsed tool call code block(s)", len(blocks))
        sanitized = _cut(sanitized, blocks)

    sanitized = STANDALONE_CALL_LINE.sub("", sanitized)

    for start_marker, end_marker in (("<tool_call>", "</tool_call>"), ("<|tool_call_start|>", "<|tool_call_end|>")):
        regions = [
            (region.start, region.end)
            for region in iter_delimited(sanitized, start_marker, end_marker, ignore_case=True)
            if _looks_like_call(region.inner)
        ]
        if regions:
            logger.debug("[sanitize] removing {} unparsed {} block(s)", len(regions), start_marker)
            sanitized = _cut(sanitized, regions)

    sanitized = WHITESPACE_ONLY_LINE.sub("", sanitized)
    sanitized = EXCESS_NEWLINES.sub("\n\n", sanitized)
    sanitized = sanitized.strip()

    if sanitized != content.strip():
        logger.debug(
            "[sanitize] content changed (had_successful_tool_calls={})",
            had_successful_tool_calls,
        )
    return sanitized

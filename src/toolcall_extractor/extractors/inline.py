"""Extractors for unwrapped JSON tool calls.

These are the least constrained formats and therefore the most prone to false
positives: the inline form needs a ``tool_call`` keyword right before the
object, and the bare form only runs when nothing else matched.
"""

import json
import re
from typing import Iterator

from loguru import logger

from toolcall_extractor.errors import NotJsonError
from toolcall_extractor.extractors.base import BaseExtractor, ExtractorMatch, call_arguments, has_call_name
from toolcall_extractor.json_repair import loads_strict, repair_and_parse
from toolcall_extractor.scanning import CLOSERS, JSON_QUOTES, iter_unquoted, outer_braces

INLINE_KEYWORD = re.compile(r"tool_call\s*(?=\{)", re.IGNORECASE)
NAME_KEY = re.compile(r'"name"\s*:\s*"')


class InlineToolCallExtractor(BaseExtractor):
    """Recognises ``tool_call {"name": ..., "arguments": ...}`` without a fence.

    When the object is truncated the candidate runs to the end of its line and
    is repaired.
    """

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "inline-tool-call"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        keywords = list(INLINE_KEYWORD.finditer(text))
        keyword_starts = {keyword.start() for keyword in keywords}

        pos = 0
        for keyword in keywords:
            if keyword.start() < pos:
                continue

            brace = keyword.end()
            end, pos = _scan_object(text, brace, keyword_starts)
            if end is None:
                line_end = text.find("\n", brace, pos)
                end = line_end if line_end != -1 else pos

            candidate = text[brace:end]
            if not NAME_KEY.search(candidate):
                continue

            try:
                data = repair_and_parse(candidate)
            except NotJsonError:
                logger.debug("[extract] inline tool_call object is not JSON")
                continue

            if not has_call_name(data):
                continue

            logger.debug("[extract] inline tool_call {}", data["name"])
            yield self._match(keyword.start(), end, data["name"], call_arguments(data))


def _scan_object(text: str, brace: int, stops: set[int]) -> tuple[int | None, int]:
    """Scan the object opening at ``brace``.

    Returns the index just past its closing brace (or None when unclosed) and
    the index where scanning stopped. An unquoted ``tool_call`` keyword ends
    the scan, so no character is scanned twice across keywords.
    """
    for i, ch, depth in iter_unquoted(text, brace, JSON_QUOTES):
        if i in stops:
            return None, i
        if depth == 0 and ch in CLOSERS:
            return i + 1, i + 1
    return None, len(text)


class BareJsonExtractor(BaseExtractor):
    """Recognises a message that is (or starts with) a bare call object.

    Only attempted when no other extractor found a call. Text around the
    object is preserved.
    """

    fallback_only = True

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "bare-json"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        trimmed = text.strip()
        if not trimmed.startswith("{"):
            return

        offset = text.index("{")
        try:
            data = json.loads(trimmed)
            start, end = offset, offset + len(trimmed)
        except json.JSONDecodeError:
            bounds = outer_braces(text)
            if bounds is None:
                return
            start, end = bounds
            data = loads_strict(text[start:end])

        if not has_call_name(data):
            logger.debug("[extract] leading JSON object is not a tool call")
            return

        logger.debug("[extract] bare JSON call {}", data["name"])
        yield self._match(start, end, data["name"], call_arguments(data))

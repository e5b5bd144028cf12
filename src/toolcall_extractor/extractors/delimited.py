"""Extractors for special-token delimited tool calls.

Some backends wrap tool calls in tokens rather than Markdown or XML::

    <|tool_calls_start|>{"name": "search_legs", "arguments": {...}}<|tool_calls_end|>
    <|tool_call_start|>[search_legs(departure="Nice")]<|tool_call_end|>
    <|start|>assistant<|channel|>commentary<|message|>{"name": ...}<|call|>
"""

from typing import Any, Iterator

from loguru import logger

from toolcall_extractor.extractors.base import BaseExtractor, ExtractorMatch, calls_from_value
from toolcall_extractor.json_repair import loads_lenient, loads_strict
from toolcall_extractor.python_literal import parse_python_call
from toolcall_extractor.scanning import PYTHON_QUOTES, iter_delimited, outer_braces, split_top_level


def _object_substring(text: str) -> str | None:
    bounds = outer_braces(text)
    return text[bounds[0]:bounds[1]] if bounds is not None else None


class ToolCallsDelimiterExtractor(BaseExtractor):
    """Recognises ``<|tool_calls_start|> ... <|tool_calls_end|>``."""

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "tool-calls-delimiter"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        for region in iter_delimited(text, "<|tool_calls_start|>", "<|tool_calls_end|>"):
            inner = region.inner.strip()
            calls = []
            if inner.startswith("["):
                calls = calls_from_value(loads_lenient(inner))
            if not calls:
                calls = calls_from_value(loads_lenient(_object_substring(inner)))
            if not calls:
                logger.debug("[extract] <|tool_calls_start|> block without a usable call")
                continue
            for name, arguments in calls:
                logger.debug("[extract] delimiter call {}", name)
                yield self._match(region.start, region.end, name, arguments)


class ToolCallDelimiterExtractor(BaseExtractor):
    """Recognises ``<|tool_call_start|> ... <|tool_call_end|>`` (singular).

    The payload may be one or more Python-style calls, optionally inside a
    ``[...]`` list, or a JSON object or array of call objects.
    """

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "tool-call-delimiter"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        for region in iter_delimited(text, "<|tool_call_start|>", "<|tool_call_end|>"):
            calls = self._parse_payload(region.inner.strip())
            if not calls:
                logger.debug("[extract] <|tool_call_start|> block without a usable call")
                continue
            for name, arguments in calls:
                logger.debug("[extract] single-delimiter call {}", name)
                yield self._match(region.start, region.end, name, arguments)

    def _parse_payload(self, raw: str) -> list[tuple[str, dict[str, Any]]]:
        unwrapped = raw[1:-1].strip() if raw.startswith("[") and raw.endswith("]") else raw

        calls = self._parse_python_calls(unwrapped)
        if calls:
            return calls

        candidates = [raw, unwrapped, _object_substring(raw), _object_substring(unwrapped)]
        seen: set[str] = set()
        for candidate in candidates:
            if not candidate or not candidate.strip() or candidate in seen:
                continue
            seen.add(candidate)
            calls = calls_from_value(loads_lenient(candidate))
            if calls:
                return calls
        return []

    def _parse_python_calls(self, payload: str) -> list[tuple[str, dict[str, Any]]]:
        denylist = self.config.place_name_denylist
        single = parse_python_call(payload, denylist)
        if single is not None:
            return [single]

        # [first(a=1), second(b=2)]
        pieces = split_top_level(payload, ",", PYTHON_QUOTES)
        if len(pieces) < 2:
            return []
        parsed = [parse_python_call(piece, denylist) for piece in pieces]
        if any(call is None for call in parsed):
            return []
        return [(call.name, call.arguments) for call in parsed if call is not None]


class MessageTokenExtractor(BaseExtractor):
    """Recognises ``<|message|> ... <|call|>`` token-delimited payloads."""

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "message-token"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        for region in iter_delimited(text, "<|message|>", "<|call|>", ignore_case=True):
            inner = region.inner.strip()
            data = loads_strict(inner)
            if data is None:
                data = loads_strict(_object_substring(inner))
            calls = calls_from_value(data) if isinstance(data, dict) else []
            if not calls:
                logger.debug("[extract] <|message|> payload without a usable call")
                continue
            name, arguments = calls[0]
            logger.debug("[extract] token-format call {}", name)
            yield self._match(region.start, region.end, name, arguments)

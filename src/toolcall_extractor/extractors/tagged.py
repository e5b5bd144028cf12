"""Extractors for XML-like tool call tags.

Two shapes are handled::

    <tool_call>{"name": "search_legs", "arguments": {"from": "Nice"}}</tool_call>
    <tool_call><function=search_legs><parameter=from>Nice</parameter></function></tool_call>

and the second one without the ``<tool_call>`` wrapper.
"""

import re
from typing import Any, Iterator

from loguru import logger

from toolcall_extractor.extractors.base import BaseExtractor, ExtractorMatch, calls_from_value
from toolcall_extractor.json_repair import loads_lenient
from toolcall_extractor.models.tool_call import ExtractedSpan
from toolcall_extractor.scanning import iter_delimited, outer_braces

FUNCTION_OPEN = re.compile(r"<function=(\w+)>", re.IGNORECASE)
FUNCTION_CLOSE = re.compile(r"</function>", re.IGNORECASE)
PARAMETER_OPEN = re.compile(r"<parameter=(\w+)>", re.IGNORECASE)
PARAMETER_CLOSE = re.compile(r"</parameter>", re.IGNORECASE)


def iter_function_tags(text: str) -> Iterator[tuple[ExtractedSpan, str, str]]:
    """Yield ``(span, function name, body)`` for each ``<function=NAME>...</function>``."""
    pos = 0
    while True:
        opening = FUNCTION_OPEN.search(text, pos)
        if opening is None:
            return
        closing = FUNCTION_CLOSE.search(text, opening.end())
        if closing is None:
            return
        yield (
            ExtractedSpan(opening.start(), closing.end()),
            opening.group(1),
            text[opening.end():closing.start()],
        )
        pos = closing.end()


def parse_xml_parameters(block: str) -> dict[str, Any]:
    """Parse ``<parameter=KEY>VALUE</parameter>`` tags; values stay strings."""
    args: dict[str, Any] = {}
    pos = 0
    while True:
        opening = PARAMETER_OPEN.search(block, pos)
        if opening is None:
            break
        closing = PARAMETER_CLOSE.search(block, opening.end())
        if closing is None:
            break
        args[opening.group(1)] = block[opening.end():closing.start()].strip()
        pos = closing.end()
    return args


def parse_xml_function_call(block: str) -> tuple[str, dict[str, Any]] | None:
    """Parse the first ``<function=NAME>`` element in ``block``."""
    for _, name, body in iter_function_tags(block):
        return name, parse_xml_parameters(body)
    return None


class ToolCallTagExtractor(BaseExtractor):
    """Recognises ``<tool_call> ... </tool_call>`` wrappers (Hermes style).

    The inner text may be JSON (object, or a list of objects) or the
    ``<function=...>`` grammar.
    """

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "tool-call-tag"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        for region in iter_delimited(text, "<tool_call>", "</tool_call>", ignore_case=True):
            inner = region.inner.strip()
            calls = self._parse_inner(inner)
            if not calls:
                logger.debug("[extract] <tool_call> block without a usable call")
                continue
            for name, arguments in calls:
                logger.debug("[extract] <tool_call> {}", name)
                yield self._match(region.start, region.end, name, arguments)

    def _parse_inner(self, inner: str) -> list[tuple[str, dict[str, Any]]]:
        if inner.startswith("["):
            calls = calls_from_value(loads_lenient(inner))
            if calls:
                return calls

        bounds = outer_braces(inner)
        if bounds is not None:
            calls = calls_from_value(loads_lenient(inner[bounds[0]:bounds[1]]))
            if calls:
                return calls

        xml_call = parse_xml_function_call(inner)
        return [xml_call] if xml_call is not None else []


class FunctionTagExtractor(BaseExtractor):
    """Recognises bare ``<function=NAME>...</function>`` elements."""

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "function-tag"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        for span, name, body in iter_function_tags(text):
            logger.debug("[extract] <function={}>", name)
            yield self._match(span.start, span.end, name, parse_xml_parameters(body))

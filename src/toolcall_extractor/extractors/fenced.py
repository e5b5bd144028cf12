"""Extractor for tool calls inside Markdown code fences."""

import json
from typing import Any, Iterator

from loguru import logger

from toolcall_extractor.errors import NotJsonError
from toolcall_extractor.extractors.base import BaseExtractor, ExtractorMatch, call_arguments, has_call_name
from toolcall_extractor.json_repair import repair_and_parse
from toolcall_extractor.python_literal import parse_python_call
from toolcall_extractor.scanning import iter_fenced_blocks

FENCE_LABELS = ("tool_call", "tool_calls", "tool_code", "json")


class FencedBlockExtractor(BaseExtractor):
    """Recognises fenced blocks labelled ``tool_call(s)``, ``tool_code`` or ``json``.

    The body may be a Python-style call, a ``{"name": ..., "arguments": ...}``
    object (repaired if truncated), or a bare profile object with no ``name``,
    which becomes an implicit call to the configured profile tool.
    """

    @property
    def name(self) -> str:
        """Return the extractor identifier."""
        return "fenced-block"

    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        for block in iter_fenced_blocks(text, FENCE_LABELS):
            body = block.body.strip()
            if not body:
                continue

            python_call = parse_python_call(body, self.config.place_name_denylist)
            if python_call is not None:
                logger.debug("[extract] python-style call {} in ```{} block", python_call.name, block.label)
                yield self._match(block.start, block.end, python_call.name, python_call.arguments)
                continue

            data = self._load_body(body)
            if data is None:
                continue

            if has_call_name(data):
                logger.debug("[extract] JSON call {} in ```{} block", data["name"], block.label)
                yield self._match(block.start, block.end, data["name"], call_arguments(data))
            elif self._is_profile_object(data):
                logger.debug(
                    "[extract] profile JSON without name; treating as implicit {} call",
                    self.config.implicit_tool_name,
                )
                yield self._match(block.start, block.end, self.config.implicit_tool_name, data)

    def _load_body(self, body: str) -> Any:
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            pass
        try:
            return repair_and_parse(body)
        except NotJsonError:
            logger.debug("[extract] fenced block body is not JSON; leaving it in place")
            return None

    def _is_profile_object(self, data: Any) -> bool:
        return (
            isinstance(data, dict) and
            not data.get("name") and
            any(field in data for field in self.config.profile_fields)
        )

"""Extraction orchestrator.

Runs every format extractor over the original text in priority order, keeps
the first claim on any region of the input, and builds the cleaned message by
excluding the claimed spans in one pass.

Example:
    >>> outcome = parse_tool_calls('Sure!\\n```tool_call\\n{"name": "search_legs", "arguments": {}}\\n```')
    >>> outcome.content
    'Sure!'
    >>> outcome.get_call_names()
    ['search_legs']
"""

import bisect
import itertools
import time
import uuid
from typing import Iterable

from loguru import logger
from pydantic import ValidationError

from toolcall_extractor.config import ExtractionConfig
from toolcall_extractor.extractors import BaseExtractor, ExtractorMatch, default_extractors
from toolcall_extractor.models import ExtractedSpan, ParseOutcome, ToolCall

_PENDING_ID = "pending"


class ToolCallExtractor:
    """Recover tool calls in any supported syntax from model output.

    Args:
        config: Heuristics and id scheme. Defaults to ``ExtractionConfig.default()``.
        extractors: Custom extractor chain. Defaults to the built-in chain in
            priority order.

    Example:
        >>> extractor = ToolCallExtractor()
        >>> extractor.parse("<function=get_weather><parameter=city>Nice</parameter></function>").num_calls
        1
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        extractors: Iterable[BaseExtractor] | None = None,
    ):
        self.config = config or ExtractionConfig.default()
        if extractors is None:
            extractors = default_extractors(self.config)
        self.extractors = list(extractors)

    @property
    def name(self) -> str:
        return "tool-call-extractor"

    def parse(self, text: str) -> ParseOutcome:
        """Extract every tool call from ``text``.

        Never raises: a candidate that fails to parse or validate is skipped,
        and an extractor that crashes is logged and ignored.

        Args:
            text: Raw model output.

        Returns:
            ParseOutcome with the cleaned content and calls ordered by position.
        """
        start_time = time.perf_counter()
        text = text or ""

        accepted: list[tuple[ExtractedSpan, list[ToolCall]]] = []
        claimed: list[ExtractedSpan] = []
        for extractor in self.extractors:
            if extractor.fallback_only and accepted:
                continue
            for span, calls in self._run_extractor(extractor, text):
                if _overlaps_any(claimed, span):
                    logger.debug(
                        "[extract] {} match at {}-{} overlaps an earlier match; dropped",
                        extractor.name, span.start, span.end,
                    )
                    continue
                accepted.append((span, calls))
                bisect.insort(claimed, span, key=_span_start)

        accepted.sort(key=lambda item: item[0].start)
        tool_calls = self._assign_ids(call for _, calls in accepted for call in calls)
        content = remove_spans(text, [span for span, _ in accepted])

        parse_time_ms = (time.perf_counter() - start_time) * 1000
        if tool_calls:
            logger.debug("[extract] {} tool call(s) in {:.3f} ms", len(tool_calls), parse_time_ms)

        return ParseOutcome(
            content=content,
            tool_calls=tool_calls,
            raw_input=text,
            parse_time_ms=parse_time_ms,
        )

    def _run_extractor(self, extractor: BaseExtractor, text: str) -> list[tuple[ExtractedSpan, list[ToolCall]]]:
        """Collect an extractor's validated calls grouped by span."""
        try:
            matches = list(extractor.extract(text))
        except Exception as e:
            logger.opt(exception=e).warning("[extract] {} failed; skipping it for this input", extractor.name)
            return []

        groups = []
        for span, group in itertools.groupby(matches, key=lambda match: match.span):
            calls = [call for call in map(self._validate, group) if call is not None]
            if calls:
                groups.append((span, calls))
        return groups

    def _validate(self, match: ExtractorMatch) -> ToolCall | None:
        try:
            return ToolCall(id=_PENDING_ID, name=match.name, arguments=match.arguments)
        except ValidationError as e:
            logger.debug("[extract] rejected {} call {!r}: {}", match.source, match.name, e.errors()[0]["msg"])
            return None

    def _assign_ids(self, calls: Iterable[ToolCall]) -> list[ToolCall]:
        if self.config.id_strategy == "uuid":
            return [
                call.model_copy(update={"id": f"{self.config.id_prefix}_{uuid.uuid4().hex}"})
                for call in calls
            ]

        millis = int(time.time() * 1000)
        return [
            call.model_copy(update={"id": f"{self.config.id_prefix}_{millis}_{seq}"})
            for seq, call in enumerate(calls)
        ]


def _span_start(span: ExtractedSpan) -> int:
    return span.start


def _overlaps_any(claimed: list[ExtractedSpan], span: ExtractedSpan) -> bool:
    """Check ``span`` against disjoint spans sorted by start."""
    i = bisect.bisect_right(claimed, span.start, key=_span_start)
    if i > 0 and claimed[i - 1].overlaps(span):
        return True
    return i < len(claimed) and claimed[i].overlaps(span)


def remove_spans(text: str, spans: list[ExtractedSpan]) -> str:
    """Return ``text`` without ``spans``, trimmed.

    Where a removal leaves text on both sides, the whitespace around the seam
    shrinks to a single blank line, newline or space, whichever is the
    strongest break present.
    """
    if not spans:
        return text.strip()

    segments = []
    pos = 0
    for span in sorted(spans, key=lambda s: s.start):
        segments.append(text[pos:span.start])
        pos = max(pos, span.end)
    segments.append(text[pos:])

    parts: list[str] = []
    gap = ""
    for segment in segments:
        body = segment.strip()
        if not body:
            gap += segment
            continue
        gap += segment[:len(segment) - len(segment.lstrip())]
        if parts:
            parts.append(_seam(gap))
        parts.append(body)
        gap = segment[len(segment.rstrip()):]
    return "".join(parts)


def _seam(gap: str) -> str:
    newlines = gap.count("\n")
    if newlines >= 2:
        return "\n\n"
    if newlines == 1:
        return "\n"
    return " " if gap else ""


_default_extractor: ToolCallExtractor | None = None


def parse_tool_calls(text: str | None) -> ParseOutcome:
    """Extract tool calls with the default configuration.

    Args:
        text: Raw model output; ``None`` is treated as empty.

    Returns:
        ParseOutcome with ``content`` and ``tool_calls``.
    """
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = ToolCallExtractor()
    return _default_extractor.parse(text or "")

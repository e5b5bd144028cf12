"""Format extractors, one per tool call syntax."""

from toolcall_extractor.config import ExtractionConfig

from .base import BaseExtractor, ExtractorMatch
from .delimited import MessageTokenExtractor, ToolCallDelimiterExtractor, ToolCallsDelimiterExtractor
from .fenced import FencedBlockExtractor
from .inline import BareJsonExtractor, InlineToolCallExtractor
from .tagged import FunctionTagExtractor, ToolCallTagExtractor, parse_xml_function_call, parse_xml_parameters


def default_extractors(config: ExtractionConfig | None = None) -> list[BaseExtractor]:
    """Return the built-in extractors in priority order.

    Wrapped and fenced formats come first; the bare JSON extractor is last and
    only runs when nothing before it matched.
    """
    return [
        FencedBlockExtractor(config),
        ToolCallTagExtractor(config),
        ToolCallsDelimiterExtractor(config),
        ToolCallDelimiterExtractor(config),
        FunctionTagExtractor(config),
        InlineToolCallExtractor(config),
        MessageTokenExtractor(config),
        BareJsonExtractor(config),
    ]


__all__ = [
    "BaseExtractor",
    "ExtractorMatch",
    "FencedBlockExtractor",
    "ToolCallTagExtractor",
    "ToolCallsDelimiterExtractor",
    "ToolCallDelimiterExtractor",
    "FunctionTagExtractor",
    "InlineToolCallExtractor",
    "MessageTokenExtractor",
    "BareJsonExtractor",
    "default_extractors",
    "parse_xml_function_call",
    "parse_xml_parameters",
]

"""Abstract base class for all format extractors."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterator

from toolcall_extractor.config import ExtractionConfig
from toolcall_extractor.models import ExtractedSpan


@dataclass(frozen=True)
class ExtractorMatch:
    """One call recognised by an extractor, with the input span it came from.

    Several matches may share a span when one region encodes several calls
    (e.g. a JSON array inside delimiter tokens).
    """
    span: ExtractedSpan
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    source: str = ""


class BaseExtractor(ABC):
    """Abstract base class that all format extractors must inherit from.

    An extractor scans the original, unmodified text for one syntax and
    yields an :class:`ExtractorMatch` for every call it can parse. It must not
    raise on malformed input; unparseable candidates are simply skipped.

    Example:
        class MyExtractor(BaseExtractor):
            @property
            def name(self) -> str:
                return "my-format"

            def extract(self, text: str) -> Iterator[ExtractorMatch]:
                ...
    """

    #: Only run when no earlier extractor produced a call.
    fallback_only: bool = False

    def __init__(self, config: ExtractionConfig | None = None):
        self.config = config or ExtractionConfig.default()

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this extractor.

        Used in logging and in :attr:`ExtractorMatch.source`.
        """
        pass

    @abstractmethod
    def extract(self, text: str) -> Iterator[ExtractorMatch]:
        """Yield every call this extractor recognises in ``text``.

        Args:
            text: The original model output.

        Yields:
            ExtractorMatch objects in left-to-right order with non-overlapping spans.
        """
        pass

    def _match(self, start: int, end: int, name: str, arguments: dict[str, Any]) -> ExtractorMatch:
        return ExtractorMatch(
            span=ExtractedSpan(start, end),
            name=name,
            arguments=arguments,
            source=self.name,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


def has_call_name(data: Any) -> bool:
    """Check if data is an object with a usable string ``name``."""
    return (
        isinstance(data, dict) and
        isinstance(data.get("name"), str) and
        bool(data["name"].strip())
    )


def call_arguments(data: dict) -> dict[str, Any]:
    """Return the ``arguments`` of a call object as a dictionary."""
    arguments = data.get("arguments") or {}

    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError:
            arguments = {}

    return arguments if isinstance(arguments, dict) else {}


def calls_from_value(value: Any) -> list[tuple[str, dict[str, Any]]]:
    """Collect ``(name, arguments)`` from a call object or a list of them."""
    if isinstance(value, list):
        return [(item["name"], call_arguments(item)) for item in value if has_call_name(item)]
    if has_call_name(value):
        return [(value["name"], call_arguments(value))]
    return []

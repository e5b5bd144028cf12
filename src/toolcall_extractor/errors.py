"""Exception types raised by the extraction helpers.

The top-level :func:`toolcall_extractor.parse_tool_calls` never raises; these
exceptions are only visible to callers using the lower-level helpers directly.
"""


class ToolCallExtractionError(Exception):
    """Base class for all errors raised by this package."""


class NotJsonError(ToolCallExtractionError, ValueError):
    """A candidate substring could not be parsed as JSON, even after repair."""

    def __init__(self, candidate: str, reason: str):
        self.candidate = candidate
        self.reason = reason
        preview = candidate if len(candidate) <= 80 else candidate[:77] + "..."
        super().__init__(f"Not JSON ({reason}): {preview!r}")


class ResponseParseError(ToolCallExtractionError, ValueError):
    """Structured JSON could not be recovered from a model response."""

"""Tool call extraction and sanitization for free-form model output.

Logging is disabled by default; call :func:`enable_logging` (or
``logger.enable("toolcall_extractor")``) to receive diagnostics.
"""

from loguru import logger

from .config import ExtractionConfig
from .errors import NotJsonError, ResponseParseError, ToolCallExtractionError
from .extraction import ToolCallExtractor, parse_tool_calls
from .formatting import format_tool_results_for_ai
from .json_repair import repair_and_parse
from .models import ParseOutcome, ToolCall, ToolResult
from .normalizers import normalize_args, normalize_date_args, normalize_location_args
from .python_literal import parse_python_call, parse_python_dict
from .sanitizer import sanitize_content

logger.disable(__name__)


def enable_logging() -> None:
    """Turn on loguru output for this package."""
    logger.enable(__name__)


__all__ = [
    "ExtractionConfig",
    "NotJsonError",
    "ParseOutcome",
    "ResponseParseError",
    "ToolCall",
    "ToolCallExtractionError",
    "ToolCallExtractor",
    "ToolResult",
    "enable_logging",
    "format_tool_results_for_ai",
    "normalize_args",
    "normalize_date_args",
    "normalize_location_args",
    "parse_python_call",
    "parse_python_dict",
    "parse_tool_calls",
    "repair_and_parse",
    "sanitize_content",
]

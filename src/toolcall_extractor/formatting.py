"""Render tool results as text to send back to the model."""

import json
from typing import Any, Iterable

from toolcall_extractor.models import ToolResult


def format_tool_result(result: ToolResult) -> str:
    if result.error:
        return f"Tool {result.name} error: {result.error}"
    return f"Tool {result.name} result:\n{json.dumps(result.result, indent=2, default=str)}"


def format_tool_results_for_ai(results: Iterable[ToolResult | dict[str, Any]]) -> str:
    """Format dispatcher results as one block of text, blank-line separated.

    Args:
        results: ToolResult objects, or dicts with ``name``, ``result`` and
            optional ``error`` keys.

    Returns:
        ``Tool {name} error: {error}`` or ``Tool {name} result:`` followed by
        the pretty-printed result, for each entry.

    Example:
        >>> print(format_tool_results_for_ai([{"name": "search_legs", "result": []}]))
        Tool search_legs result:
        []
    """
    return "\n\n".join(
        format_tool_result(ToolResult.model_validate(result))
        for result in results
    )

"""Data models for tool calls and parse outcomes.

This module provides Pydantic-validated models for:
- ToolCall: A tool invocation recovered from model output
- ParseOutcome: Cleaned content plus the ordered call list
- ToolResult: Dispatcher output fed back to the model
"""

from .tool_call import ExtractedSpan, ParseOutcome, ToolCall, ToolResult

__all__ = ["ToolCall", "ParseOutcome", "ToolResult", "ExtractedSpan"]

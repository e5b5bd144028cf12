"""Data models for extracted tool calls and parse outcomes.

This module provides Pydantic models for representing tool calls recovered from
free-form model output, together with the result shape handed back by a tool
dispatcher.

Key features:
- Immutable tool calls with JSON-representable arguments
- Flexible argument handling (string JSON, dict or None)
- OpenAI Chat Completions API compatibility
"""

import json
from dataclasses import dataclass
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ToolCall(BaseModel):
    """A single tool invocation recovered from model output.

    Instances are frozen: an extractor builds one the moment a match is
    confirmed and nothing downstream mutates it.

    Attributes:
        id: Identifier unique within one parse invocation (e.g. tc_1718000000000_0).
        name: Name of the tool to invoke.
        arguments: Arguments for the tool as a JSON-compatible dictionary.

    Example:
        >>> call = ToolCall(id="tc_1_0", name="search_legs", arguments={"from": "Nice"})
        >>> call.to_openai_format()["function"]["name"]
        'search_legs'
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "tc_1718000000000_0",
                    "name": "search_legs",
                    "arguments": {"from": "Nice"},
                },
                {
                    "id": "tc_1718000000000_1",
                    "name": "update_user_profile",
                    "arguments": {"full_name": "Jane", "skills": ["navigation"]},
                },
            ]
        },
    )

    id: str = Field(
        ...,
        description="Identifier unique within one parse (e.g. tc_1718000000000_0)",
        pattern=r"^[a-zA-Z0-9_-]+$",
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Name of the tool to invoke",
    )
    arguments: dict[str, Any] = Field(
        default_factory=dict,
        description="Arguments to pass to the tool",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip surrounding whitespace and reject an empty name."""
        v = v.strip()
        if not v:
            raise ValueError("Tool name cannot be empty")
        return v

    @field_validator("arguments", mode="before")
    @classmethod
    def parse_arguments(cls, v: Any) -> dict[str, Any]:
        """Accept arguments given as a JSON string, a dict or None."""
        if v is None:
            return {}

        if isinstance(v, str):
            v = v.strip()
            if not v:
                return {}
            try:
                parsed = json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in arguments: {e}")
            if not isinstance(parsed, dict):
                raise ValueError(f"Arguments must be a JSON object, got {type(parsed).__name__}")
            return parsed

        if isinstance(v, dict):
            return v

        raise ValueError(f"Arguments must be a dict or JSON string, got {type(v).__name__}")

    @model_validator(mode="after")
    def validate_arguments_types(self) -> Self:
        """Validate that argument values are JSON-representable."""
        def check_serializable(obj: Any, path: str = "arguments") -> None:
            if obj is None or isinstance(obj, (bool, int, float, str)):
                return
            if isinstance(obj, dict):
                for k, v in obj.items():
                    if not isinstance(k, str):
                        raise ValueError(f"Argument keys must be strings at {path}")
                    check_serializable(v, f"{path}.{k}")
            elif isinstance(obj, list):
                for i, item in enumerate(obj):
                    check_serializable(item, f"{path}[{i}]")
            else:
                raise ValueError(
                    f"Non-JSON-serializable type {type(obj).__name__} at {path}"
                )

        check_serializable(self.arguments)
        return self

    def to_openai_format(self) -> dict[str, Any]:
        """Convert to OpenAI Chat Completions API tool_calls format."""
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.name,
                "arguments": json.dumps(self.arguments),
            }
        }


class ParseOutcome(BaseModel):
    """Result of extracting tool calls from one piece of model output.

    Attributes:
        content: The input with every extracted call removed, trimmed.
        tool_calls: Extracted calls ordered by position in the input.
        raw_input: Original text that was parsed.
        parse_time_ms: Time taken to parse in milliseconds.
    """

    content: str = Field(default="")
    tool_calls: list[ToolCall] = Field(default_factory=list)
    raw_input: str = Field(default="")
    parse_time_ms: float = Field(default=0.0, ge=0.0)

    @property
    def num_calls(self) -> int:
        """Return the number of tool calls extracted."""
        return len(self.tool_calls)

    @property
    def has_calls(self) -> bool:
        """Return whether any tool calls were found."""
        return len(self.tool_calls) > 0

    def get_call_names(self) -> list[str]:
        """Get list of all tool names called."""
        return [call.name for call in self.tool_calls]

    def to_openai_format(self) -> list[dict[str, Any]]:
        """Convert all tool calls to OpenAI API format."""
        return [call.to_openai_format() for call in self.tool_calls]


class ToolResult(BaseModel):
    """Outcome of executing one tool call, as reported by the dispatcher."""

    name: str
    result: Any = None
    error: str | None = None
    tool_call_id: str | None = None


@dataclass(frozen=True)
class ExtractedSpan:
    """Half-open ``[start, end)`` range of the input claimed by one match."""
    start: int
    end: int

    def overlaps(self, other: "ExtractedSpan") -> bool:
        return self.start < other.end and other.start < self.end

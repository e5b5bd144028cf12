"""Tests for data models."""

import json

import pytest
from pydantic import ValidationError

from toolcall_extractor.models import ExtractedSpan, ParseOutcome, ToolCall, ToolResult


class TestToolCall:
    """Tests for ToolCall model."""

    def test_create(self):
        """Test creating a ToolCall."""
        call = ToolCall(id="tc_1_0", name="get_weather", arguments={"city": "Brest"})
        assert call.name == "get_weather"
        assert call.arguments["city"] == "Brest"

    def test_arguments_default_to_empty(self):
        """Test arguments default to an empty dict."""
        assert ToolCall(id="tc_1_0", name="ping").arguments == {}

    def test_arguments_from_json_string(self):
        """Test arguments given as a JSON string are decoded."""
        call = ToolCall(id="tc_1_0", name="f", arguments='{"a": 1}')
        assert call.arguments == {"a": 1}

    def test_arguments_none(self):
        """Test None arguments become an empty dict."""
        assert ToolCall(id="tc_1_0", name="f", arguments=None).arguments == {}

    def test_arguments_json_array_rejected(self):
        """Test a JSON string that is not an object is rejected."""
        with pytest.raises(ValidationError):
            ToolCall(id="tc_1_0", name="f", arguments="[1, 2]")

    def test_non_serializable_argument_rejected(self):
        """Test argument values must be JSON-representable."""
        with pytest.raises(ValidationError):
            ToolCall(id="tc_1_0", name="f", arguments={"when": object()})

    def test_name_is_stripped(self):
        """Test surrounding whitespace is removed from the name."""
        assert ToolCall(id="tc_1_0", name="  f  ").name == "f"

    def test_argument_keys_kept_verbatim(self):
        """Test argument keys and values are not stripped."""
        call = ToolCall(id="tc_1_0", name="f", arguments={" padded ": "  v  ", "padded": 1})
        assert call.arguments == {" padded ": "  v  ", "padded": 1}

    def test_blank_name_rejected(self):
        """Test an empty name is rejected."""
        with pytest.raises(ValidationError):
            ToolCall(id="tc_1_0", name="   ")

    def test_id_pattern(self):
        """Test ids are restricted to a safe character set."""
        with pytest.raises(ValidationError):
            ToolCall(id="tc 1", name="f")

    def test_frozen(self):
        """Test ToolCall is immutable."""
        call = ToolCall(id="tc_1_0", name="f")
        with pytest.raises(ValidationError):
            call.name = "g"

    def test_to_openai_format(self):
        """Test conversion to the Chat Completions tool_calls shape."""
        call = ToolCall(id="tc_1_0", name="f", arguments={"a": 1})
        openai = call.to_openai_format()
        assert openai["id"] == "tc_1_0"
        assert openai["type"] == "function"
        assert openai["function"]["name"] == "f"
        assert json.loads(openai["function"]["arguments"]) == {"a": 1}


class TestParseOutcome:
    """Tests for ParseOutcome model."""

    def test_with_calls(self):
        """Test helpers on an outcome with calls."""
        outcome = ParseOutcome(
            content="Sure!",
            tool_calls=[ToolCall(id="tc_1_0", name="a"), ToolCall(id="tc_1_1", name="b")],
            raw_input="...",
            parse_time_ms=0.2,
        )
        assert outcome.has_calls
        assert outcome.num_calls == 2
        assert outcome.get_call_names() == ["a", "b"]
        assert [c["id"] for c in outcome.to_openai_format()] == ["tc_1_0", "tc_1_1"]

    def test_empty(self):
        """Test an outcome without calls."""
        outcome = ParseOutcome(content="hello")
        assert not outcome.has_calls
        assert outcome.num_calls == 0

    def test_negative_time_rejected(self):
        """Test parse time cannot be negative."""
        with pytest.raises(ValidationError):
            ParseOutcome(parse_time_ms=-1)


class TestToolResult:
    """Tests for ToolResult model."""

    def test_optional_fields(self):
        """Test error and tool_call_id are optional."""
        result = ToolResult(name="search_legs", result=[1, 2])
        assert result.error is None
        assert result.tool_call_id is None


class TestExtractedSpan:
    """Tests for ExtractedSpan."""

    @pytest.mark.parametrize("a,b,expected", [
        ((0, 5), (5, 10), False),
        ((0, 5), (4, 10), True),
        ((2, 3), (0, 10), True),
        ((6, 8), (0, 5), False),
    ])
    def test_overlaps(self, a, b, expected):
        """Test half-open overlap checks."""
        assert ExtractedSpan(*a).overlaps(ExtractedSpan(*b)) is expected
        assert ExtractedSpan(*b).overlaps(ExtractedSpan(*a)) is expected

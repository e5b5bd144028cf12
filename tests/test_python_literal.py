"""Tests for the Python-style call and dict parser."""

import pytest

from toolcall_extractor.python_literal import (
    PythonCall,
    coerce_literal,
    parse_python_call,
    parse_python_dict,
    parse_python_dict_manual,
)


class TestParsePythonCall:
    """Tests for parse_python_call."""

    def test_keyword_arguments(self):
        """Test keyword arguments with Python literals."""
        call = parse_python_call('search(a=1, b="x", c=None)')
        assert call == PythonCall("search", {"a": 1, "b": "x", "c": None})

    def test_no_arguments(self):
        """Test an empty argument list."""
        assert parse_python_call("get_profile()") == PythonCall("get_profile", {})

    def test_module_prefix_and_print_wrapper(self):
        """Test print(default_api.name(...)) is unwrapped."""
        call = parse_python_call('print(default_api.get_weather(city="Brest"))')
        assert call == PythonCall("get_weather", {"city": "Brest"})

    def test_nested_dict_argument(self):
        """Test a dict literal argument with unquoted keys and booleans."""
        call = parse_python_call("search_legs(bbox={'min_lng': 1.5, 'max_lng': 2}, flexible=True)")
        assert call.name == "search_legs"
        assert call.arguments == {"bbox": {"min_lng": 1.5, "max_lng": 2}, "flexible": True}

    def test_parentheses_inside_strings(self):
        """Test parentheses inside string arguments do not end the call."""
        call = parse_python_call('note(text="see (below)")')
        assert call.arguments == {"text": "see (below)"}

    def test_literals_inside_strings_untouched(self):
        """Test None/True inside quoted values are not rewritten."""
        call = parse_python_call('say(text="None of it is True")')
        assert call.arguments == {"text": "None of it is True"}

    @pytest.mark.parametrize("text", [
        "Norway(text)",
        "norway(the fjords)",
        "Lofoten(islands)",
    ])
    def test_place_names_rejected(self, text):
        """Test denylisted place names are rejected."""
        assert parse_python_call(text) is None

    def test_capitalised_word_rejected(self):
        """Test a capitalised single word is treated as a proper noun."""
        assert parse_python_call("Corsica(in summer)") is None

    @pytest.mark.parametrize("text", ["getWeather(city='x')", "Get_weather(city='x')"])
    def test_camel_and_snake_case_accepted(self, text):
        """Test camelCase and names with underscores pass the noun check."""
        assert parse_python_call(text) is not None

    def test_custom_denylist(self):
        """Test a caller-supplied denylist."""
        assert parse_python_call("corsica(x=1)", denylist={"corsica"}) is None
        assert parse_python_call("norway(x=1)", denylist=set()) is not None

    @pytest.mark.parametrize("text", [
        "I think search(a=1) works",
        "search(a=1) and more",
        "search(a=1",
        "",
        "not a call",
    ])
    def test_must_span_whole_input(self, text):
        """Test incidental or truncated calls are not matched."""
        assert parse_python_call(text) is None


class TestParsePythonDict:
    """Tests for parse_python_dict."""

    def test_python_dict(self):
        """Test a dict literal with single quotes and Python constants."""
        assert parse_python_dict("{'a': None, 'b': True, 'c': 'x'}") == {"a": None, "b": True, "c": "x"}

    def test_bare_keys(self):
        """Test unquoted keys are quoted."""
        assert parse_python_dict("{name: 'Jane', level: 3}") == {"name": "Jane", "level": 3}

    def test_json_passthrough(self):
        """Test JSON input is accepted as-is."""
        assert parse_python_dict('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_empty(self):
        """Test empty content gives an empty dict."""
        assert parse_python_dict("{}") == {}
        assert parse_python_dict("  ") == {}

    def test_falls_back_to_pairs(self):
        """Test the pair parser recovers from unconvertible values."""
        result = parse_python_dict("a=1, when=datetime(2024), tags=[x, y]")
        assert result["a"] == 1
        assert result["when"] == "datetime(2024)"
        assert result["tags"] == ["x", "y"]


class TestManualPairs:
    """Tests for the pair-by-pair fallback."""

    def test_skips_malformed_pairs(self):
        """Test a pair without a key is skipped, not fatal."""
        assert parse_python_dict_manual("a=1, ???, b='two'") == {"a": 1, "b": "two"}

    @pytest.mark.parametrize("value,expected", [
        ("'quoted'", "quoted"),
        ('"quoted"', "quoted"),
        ("42", 42),
        ("-7", -7),
        ("3.5", 3.5),
        ("True", True),
        ("false", False),
        ("None", None),
        ("null", None),
        ("{'k': 1}", {"k": 1}),
        ("['a', \"b\", c]", ["a", "b", "c"]),
        ("free text", "free text"),
    ])
    def test_coerce_literal(self, value, expected):
        """Test literal coercion priority."""
        assert coerce_literal(value) == expected

"""Tests for the string-aware scanning primitives."""

from toolcall_extractor.scanning import (
    JSON_QUOTES,
    find_balanced,
    iter_delimited,
    iter_fenced_blocks,
    outer_braces,
    split_top_level,
    unclosed,
)


class TestFindBalanced:
    """Tests for find_balanced."""

    def test_simple_parens(self):
        """Test matching a simple parenthesis pair."""
        assert find_balanced("f(a)", 1) == 4

    def test_ignores_brackets_in_strings(self):
        """Test closers inside quoted strings are skipped."""
        text = 'f(a, "b)", (c))'
        assert find_balanced(text, 1) == len(text)

    def test_escaped_quote(self):
        """Test an escaped quote does not end the string."""
        text = r'{"a": "x\"}"}'
        assert find_balanced(text, 0, JSON_QUOTES) == len(text)

    def test_unbalanced_returns_none(self):
        """Test truncated structures are reported as unbalanced."""
        assert find_balanced('{"a": [1, 2', 0) is None

    def test_not_an_opener(self):
        """Test a start position that is not an opener."""
        assert find_balanced("abc", 0) is None
        assert find_balanced("abc", 10) is None

    def test_single_quotes_only_in_python_mode(self):
        """Test apostrophes are plain characters in JSON mode."""
        text = "{\"note\": \"it's\"}"
        assert find_balanced(text, 0, JSON_QUOTES) == len(text)

    def test_long_unclosed_run_is_linear(self):
        """Test a long run of openers completes without matching."""
        assert find_balanced("(" * 50000, 0) is None


class TestSplitTopLevel:
    """Tests for split_top_level."""

    def test_nested_and_quoted_commas(self):
        """Test commas inside brackets and strings are not split points."""
        pieces = split_top_level('a=1, b=[1, 2], c="x,y", d={"k": 1, "j": 2}')
        assert pieces == ['a=1', 'b=[1, 2]', 'c="x,y"', 'd={"k": 1, "j": 2}']

    def test_drops_empty_pieces(self):
        """Test empty pieces are dropped."""
        assert split_top_level("a, , b,") == ["a", "b"]

    def test_empty_input(self):
        """Test splitting an empty string."""
        assert split_top_level("") == []


class TestUnclosed:
    """Tests for unclosed."""

    def test_reports_stack_and_quote(self):
        """Test open brackets and an open string are reported."""
        assert unclosed('{"a": [1, "x') == (["{", "["], '"')

    def test_balanced(self):
        """Test a balanced document has nothing open."""
        assert unclosed('{"a": "}"}') == ([], None)


class TestOuterBraces:
    """Tests for outer_braces."""

    def test_first_to_last(self):
        """Test the range spans the first opener to the last closer."""
        assert outer_braces("xx {a} yy {b} zz") == (3, 13)

    def test_missing(self):
        """Test None when there is no closing brace after the opener."""
        assert outer_braces("} {") is None
        assert outer_braces("no braces") is None

    def test_brackets(self):
        """Test a custom opener/closer pair."""
        assert outer_braces("a [1] b", "[", "]") == (2, 5)


class TestIterDelimited:
    """Tests for iter_delimited."""

    def test_multiple_regions(self):
        """Test each start marker pairs with the next end marker."""
        text = "<a>1</a> and <a>2</a>"
        regions = list(iter_delimited(text, "<a>", "</a>"))
        assert [r.inner for r in regions] == ["1", "2"]
        assert text[regions[1].start:regions[1].end] == "<a>2</a>"

    def test_case_insensitive(self):
        """Test case-insensitive marker matching."""
        regions = list(iter_delimited("<TOOL_CALL>x</Tool_Call>", "<tool_call>", "</tool_call>", ignore_case=True))
        assert len(regions) == 1

    def test_unclosed_region_is_skipped(self):
        """Test a start marker without an end marker yields nothing."""
        assert list(iter_delimited("<|a|> never closed", "<|a|>", "<|b|>")) == []


class TestIterFencedBlocks:
    """Tests for iter_fenced_blocks."""

    def test_filters_by_label(self):
        """Test only fences with a wanted label are reported."""
        text = '```json\n{}\n```\n```python\nx = 1\n```'
        blocks = list(iter_fenced_blocks(text, ("json",)))
        assert len(blocks) == 1
        assert blocks[0].label == "json"
        assert blocks[0].body == "{}\n"
        assert text[blocks[0].start:blocks[0].end] == '```json\n{}\n```'

    def test_prefers_longest_label(self):
        """Test tool_calls is not reported as tool_call."""
        blocks = list(iter_fenced_blocks("```tool_calls\n[]\n```", ("tool_call", "tool_calls")))
        assert blocks[0].label == "tool_calls"
        assert blocks[0].body == "[]\n"

    def test_unclosed_fence(self):
        """Test an unclosed fence is not reported."""
        assert list(iter_fenced_blocks("```json\n{", ("json",))) == []

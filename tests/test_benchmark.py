"""Tests for the benchmark runner and accuracy metrics."""

import pytest

from toolcall_extractor import ToolCall, ToolCallExtractor
from toolcall_extractor.benchmark import (
    WORKLOADS,
    BenchmarkConfig,
    BenchmarkRunner,
    calculate_accuracy,
)


@pytest.fixture
def runner():
    """Create a runner with a small iteration count."""
    return BenchmarkRunner(BenchmarkConfig(iterations=3, warmup_iterations=0))


class TestBenchmarkRunner:
    """Tests for BenchmarkRunner."""

    def test_run(self, runner, extractor):
        """Test timing and call counting."""
        samples = ['<function=a></function>', "no calls here"]
        result = runner.run(extractor, samples)

        assert result.name == "tool-call-extractor"
        assert result.timing.iterations == 3
        assert result.total_calls_found == 3
        assert result.hit_rate == pytest.approx(50.0)
        assert result.timing.min_ms <= result.timing.median_ms <= result.timing.max_ms
        assert result.timing.p95_ms <= result.timing.max_ms
        assert result.errors == []

    def test_records_exceptions(self, runner):
        """Test exceptions from parse are collected, not raised."""
        class Broken(ToolCallExtractor):
            def parse(self, text):
                raise RuntimeError("broken")

        result = runner.run(Broken(), ["x"], "broken")
        assert result.errors == ["RuntimeError: broken"]
        assert result.total_calls_found == 0

    def test_empty_samples_rejected(self, runner, extractor):
        """Test running with no samples is an error."""
        with pytest.raises(ValueError):
            runner.run(extractor, [])

    def test_categories_and_table(self, runner, extractor):
        """Test per-workload runs and the summary table."""
        results = runner.run_categories(extractor, WORKLOADS)
        assert set(results) == set(WORKLOADS)
        assert results["Prose only"].total_calls_found == 0
        assert all(not result.errors for result in results.values())

        table = runner.format_results(results)
        assert "BENCHMARK RESULTS" in table
        assert "Adversarial" in table

    def test_quick_preset(self):
        """Test the quick preset."""
        assert BenchmarkConfig.quick().iterations == 10


class TestCalculateAccuracy:
    """Tests for calculate_accuracy."""

    def test_exact_match_ignores_ids(self):
        """Test calls compare by name and arguments only."""
        parsed = [ToolCall(id="tc_1_0", name="a", arguments={"x": 1})]
        expected = [{"name": "a", "arguments": {"x": 1}}]
        metrics = calculate_accuracy(parsed, expected)
        assert metrics.exact_match
        assert metrics.f1_score == 1.0

    def test_partial(self):
        """Test precision and recall with one miss and one extra."""
        parsed = [ToolCall(id="tc_1_0", name="a"), ToolCall(id="tc_1_1", name="extra")]
        expected = [{"name": "a"}, {"name": "b", "arguments": {}}]
        metrics = calculate_accuracy(parsed, expected)
        assert metrics.true_positives == 1
        assert metrics.false_positives == 1
        assert metrics.false_negatives == 1
        assert metrics.precision == 0.5
        assert metrics.recall == 0.5
        assert not metrics.exact_match

    def test_nested_arguments(self):
        """Test nested argument values compare structurally."""
        parsed = [ToolCall(id="tc_1_0", name="a", arguments={"bbox": {"min": [1, 2]}})]
        expected = [ToolCall(id="other", name="a", arguments={"bbox": {"min": [1, 2]}})]
        assert calculate_accuracy(parsed, expected).exact_match

    def test_both_empty(self):
        """Test no calls expected and none found."""
        metrics = calculate_accuracy([], [])
        assert metrics.exact_match
        assert metrics.precision == 0.0

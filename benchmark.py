#!/usr/bin/env python
"""
Extraction Benchmark Suite

Measures tool call extraction latency across the supported syntaxes,
including adversarial inputs (deep nesting, unterminated strings, long
parenthesis runs), and reports accuracy on the labelled samples.

Usage:
    python benchmark.py
    python benchmark.py --iterations 1000
    python benchmark.py --category --verbose
"""

import argparse
import itertools
import sys

from loguru import logger

from toolcall_extractor import ToolCallExtractor, enable_logging
from toolcall_extractor.benchmark import (
    WORKLOADS,
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkRunner,
    calculate_accuracy,
)

LABELLED_SAMPLES = [
    (
        'Sure!\n```tool_call\n{"name": "search_legs", "arguments": {"from": "Nice"}}\n```',
        [{"name": "search_legs", "arguments": {"from": "Nice"}}],
    ),
    (
        '<|tool_call_start|>[search_legs(departure="Nice"), get_weather(city="Nice")]<|tool_call_end|>',
        [
            {"name": "search_legs", "arguments": {"departure": "Nice"}},
            {"name": "get_weather", "arguments": {"city": "Nice"}},
        ],
    ),
    (
        '```json\n{"full_name": "Jane", "skills": ["nav"]}\n```',
        [{"name": "update_user_profile", "arguments": {"full_name": "Jane", "skills": ["nav"]}}],
    ),
    ("Norway(the country) is lovely in June.", []),
    ('```tool_call\n{"name": "f", "arguments": {"x": 1,\n```', [{"name": "f", "arguments": {"x": 1}}]),
]


def generate_test_data(count: int = 100) -> list[str]:
    """Generate a mixed set of test data."""
    all_data = list(itertools.chain.from_iterable(WORKLOADS.values()))
    return list(itertools.islice(itertools.cycle(all_data), count))


def print_result(result: BenchmarkResult) -> None:
    """Print benchmark results."""
    print(f"\n{'='*60}")
    print(f"Benchmark: {result.name}")
    print(f"{'='*60}")
    print(f"  Iterations:        {result.timing.iterations}")
    print(f"  Total time:        {result.timing.total_ms:.2f} ms")
    print(f"  Parses/second:     {result.timing.parses_per_second:,.0f}")
    print(f"  Calls found in:    {result.hit_rate:.1f}% of inputs")
    print()
    print("  Latency Statistics:")
    print(f"    Average:         {result.timing.mean_ms:.4f} ms")
    print(f"    Median (p50):    {result.timing.median_ms:.4f} ms")
    print(f"    Min:             {result.timing.min_ms:.4f} ms")
    print(f"    Max:             {result.timing.max_ms:.4f} ms")
    print(f"    p95:             {result.timing.p95_ms:.4f} ms")
    print(f"    p99:             {result.timing.p99_ms:.4f} ms")
    for error in result.errors:
        print(f"  ERROR: {error}")


def print_accuracy(extractor: ToolCallExtractor) -> None:
    """Print accuracy on the labelled samples."""
    print(f"\n{'='*60}")
    print("Accuracy")
    print(f"{'='*60}")
    exact = 0
    for text, expected in LABELLED_SAMPLES:
        metrics = calculate_accuracy(extractor.parse(text).tool_calls, expected)
        exact += metrics.exact_match
        status = "ok" if metrics.exact_match else "MISMATCH"
        print(f"  [{status:<8}] P={metrics.precision:.2f} R={metrics.recall:.2f} {text[:50]!r}")
    print(f"  Exact matches: {exact}/{len(LABELLED_SAMPLES)}")


def main():
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Benchmark the tool call extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    arg_parser.add_argument(
        "--iterations", "-i",
        type=int,
        default=100,
        help="Number of iterations per test (default: 100)"
    )
    arg_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed output"
    )
    arg_parser.add_argument(
        "--category", "-c",
        action="store_true",
        help="Run per-category benchmarks instead of mixed"
    )
    arg_parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for extractor diagnostics (default: WARNING)"
    )

    args = arg_parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level="INFO" if args.verbose else args.log_level)
    enable_logging()

    print("=" * 60)
    print("Extraction Benchmark Suite")
    print("=" * 60)
    print(f"Iterations: {args.iterations}")

    extractor = ToolCallExtractor()
    runner = BenchmarkRunner(BenchmarkConfig(iterations=args.iterations))
    print(f"Extractor: {extractor.name} ({len(extractor.extractors)} formats)")

    if args.category:
        print("\nRunning category benchmarks...")
        results = runner.run_categories(extractor, WORKLOADS)

        if args.verbose:
            for result in results.values():
                print_result(result)

        print(runner.format_results(results))
    else:
        print("\nGenerating test data...")
        test_data = generate_test_data(100)
        print(f"Test samples: {len(test_data)}")

        print("\nRunning benchmark...")
        print_result(runner.run(extractor, test_data, "Mixed Workload"))

    print_accuracy(extractor)
    print("\nBenchmark complete!")


if __name__ == "__main__":
    main()

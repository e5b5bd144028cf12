"""Benchmark runner for extractor latency."""

import statistics
import time
from dataclasses import dataclass, field

from loguru import logger

from toolcall_extractor.extraction import ToolCallExtractor


@dataclass
class BenchmarkConfig:
    """Configuration for benchmark runs."""
    iterations: int = 100
    warmup_iterations: int = 10

    @classmethod
    def quick(cls) -> "BenchmarkConfig":
        return cls(iterations=10, warmup_iterations=1)


@dataclass
class TimingResult:
    """Timing statistics from a benchmark."""
    total_ms: float
    mean_ms: float
    median_ms: float
    min_ms: float
    max_ms: float
    p95_ms: float
    p99_ms: float
    std_dev_ms: float
    iterations: int
    parses_per_second: float


@dataclass
class BenchmarkResult:
    """Complete result from a benchmark run."""
    name: str
    timing: TimingResult
    hit_rate: float
    total_calls_found: int
    errors: list[str] = field(default_factory=list)


def _percentile(times_sorted: list[float], fraction: float) -> float:
    idx = int(len(times_sorted) * fraction)
    return times_sorted[min(idx, len(times_sorted) - 1)]


class BenchmarkRunner:
    """Times :meth:`ToolCallExtractor.parse` over a set of samples."""

    def __init__(self, config: BenchmarkConfig | None = None):
        self.config = config or BenchmarkConfig()

    def run(
        self,
        extractor: ToolCallExtractor,
        samples: list[str],
        name: str | None = None,
    ) -> BenchmarkResult:
        """Run a benchmark.

        Args:
            extractor: Extractor to benchmark.
            samples: Model outputs to parse.
            name: Label for the result; defaults to the extractor name.

        Returns:
            BenchmarkResult with timing statistics, the share of samples in
            which calls were found, and any exceptions raised by ``parse``.
        """
        if not samples:
            raise ValueError("at least one sample is required")

        for _ in range(self.config.warmup_iterations):
            for text in samples[:min(5, len(samples))]:
                extractor.parse(text)

        times: list[float] = []
        hits = 0
        total_calls = 0
        errors: list[str] = []

        for _ in range(self.config.iterations):
            for text in samples:
                start = time.perf_counter()
                try:
                    outcome = extractor.parse(text)
                except Exception as e:
                    logger.opt(exception=e).error("[benchmark] parse raised on {!r}", text[:80])
                    errors.append(f"{type(e).__name__}: {e}")
                    outcome = None
                times.append((time.perf_counter() - start) * 1000)

                if outcome is None:
                    continue
                if outcome.has_calls:
                    hits += 1
                total_calls += outcome.num_calls

        times_sorted = sorted(times)
        total_parses = len(times)
        total_time = sum(times)

        timing = TimingResult(
            total_ms=total_time,
            mean_ms=statistics.mean(times),
            median_ms=statistics.median(times),
            min_ms=times_sorted[0],
            max_ms=times_sorted[-1],
            p95_ms=_percentile(times_sorted, 0.95),
            p99_ms=_percentile(times_sorted, 0.99),
            std_dev_ms=statistics.stdev(times) if len(times) > 1 else 0.0,
            iterations=self.config.iterations,
            parses_per_second=(total_parses / total_time) * 1000 if total_time > 0 else 0,
        )

        return BenchmarkResult(
            name=name or extractor.name,
            timing=timing,
            hit_rate=(hits / total_parses) * 100 if total_parses > 0 else 0,
            total_calls_found=total_calls,
            errors=sorted(set(errors))[:10],
        )

    def run_categories(
        self,
        extractor: ToolCallExtractor,
        categories: dict[str, list[str]],
    ) -> dict[str, BenchmarkResult]:
        """Run one benchmark per named workload."""
        results = {}
        for name, samples in categories.items():
            logger.info("[benchmark] running {} ({} samples)", name, len(samples))
            results[name] = self.run(extractor, samples, name)
        return results

    def format_results(self, results: dict[str, BenchmarkResult]) -> str:
        """Format benchmark results as a table."""
        lines = []
        lines.append("=" * 80)
        lines.append("BENCHMARK RESULTS")
        lines.append("=" * 80)
        lines.append(
            f"{'Workload':<25} {'Avg (ms)':<12} {'p95 (ms)':<12} "
            f"{'Parses/s':<15} {'Hits':<10}"
        )
        lines.append("-" * 80)

        for name, result in results.items():
            lines.append(
                f"{name:<25} {result.timing.mean_ms:<12.4f} "
                f"{result.timing.p95_ms:<12.4f} "
                f"{result.timing.parses_per_second:<15,.0f} "
                f"{result.hit_rate:<10.1f}%"
            )

        lines.append("=" * 80)
        return "\n".join(lines)

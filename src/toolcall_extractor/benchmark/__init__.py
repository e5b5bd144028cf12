"""Benchmark suite for extraction latency and accuracy."""

from .runner import BenchmarkRunner, BenchmarkConfig, BenchmarkResult, TimingResult
from .metrics import AccuracyMetrics, calculate_accuracy
from .workloads import WORKLOADS

__all__ = [
    "BenchmarkRunner",
    "BenchmarkConfig",
    "BenchmarkResult",
    "TimingResult",
    "AccuracyMetrics",
    "calculate_accuracy",
    "WORKLOADS",
]

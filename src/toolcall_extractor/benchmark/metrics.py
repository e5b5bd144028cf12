"""Accuracy metrics for extraction evaluation."""

import json
from dataclasses import dataclass
from typing import Any, Iterable

from toolcall_extractor.models import ToolCall


@dataclass
class AccuracyMetrics:
    """Accuracy metrics comparing extracted vs expected calls."""
    precision: float
    recall: float
    f1_score: float
    exact_match: bool
    true_positives: int
    false_positives: int
    false_negatives: int


def _call_key(call: ToolCall | dict[str, Any]) -> str:
    if isinstance(call, ToolCall):
        name, arguments = call.name, call.arguments
    else:
        name, arguments = call["name"], call.get("arguments") or {}
    return f"{name}:{json.dumps(arguments, sort_keys=True, default=str)}"


def calculate_accuracy(
    parsed: Iterable[ToolCall],
    expected: Iterable[ToolCall | dict[str, Any]],
) -> AccuracyMetrics:
    """Calculate accuracy metrics.

    Calls are compared by name and arguments; ids are ignored.

    Args:
        parsed: Tool calls returned by the extractor.
        expected: Ground truth, as ToolCall objects or ``{"name", "arguments"}`` dicts.

    Returns:
        AccuracyMetrics with precision, recall, F1.
    """
    parsed_keys = {_call_key(call) for call in parsed}
    expected_keys = {_call_key(call) for call in expected}

    true_positives = len(parsed_keys & expected_keys)
    false_positives = len(parsed_keys - expected_keys)
    false_negatives = len(expected_keys - parsed_keys)

    precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) > 0 else 0.0
    recall = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) > 0 else 0.0
    f1 = 2 * precision * recall / (precision + recall) if (precision + recall) > 0 else 0.0

    return AccuracyMetrics(
        precision=precision,
        recall=recall,
        f1_score=f1,
        exact_match=parsed_keys == expected_keys,
        true_positives=true_positives,
        false_positives=false_positives,
        false_negatives=false_negatives,
    )

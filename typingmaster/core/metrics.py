from __future__ import annotations

import math
from dataclasses import dataclass

CHARS_PER_WORD = 5


@dataclass(frozen=True)
class Metrics:
    """Final score of a finished typing test."""

    speed: int
    accuracy: int
    error_count: int


ZERO_METRICS = Metrics(speed=0, accuracy=0, error_count=0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    if value < 0:
        return -round_half_up(-value)
    # value + 0.5 can round up in floating point (0.49999999999999994 -> 1.0)
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def compute(reference: str, typed: str, elapsed_millis: float) -> Metrics:
    """Score typed text against the reference.

    Speed is words per minute where a word is five correct characters.
    Accuracy is the share of compared characters that match. Only the prefix
    that both strings cover is compared, so input running past the reference
    does not count. A non-positive duration yields all-zero metrics.
    """
    elapsed_seconds = elapsed_millis / 1000.0
    if elapsed_seconds <= 0:
        return ZERO_METRICS

    compared = min(len(typed), len(reference))
    correct = sum(1 for i in range(compared) if typed[i] == reference[i])
    errors = compared - correct

    speed = round_half_up((correct / CHARS_PER_WORD) / (elapsed_seconds / 60.0))
    accuracy = round_half_up(correct / compared * 100.0) if compared else 100
    return Metrics(speed=speed, accuracy=accuracy, error_count=errors)


def format_elapsed(seconds: int) -> str:
    """Format whole seconds as ``mm:ss``; minutes keep growing past 59."""
    seconds = max(0, int(seconds))
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes:02d}:{remaining:02d}"

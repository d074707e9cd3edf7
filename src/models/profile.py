"""Timing record produced by the rule profiler."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def median(values: list[float]) -> float:
    """Return the median of ``values``.

    An even number of samples yields the mean of the two middle values.
    """
    if not values:
        raise ValueError("median() requires at least one value")
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return float(ordered[middle])
    return (ordered[middle - 1] + ordered[middle]) / 2


@dataclass
class ProfileSample:
    """Per-rule timings over a sentence corpus.

    ``match_count`` accumulates over every run, not only one.
    """

    rule_id: str
    per_run_millis: list[float] = field(default_factory=list)
    match_count: int = 0
    sentence_count: int = 0

    @property
    def median_millis(self) -> float:
        return median(self.per_run_millis)

    @property
    def sentences_per_second(self) -> float:
        millis = self.median_millis
        if millis <= 0:
            return math.inf
        return self.sentence_count / (millis / 1000.0)

"""Simple rule profiler.

Runs every active rule over a tokenized corpus a fixed number of times to see
which rules take the most time. Results are returned as
:class:`~src.models.ProfileSample` records; formatting lives in
:mod:`.report_utils`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from src.models import ProfileSample

from .engine_config import PROFILE_RUNS
from .protocols import AnalysisEngine, Rule

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], float]


def profile_rules_on_text(
    text: str,
    engine: AnalysisEngine,
    *,
    runs: int = PROFILE_RUNS,
    clock: Clock = time.perf_counter,
) -> list[ProfileSample]:
    """Time each active rule of ``engine`` over the sentences of ``text``.

    Every run analyzes each sentence and matches it against the rule; the
    elapsed wall clock per run is recorded in milliseconds. ``match_count``
    adds up the matches of all runs.
    """
    if runs <= 0:
        raise ValueError("runs must be at least 1")

    rules = list(engine.active_rules())
    sentences = engine.sentence_tokenize(text)
    LOGGER.info("Profiling %d rule(s) over %d sentence(s)", len(rules), len(sentences))

    samples: list[ProfileSample] = []
    for rule in rules:
        sample = ProfileSample(rule_id=rule.id, sentence_count=len(sentences))
        for _ in range(runs):
            start = clock()
            for sentence in sentences:
                sample.match_count += len(rule.match(engine.analyze(sentence)))
            sample.per_run_millis.append((clock() - start) * 1000.0)
        LOGGER.debug(
            "Profiled %s: median %.3f ms, %d match(es)",
            rule.id,
            sample.median_millis,
            sample.match_count,
        )
        samples.append(sample)
    return samples


def profile_rules_on_line(text: str, engine: AnalysisEngine, rule: Rule) -> int:
    """Count the matches ``rule`` reports over the sentences of ``text``."""
    count = 0
    for sentence in engine.sentence_tokenize(text):
        count += len(rule.match(engine.analyze(sentence)))
    return count

"""Check and correct texts and bilingual streams.

These functions return structured results only. Turning them into
human-readable output is left to :mod:`.report_utils`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from src.models import RuleMatch, StreamingPosition

from .aggregator import check_bitext_pair
from .correction import apply_corrections
from .position import adjust_all_to_stream, shift_lines
from .profiler import Clock
from .protocols import AnalysisEngine, BitextReader, BitextRule, DocumentChecker

LOGGER = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Matches found by one check call plus timing information."""

    matches: list[RuleMatch]
    sentence_count: int
    elapsed_ms: float

    @property
    def match_count(self) -> int:
        return len(self.matches)


def analyze_text(text: str, engine: AnalysisEngine) -> list[Any]:
    """Return the analyzed form of every sentence in ``text``."""
    return [engine.analyze(sentence) for sentence in engine.sentence_tokenize(text)]


def check_text(
    text: str,
    engine: DocumentChecker,
    *,
    line_offset: int = 0,
    clock: Clock = time.perf_counter,
) -> CheckResult:
    """Check ``text`` and add ``line_offset`` to the line of every match."""
    start = clock()
    matches = shift_lines(engine.check(text), line_offset)
    sentence_count = len(engine.sentence_tokenize(text))
    elapsed_ms = (clock() - start) * 1000.0
    LOGGER.info(
        "Checked %d sentence(s): %d match(es) in %.0f ms",
        sentence_count,
        len(matches),
        elapsed_ms,
    )
    return CheckResult(matches=matches, sentence_count=sentence_count, elapsed_ms=elapsed_ms)


def check_bitext(
    source: str,
    target: str,
    source_engine: AnalysisEngine,
    target_engine: AnalysisEngine,
    bitext_rules: Sequence[BitextRule],
) -> list[RuleMatch]:
    """Check a single aligned pair.

    Positions are relative to ``target`` and always start at the first line and
    column, however many pairs were checked before. Use
    :func:`check_bitext_stream` to get positions within a whole bitext.
    """
    matches = check_bitext_pair(source, target, source_engine, target_engine, bitext_rules)
    return adjust_all_to_stream(matches, StreamingPosition())


def check_bitext_stream(
    reader: BitextReader,
    source_engine: AnalysisEngine,
    target_engine: AnalysisEngine,
    bitext_rules: Sequence[BitextRule],
    *,
    clock: Clock = time.perf_counter,
) -> CheckResult:
    """Check every pair from ``reader`` with document-global positions."""
    start = clock()
    matches: list[RuleMatch] = []
    sentence_count = 0
    for pair in reader:
        pair_matches = check_bitext_pair(
            pair.source, pair.target, source_engine, target_engine, bitext_rules
        )
        if pair_matches:
            matches.extend(adjust_all_to_stream(pair_matches, reader.position))
        sentence_count += 1
    elapsed_ms = (clock() - start) * 1000.0
    LOGGER.info(
        "Checked %d aligned pair(s): %d match(es) in %.0f ms",
        sentence_count,
        len(matches),
        elapsed_ms,
    )
    return CheckResult(matches=matches, sentence_count=sentence_count, elapsed_ms=elapsed_ms)


def correct_text(text: str, engine: DocumentChecker) -> str:
    """Check ``text`` and apply the first suggestion of every match.

    Matches are applied in the order the engine reports them, which for a
    document check is ascending position order.
    """
    matches = engine.check(text)
    if not matches:
        return text
    return apply_corrections(text, matches)


def correct_bitext(
    reader: BitextReader,
    source_engine: AnalysisEngine,
    target_engine: AnalysisEngine,
    bitext_rules: Sequence[BitextRule],
) -> Iterator[str]:
    """Yield the corrected target of each pair read from ``reader``.

    Offsets stay relative to the target sentence; only lines and columns are
    moved to the reader's position.
    """
    for pair in reader:
        pair_matches = check_bitext_pair(
            pair.source, pair.target, source_engine, target_engine, bitext_rules
        )
        if not pair_matches:
            yield pair.target
            continue
        position = reader.position
        local = StreamingPosition(
            sentence_offset=0,
            column_count=position.target_column_count,
            line_count=position.line_count,
            current_line=position.current_line,
            target_column_count=position.target_column_count,
        )
        yield apply_corrections(pair.target, adjust_all_to_stream(pair_matches, local))

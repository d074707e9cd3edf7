"""Merge monolingual and bilingual matches for one aligned sentence pair."""

from __future__ import annotations

import logging
from typing import Sequence

from src.models import RuleMatch

from .protocols import AnalysisEngine, AnalyzedSentence, BitextRule

LOGGER = logging.getLogger(__name__)


def aggregate_pair_matches(
    source: AnalyzedSentence,
    target: AnalyzedSentence,
    target_engine: AnalysisEngine,
    bitext_rules: Sequence[BitextRule],
) -> list[RuleMatch]:
    """Return target-language matches followed by bitext-rule matches.

    Monolingual matches keep the engine's order; bitext matches follow in
    rule-list order. Nothing is sorted or de-duplicated, so callers needing
    positional order must sort the result themselves.
    """
    matches = list(target_engine.match_all(target, target_engine.active_rules()))
    for rule in bitext_rules:
        rule_matches = rule.match(source, target)
        if not rule_matches:
            continue
        LOGGER.debug("Bitext rule %s reported %d match(es)", rule.id, len(rule_matches))
        matches.extend(rule_matches)
    return matches


def check_bitext_pair(
    source_text: str,
    target_text: str,
    source_engine: AnalysisEngine,
    target_engine: AnalysisEngine,
    bitext_rules: Sequence[BitextRule],
) -> list[RuleMatch]:
    """Analyze one aligned pair and aggregate its matches.

    Positions are relative to ``target_text`` and start at line 0, column 0.
    """
    source = source_engine.analyze(source_text)
    target = target_engine.analyze(target_text)
    return aggregate_pair_matches(source, target, target_engine, bitext_rules)

from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.match_engine import aggregate_pair_matches, check_bitext, check_bitext_pair
from src.models import RuleMatch


class FixedRule:
    def __init__(self, rule_id: str, from_pos: int, to_pos: int) -> None:
        self.id = rule_id
        self.from_pos = from_pos
        self.to_pos = to_pos

    def match(self, sentence: SimpleNamespace) -> list[RuleMatch]:
        return [RuleMatch(from_pos=self.from_pos, to_pos=self.to_pos, rule_id=self.id)]


class FixedBitextRule:
    def __init__(self, rule_id: str, from_pos: int | None) -> None:
        self.id = rule_id
        self.from_pos = from_pos
        self.seen: list[tuple[str, str]] = []

    def match(self, source: SimpleNamespace, target: SimpleNamespace) -> list[RuleMatch]:
        self.seen.append((source.text, target.text))
        if self.from_pos is None:
            return []
        return [RuleMatch(from_pos=self.from_pos, to_pos=self.from_pos + 1, rule_id=self.id)]


class DummyEngine:
    def __init__(self, rules: list[FixedRule]) -> None:
        self.rules = rules
        self.analyzed: list[str] = []

    def analyze(self, sentence: str) -> SimpleNamespace:
        self.analyzed.append(sentence)
        return SimpleNamespace(text=sentence)

    def active_rules(self) -> list[FixedRule]:
        return self.rules

    def match_all(self, sentence: SimpleNamespace, rules: list[FixedRule]) -> list[RuleMatch]:
        found: list[RuleMatch] = []
        for rule in rules:
            found.extend(rule.match(sentence))
        return found


def test_monolingual_matches_come_before_bitext_matches() -> None:
    # deliberately out of positional order: nothing is sorted
    engine = DummyEngine([FixedRule("MONO_B", 8, 9), FixedRule("MONO_A", 0, 2)])
    rules = [FixedBitextRule("BI_1", 5), FixedBitextRule("BI_2", 1)]
    source = SimpleNamespace(text="Hello world.")
    target = SimpleNamespace(text="Hallo Welt.")

    matches = aggregate_pair_matches(source, target, engine, rules)

    assert [m.rule_id for m in matches] == ["MONO_B", "MONO_A", "BI_1", "BI_2"]


def test_bitext_rule_without_match_contributes_nothing() -> None:
    engine = DummyEngine([FixedRule("MONO", 0, 1)])
    rules = [FixedBitextRule("SILENT", None), FixedBitextRule("LOUD", 3)]

    matches = aggregate_pair_matches(
        SimpleNamespace(text="a"), SimpleNamespace(text="b"), engine, rules
    )

    assert [m.rule_id for m in matches] == ["MONO", "LOUD"]


def test_duplicates_are_kept() -> None:
    engine = DummyEngine([FixedRule("SAME", 0, 1), FixedRule("SAME", 0, 1)])
    matches = aggregate_pair_matches(
        SimpleNamespace(text="a"), SimpleNamespace(text="b"), engine, []
    )
    assert len(matches) == 2


def test_check_bitext_pair_analyzes_each_side_with_its_engine() -> None:
    source_engine = DummyEngine([FixedRule("SOURCE_ONLY", 0, 1)])
    target_engine = DummyEngine([])
    rule = FixedBitextRule("BI", 0)

    matches = check_bitext_pair("Hello.", "Hallo.", source_engine, target_engine, [rule])

    assert source_engine.analyzed == ["Hello."]
    assert target_engine.analyzed == ["Hallo."]
    assert rule.seen == [("Hello.", "Hallo.")]
    # source engine rules are never run
    assert [m.rule_id for m in matches] == ["BI"]


def test_check_bitext_single_pair_keeps_target_relative_positions() -> None:
    target_engine = DummyEngine([FixedRule("MONO", 6, 10)])
    matches = check_bitext("Hello world.", "Hallo Welt.", DummyEngine([]), target_engine, [])
    assert [(m.from_pos, m.to_pos, m.line, m.column) for m in matches] == [(6, 10, 0, 0)]

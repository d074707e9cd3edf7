from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import src.match_engine.bitext_rules as bitext_rules
from src.match_engine import (
    BitextRuleConfig,
    ResourceLoadError,
    UnrecognizedRuleConstructor,
    build_builtin_bitext_rules,
    load_bitext_rules,
    register_bitext_rule,
)
from src.models import RuleMatch

BUILTIN_IDS = ["SAME_TRANSLATION", "TRANSLATION_LENGTH", "DIFFERENT_PUNCTUATION"]


class LoadedRule:
    id = "FALSE_FRIEND"

    def match(self, source: object, target: object) -> list[RuleMatch]:
        return []


class ListLoader:
    name = "false-friends.xml"

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def load(self, source_language: str, target_language: str) -> list[LoadedRule]:
        self.calls.append((source_language, target_language))
        return [LoadedRule()]


class MissingFileLoader:
    name = "/de/bitext.xml"

    def load(self, source_language: str, target_language: str) -> list[LoadedRule]:
        raise FileNotFoundError(self.name)


def test_builtin_rules_are_built_in_registration_order() -> None:
    rules = build_builtin_bitext_rules(BitextRuleConfig(language="en"))
    assert [rule.id for rule in rules] == BUILTIN_IDS


def test_load_bitext_rules_puts_loaded_rules_first() -> None:
    loader = ListLoader()
    rules = load_bitext_rules("en", "de", loaders=[loader])
    assert [rule.id for rule in rules] == ["FALSE_FRIEND", *BUILTIN_IDS]
    assert loader.calls == [("en", "de")]


def test_unreadable_resource_raises_resource_load_error() -> None:
    with pytest.raises(ResourceLoadError) as excinfo:
        load_bitext_rules("en", "de", loaders=[ListLoader(), MissingFileLoader()])
    assert excinfo.value.resource == "/de/bitext.xml"
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_factory_returning_non_rule_aborts_whole_build(monkeypatch) -> None:
    monkeypatch.setitem(bitext_rules._BITEXT_RULE_FACTORIES, "BROKEN", lambda config: object())
    with pytest.raises(UnrecognizedRuleConstructor) as excinfo:
        load_bitext_rules("en", "de")
    assert excinfo.value.rule_id == "BROKEN"


def test_duplicate_registration_is_rejected() -> None:
    with pytest.raises(ValueError):
        register_bitext_rule("SAME_TRANSLATION")(lambda config: LoadedRule())


def test_registered_factory_receives_config(monkeypatch) -> None:
    received: list[BitextRuleConfig] = []

    def factory(config: BitextRuleConfig) -> LoadedRule:
        received.append(config)
        return LoadedRule()

    monkeypatch.setattr(bitext_rules, "_BITEXT_RULE_FACTORIES", {})
    register_bitext_rule("CUSTOM")(factory)
    rules = load_bitext_rules("fr", "en", messages={"greeting": "bonjour"})

    assert [rule.id for rule in rules] == ["FALSE_FRIEND"]
    assert received[0].language == "fr"
    assert received[0].message("greeting", "hello") == "bonjour"
    assert received[0].message("missing", "fallback") == "fallback"


def test_same_translation_rule() -> None:
    rule = bitext_rules.SameTranslationRule(BitextRuleConfig(language="en"))
    matches = rule.match("This was not translated", "This was not translated")
    assert [(m.from_pos, m.to_pos, m.rule_id) for m in matches] == [
        (0, 23, "SAME_TRANSLATION")
    ]
    assert matches[0].suggested_replacements == []
    assert rule.match("Short", "Short") == []
    assert rule.match("This was translated", "Das wurde übersetzt") == []


def test_translation_length_rule_uses_custom_messages() -> None:
    config = BitextRuleConfig(language="en", messages={"translation_too_long": "Too long"})
    rule = bitext_rules.TranslationLengthRule(config)
    target = "Dies ist eine sehr viel zu lange Übersetzung eines kurzen Satzes."
    matches = rule.match("Short one.", target)
    assert [m.message for m in matches] == ["Too long"]
    assert matches[0].to_pos == len(target)
    assert rule.match("A normal sentence.", "Ein normaler Satz.") == []


def test_different_punctuation_rule() -> None:
    rule = bitext_rules.DifferentPunctuationRule(BitextRuleConfig(language="en"))
    assert rule.match("Is it?", "Ist es.")[0].rule_id == "DIFFERENT_PUNCTUATION"
    assert rule.match("He said \"yes.\"", "Er sagte „ja.“") == []
    assert rule.match("Done.", "Fertig.") == []

"""Bitext rule registry and loading.

Built-in bitext rules are registered with :func:`register_bitext_rule`
against a single construction signature: a factory taking a
:class:`BitextRuleConfig`. Data-driven rules (pattern files, false friends)
come from external :class:`~.protocols.BitextRuleLoader` objects.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

from src.models import RuleMatch

from .errors import ResourceLoadError, UnrecognizedRuleConstructor
from .protocols import AnalyzedSentence, BitextRule, BitextRuleLoader

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BitextRuleConfig:
    """Everything a built-in bitext rule may need when constructed."""

    language: str
    messages: Mapping[str, str] = field(default_factory=dict)

    def message(self, key: str, default: str) -> str:
        return self.messages.get(key, default)


BitextRuleFactory = Callable[[BitextRuleConfig], BitextRule]

_BITEXT_RULE_FACTORIES: dict[str, BitextRuleFactory] = {}


def register_bitext_rule(
    rule_id: str,
) -> Callable[[BitextRuleFactory], BitextRuleFactory]:
    """Decorator registering ``factory`` as the constructor for ``rule_id``."""

    def decorator(factory: BitextRuleFactory) -> BitextRuleFactory:
        if rule_id in _BITEXT_RULE_FACTORIES:
            raise ValueError(f"Bitext rule '{rule_id}' is already registered")
        if not callable(factory):
            raise TypeError(f"Factory for bitext rule '{rule_id}' is not callable")
        _BITEXT_RULE_FACTORIES[rule_id] = factory
        return factory

    return decorator


def build_builtin_bitext_rules(config: BitextRuleConfig) -> list[BitextRule]:
    """Instantiate every registered bitext rule, in registration order.

    Raises :class:`UnrecognizedRuleConstructor` if any factory returns
    something that is not a bitext rule; no partial list is returned.
    """
    rules: list[BitextRule] = []
    for rule_id, factory in _BITEXT_RULE_FACTORIES.items():
        rule = factory(config)
        if not isinstance(rule, BitextRule):
            LOGGER.error("Aborting bitext rule build at '%s'", rule_id)
            raise UnrecognizedRuleConstructor(rule_id, rule)
        rules.append(rule)
    return rules


def load_bitext_rules(
    source_language: str,
    target_language: str,
    *,
    loaders: Sequence[BitextRuleLoader] = (),
    messages: Mapping[str, str] | None = None,
) -> list[BitextRule]:
    """Return the default bitext rules for a language pair.

    Rules from ``loaders`` come first, in loader order, followed by the
    built-in rules configured for the source language.
    """
    rules: list[BitextRule] = []
    for loader in loaders:
        try:
            loaded = list(loader.load(source_language, target_language))
        except OSError as exc:
            LOGGER.exception(
                "Failed to load bitext rules from %s for %s -> %s",
                loader.name,
                source_language,
                target_language,
            )
            raise ResourceLoadError(loader.name) from exc
        LOGGER.info("Loaded %d bitext rule(s) from %s", len(loaded), loader.name)
        rules.extend(loaded)

    config = BitextRuleConfig(language=source_language, messages=dict(messages or {}))
    rules.extend(build_builtin_bitext_rules(config))
    return rules


def _sentence_text(sentence: AnalyzedSentence) -> str:
    if isinstance(sentence, str):
        return sentence
    return str(getattr(sentence, "text", "") or "")


def _whole_sentence_match(rule_id: str, message: str, target: str) -> RuleMatch:
    return RuleMatch(
        from_pos=0,
        to_pos=len(target),
        line=0,
        end_line=target.count("\n"),
        column=1,
        rule_id=rule_id,
        message=message,
    )


@register_bitext_rule("SAME_TRANSLATION")
class SameTranslationRule:
    """Flags a target that is an unchanged copy of the source."""

    id = "SAME_TRANSLATION"
    MIN_LENGTH = 10

    def __init__(self, config: BitextRuleConfig) -> None:
        self.message = config.message(
            "same_translation", "Source and target translation are the same"
        )

    def match(
        self, source: AnalyzedSentence, target: AnalyzedSentence
    ) -> list[RuleMatch]:
        source_text = _sentence_text(source).strip()
        target_text = _sentence_text(target)
        if len(source_text) >= self.MIN_LENGTH and source_text == target_text.strip():
            return [_whole_sentence_match(self.id, self.message, target_text)]
        return []


@register_bitext_rule("TRANSLATION_LENGTH")
class TranslationLengthRule:
    """Flags a target much longer or shorter than its source."""

    id = "TRANSLATION_LENGTH"
    MAX_RATIO = 2.5
    MIN_RATIO = 0.4

    def __init__(self, config: BitextRuleConfig) -> None:
        self.long_message = config.message(
            "translation_too_long", "Target translation is much longer than the source"
        )
        self.short_message = config.message(
            "translation_too_short", "Target translation is much shorter than the source"
        )

    def match(
        self, source: AnalyzedSentence, target: AnalyzedSentence
    ) -> list[RuleMatch]:
        source_text = _sentence_text(source).strip()
        target_text = _sentence_text(target)
        if not source_text or not target_text.strip():
            return []
        ratio = len(target_text.strip()) / len(source_text)
        if ratio > self.MAX_RATIO:
            return [_whole_sentence_match(self.id, self.long_message, target_text)]
        if ratio < self.MIN_RATIO:
            return [_whole_sentence_match(self.id, self.short_message, target_text)]
        return []


_FINAL_PUNCTUATION = re.compile(r"([.!?:;…])[\"'“”‘’«»)\]]*\s*$")


@register_bitext_rule("DIFFERENT_PUNCTUATION")
class DifferentPunctuationRule:
    """Flags a target whose sentence-final punctuation differs from the source."""

    id = "DIFFERENT_PUNCTUATION"

    def __init__(self, config: BitextRuleConfig) -> None:
        self.message = config.message(
            "different_punctuation",
            "Source and target sentences end with different punctuation",
        )

    @staticmethod
    def _final_mark(text: str) -> str:
        found = _FINAL_PUNCTUATION.search(text)
        return found.group(1) if found else ""

    def match(
        self, source: AnalyzedSentence, target: AnalyzedSentence
    ) -> list[RuleMatch]:
        source_text = _sentence_text(source)
        target_text = _sentence_text(target)
        if not source_text.strip() or not target_text.strip():
            return []
        if self._final_mark(source_text) != self._final_mark(target_text):
            return [_whole_sentence_match(self.id, self.message, target_text)]
        return []

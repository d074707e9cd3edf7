"""Interfaces the match engine expects from analysis engines, rules and readers.

Any object with the right attributes satisfies these; nothing needs to
subclass them.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Protocol, Sequence, runtime_checkable

from src.models import AlignedPair, RuleMatch, StreamingPosition

AnalyzedSentence = Any


class Rule(Protocol):
    """A monolingual rule run against one analyzed sentence."""

    id: str

    def match(self, sentence: AnalyzedSentence) -> Sequence[RuleMatch]:
        """Return every match in ``sentence``; an empty sequence when none."""
        ...


@runtime_checkable
class BitextRule(Protocol):
    """A rule that compares an aligned source and target sentence."""

    id: str

    def match(
        self, source: AnalyzedSentence, target: AnalyzedSentence
    ) -> Sequence[RuleMatch]:
        """Return matches relative to the target sentence; empty when none."""
        ...


class DocumentChecker(Protocol):
    """Anything that can check a whole text in one call."""

    def check(self, text: str) -> list[RuleMatch]:
        """Return document-relative matches for ``text``."""
        ...

    def sentence_tokenize(self, text: str) -> list[str]: ...


class AnalysisEngine(DocumentChecker, Protocol):
    """Tokenizer, tagger and rule matcher for one language."""

    def analyze(self, sentence: str) -> AnalyzedSentence: ...

    def active_rules(self) -> Sequence[Rule]: ...

    def match_all(
        self, sentence: AnalyzedSentence, rules: Sequence[Rule]
    ) -> list[RuleMatch]:
        """Run ``rules`` over ``sentence`` in the engine's native order."""
        ...


class BitextReader(Protocol):
    """Pull-based source of aligned pairs.

    ``position`` must describe the pair most recently yielded: the reader
    updates it before yielding, never after.
    """

    @property
    def position(self) -> StreamingPosition: ...

    def __iter__(self) -> Iterator[AlignedPair]: ...


class BitextRuleLoader(Protocol):
    """External loader of data-driven bitext rules (patterns, false friends)."""

    name: str

    def load(self, source_language: str, target_language: str) -> Iterable[BitextRule]:
        ...

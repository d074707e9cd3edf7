"""Exceptions raised by the match engine."""

from __future__ import annotations


class MatchEngineError(Exception):
    """Base class for failures raised by the match engine."""


class ResourceLoadError(MatchEngineError):
    """Raised when a rule resource cannot be read.

    The underlying ``OSError`` is kept as ``__cause__``.
    """

    def __init__(self, resource: str, message: str | None = None) -> None:
        super().__init__(message or f"Could not load rule resource: {resource}")
        self.resource = resource


class UnrecognizedRuleConstructor(MatchEngineError):
    """Raised when a registered bitext factory does not produce a bitext rule.

    Building the bitext rule set stops at the first such factory; callers never
    receive a partial rule list.
    """

    def __init__(self, rule_id: str, product: object) -> None:
        super().__init__(
            f"Factory registered for bitext rule '{rule_id}' returned "
            f"{type(product).__name__}, which has no 'id' and 'match(source, target)'"
        )
        self.rule_id = rule_id

"""LanguageTool setup helpers.

This module centralises LanguageTool instantiation so that rule selection
and shared server configuration stay in one place, and adapts a
``language_tool_python.LanguageTool`` to the checker interface used by
:mod:`.checker`.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Sequence

import language_tool_python

from src.models import RuleActivationRequest, RuleMatch

from .activation import apply_request_to_tool
from .engine_config import (
    DEFAULT_DISABLED_RULES,
    DEFAULT_LANGUAGE,
    LANGUAGETOOL_CONFIG,
    EngineSettings,
)

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


class LanguageToolManager:
    """Factory class responsible for configuring LanguageTool instances."""

    def __init__(
        self,
        *,
        disabled_rules: Iterable[str] | None = None,
        base_language: str = DEFAULT_LANGUAGE,
        config: dict[str, Any] | None = None,
        remote_server: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.base_language = base_language
        self.logger = logger or logging.getLogger(__name__)
        self.config = dict(config) if config is not None else dict(LANGUAGETOOL_CONFIG)
        self.remote_server = remote_server
        self.disabled_rules = set(
            DEFAULT_DISABLED_RULES if disabled_rules is None else disabled_rules
        )

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        *,
        disabled_rules: Iterable[str] | None = None,
        logger: logging.Logger | None = None,
    ) -> "LanguageToolManager":
        """Create a manager for the language and server named in ``settings``."""

        return cls(
            disabled_rules=disabled_rules,
            base_language=settings.language,
            remote_server=settings.remote_server,
            logger=logger,
        )

    def build_tool(
        self,
        language: str | None = None,
        *,
        extra_disabled_rules: Iterable[str] | None = None,
    ) -> Any:
        """Build a LanguageTool instance for ``language``."""

        language = language or self.base_language
        kwargs: dict[str, Any] = {}
        if self.remote_server:
            # Server-side config only applies to a locally spawned server.
            kwargs["remote_server"] = self.remote_server
        elif self.config:
            kwargs["config"] = self.config

        tool = language_tool_python.LanguageTool(language, **kwargs)
        self.logger.info("Created LanguageTool for language: %s", language)

        rules = set(self.disabled_rules)
        if extra_disabled_rules:
            rules.update(extra_disabled_rules)
        if rules:
            tool.disabled_rules = set(rules)
        return tool

    def build_engine(
        self,
        language: str | None = None,
        *,
        extra_disabled_rules: Iterable[str] | None = None,
    ) -> "LanguageToolEngine":
        tool = self.build_tool(language, extra_disabled_rules=extra_disabled_rules)
        return LanguageToolEngine(tool, logger=self.logger)


def _line_and_column(text: str, offset: int) -> tuple[int, int]:
    """Return the 0-based line and 1-based column of ``offset`` in ``text``."""
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def to_rule_match(match: object, text: str) -> RuleMatch:
    """Convert a ``language_tool_python.Match`` into a :class:`RuleMatch`."""
    offset = int(getattr(match, "offset", 0) or 0)
    length = int(getattr(match, "errorLength", 0) or 0)
    end = min(len(text), offset + length) if text else offset + length
    line, column = _line_and_column(text, offset)
    end_line, _ = _line_and_column(text, end)
    return RuleMatch(
        from_pos=offset,
        to_pos=max(offset, end),
        line=line,
        end_line=end_line,
        column=column,
        rule_id=getattr(match, "ruleId", "UNKNOWN") or "UNKNOWN",
        message=str(getattr(match, "message", "") or "").strip(),
        suggested_replacements=list(getattr(match, "replacements", []) or []),
        url=getattr(match, "url", None) or None,
    )


class LanguageToolRule:
    """Every rule enabled on a LanguageTool instance, run as one unit.

    LanguageTool does not expose its rules one by one to the client, so the
    profiler and the bitext checker see a single rule per engine.
    """

    id = "LANGUAGETOOL"

    def __init__(self, engine: "LanguageToolEngine") -> None:
        self.engine = engine

    def match(self, sentence: str) -> list[RuleMatch]:
        return self.engine.check(sentence)


class LanguageToolEngine:
    """Checker backed by a LanguageTool instance.

    Analysis is the identity: a sentence is passed to LanguageTool as plain
    text, which is also what the built-in bitext rules read.
    """

    def __init__(self, tool: Any, *, logger: logging.Logger | None = None) -> None:
        self.tool = tool
        self.logger = logger or logging.getLogger(__name__)
        self._rules = [LanguageToolRule(self)]

    @property
    def language(self) -> str:
        return str(getattr(self.tool, "language", None) or getattr(self.tool, "lang", "unknown"))

    def check(self, text: str) -> list[RuleMatch]:
        if not text:
            return []
        matches = self.tool.check(text) or []
        return [to_rule_match(match, text) for match in matches]

    def sentence_tokenize(self, text: str) -> list[str]:
        return [chunk for chunk in _SENTENCE_BOUNDARY.split(text) if chunk.strip()]

    def analyze(self, sentence: str) -> str:
        return sentence

    def active_rules(self) -> list[LanguageToolRule]:
        return list(self._rules)

    def match_all(self, sentence: str, rules: Sequence[Any]) -> list[RuleMatch]:
        matches: list[RuleMatch] = []
        for rule in rules:
            matches.extend(rule.match(sentence))
        return matches

    def select_rules(self, request: RuleActivationRequest) -> None:
        apply_request_to_tool(self.tool, request)
        self.logger.info(
            "Applied rule selection to LanguageTool (%s): %d disabled, %d enabled%s",
            self.language,
            len(request.disabled_ids),
            len(request.enabled_ids),
            " (exclusive)" if request.exclusive_enable and request.enabled_ids else "",
        )

    def close(self) -> None:
        if hasattr(self.tool, "close"):
            self.tool.close()

    def __enter__(self) -> "LanguageToolEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def build_engines(
    languages: Sequence[str],
    *,
    manager: LanguageToolManager | None = None,
) -> list[LanguageToolEngine]:
    """Build one engine per language, sharing a manager's configuration."""

    tool_manager = manager or LanguageToolManager()
    return [tool_manager.build_engine(language) for language in languages]

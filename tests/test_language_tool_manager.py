from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import src.match_engine.language_tool_manager as lt_mod
from src.match_engine import LanguageToolEngine, LanguageToolManager, check_text, correct_text
from src.match_engine.engine_config import DEFAULT_DISABLED_RULES, LANGUAGETOOL_CONFIG, EngineSettings
from src.match_engine.language_tool_manager import build_engines, to_rule_match
from src.models import RuleActivationRequest


class DummyTool:
    def __init__(self, matches: list[SimpleNamespace] | None = None) -> None:
        self.language = "en-GB"
        self._matches = matches or []
        self.disabled_rules: set[str] = set()
        self.enabled_rules: set[str] = set()
        self.enabled_rules_only = False
        self.closed = False

    def check(self, text: str) -> list[SimpleNamespace]:
        return self._matches

    def close(self) -> None:
        self.closed = True


def _lt_match(offset: int, length: int, replacements: list[str]) -> SimpleNamespace:
    return SimpleNamespace(
        ruleId="MORFOLOGIK_RULE_EN_GB",
        message="Possible spelling mistake found.",
        replacements=replacements,
        offset=offset,
        errorLength=length,
    )


def _capture_language_tool(monkeypatch) -> dict:
    captured: dict = {}

    class DummyLanguageTool(DummyTool):
        def __init__(self, language, *args, **kwargs):
            super().__init__()
            captured["language"] = language
            captured["kwargs"] = kwargs
            self.language = language

    monkeypatch.setattr(lt_mod.language_tool_python, "LanguageTool", DummyLanguageTool)
    return captured


def test_build_tool_passes_config_and_disables_defaults(monkeypatch) -> None:
    captured = _capture_language_tool(monkeypatch)

    tool = LanguageToolManager().build_tool("en-GB", extra_disabled_rules={"EXTRA_RULE"})

    assert captured["language"] == "en-GB"
    assert captured["kwargs"]["config"] == LANGUAGETOOL_CONFIG
    assert tool.disabled_rules == set(DEFAULT_DISABLED_RULES) | {"EXTRA_RULE"}


def test_build_tool_uses_remote_server_without_config(monkeypatch) -> None:
    captured = _capture_language_tool(monkeypatch)

    LanguageToolManager(remote_server="http://localhost:8081").build_tool()

    assert captured["language"] == "en-GB"
    assert captured["kwargs"] == {"remote_server": "http://localhost:8081"}


def test_build_engines_one_per_language(monkeypatch) -> None:
    _capture_language_tool(monkeypatch)
    engines = build_engines(["en-GB", "de-DE"])
    assert [engine.language for engine in engines] == ["en-GB", "de-DE"]


def test_to_rule_match_computes_line_and_column() -> None:
    text = "Teh cat.\nTeh dog."
    match = to_rule_match(_lt_match(9, 3, ["The"]), text)
    assert (match.from_pos, match.to_pos) == (9, 12)
    assert (match.line, match.end_line, match.column) == (1, 1, 1)
    assert match.rule_id == "MORFOLOGIK_RULE_EN_GB"
    assert match.suggested_replacements == ["The"]
    assert match.url is None


def test_engine_check_and_correct() -> None:
    text = "Teh cat sat."
    engine = LanguageToolEngine(DummyTool([_lt_match(0, 3, ["The", "Tea"])]))

    result = check_text(text, engine)
    assert [m.rule_id for m in result.matches] == ["MORFOLOGIK_RULE_EN_GB"]
    assert result.sentence_count == 1
    assert correct_text(text, engine) == "The cat sat."


def test_engine_check_skips_empty_text() -> None:
    engine = LanguageToolEngine(DummyTool([_lt_match(0, 3, ["The"])]))
    assert engine.check("") == []


def test_engine_sentence_tokenize() -> None:
    engine = LanguageToolEngine(DummyTool())
    assert engine.sentence_tokenize("One. Two?  Three!") == ["One.", "Two?", "Three!"]


def test_engine_select_rules_updates_tool() -> None:
    tool = DummyTool()
    engine = LanguageToolEngine(tool)

    engine.select_rules(RuleActivationRequest(disabled_ids={"A", "B"}, enabled_ids={"B"}))

    assert tool.disabled_rules == {"A"}
    assert tool.enabled_rules == {"B"}
    assert tool.enabled_rules_only is True


def test_engine_context_manager_closes_tool() -> None:
    tool = DummyTool()
    with LanguageToolEngine(tool):
        pass
    assert tool.closed


def test_manager_from_settings_uses_language_and_remote_server(monkeypatch) -> None:
    captured = _capture_language_tool(monkeypatch)
    settings = EngineSettings(language="de-DE", remote_server="http://localhost:8081")

    LanguageToolManager.from_settings(settings).build_tool()

    assert captured["language"] == "de-DE"
    assert captured["kwargs"] == {"remote_server": "http://localhost:8081"}


def test_engine_runs_all_enabled_rules_as_one_rule() -> None:
    engine = LanguageToolEngine(DummyTool([_lt_match(0, 3, ["The"])]))

    rules = engine.active_rules()
    analyzed = engine.analyze("Teh cat.")

    assert [rule.id for rule in rules] == ["LANGUAGETOOL"]
    assert analyzed == "Teh cat."
    assert [m.rule_id for m in engine.match_all(analyzed, rules)] == ["MORFOLOGIK_RULE_EN_GB"]

"""Match engine package exports.

This package exposes the checking, position adjusting, correcting, rule
selection and profiling helpers so callers can import from
``src.match_engine``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .activation import apply_request_to_tool, resolve_active_rules, select_rules
    from .aggregator import aggregate_pair_matches, check_bitext_pair
    from .bitext_reader import TabBitextReader
    from .bitext_rules import (
        BitextRuleConfig,
        build_builtin_bitext_rules,
        load_bitext_rules,
        register_bitext_rule,
    )
    from .checker import (
        CheckResult,
        analyze_text,
        check_bitext,
        check_bitext_stream,
        check_text,
        correct_bitext,
        correct_text,
    )
    from .correction import apply_corrections, sort_for_correction
    from .errors import MatchEngineError, ResourceLoadError, UnrecognizedRuleConstructor
    from .language_tool_manager import LanguageToolEngine, LanguageToolManager
    from .position import adjust_all_to_stream, adjust_to_stream, shift_lines
    from .profiler import profile_rules_on_line, profile_rules_on_text
    from .report_utils import (
        build_report_csv,
        format_matches,
        format_profile_report,
        format_time_stats,
    )

__all__ = [
    "BitextRuleConfig",
    "CheckResult",
    "LanguageToolEngine",
    "LanguageToolManager",
    "MatchEngineError",
    "ResourceLoadError",
    "TabBitextReader",
    "UnrecognizedRuleConstructor",
    "adjust_all_to_stream",
    "adjust_to_stream",
    "aggregate_pair_matches",
    "analyze_text",
    "apply_corrections",
    "apply_request_to_tool",
    "build_builtin_bitext_rules",
    "build_report_csv",
    "check_bitext",
    "check_bitext_pair",
    "check_bitext_stream",
    "check_text",
    "correct_bitext",
    "correct_text",
    "format_matches",
    "format_profile_report",
    "format_time_stats",
    "load_bitext_rules",
    "profile_rules_on_line",
    "profile_rules_on_text",
    "register_bitext_rule",
    "resolve_active_rules",
    "select_rules",
    "shift_lines",
    "sort_for_correction",
]

_LAZY_EXPORTS = {
    # attribute -> (module, attribute)
    "apply_request_to_tool": (".activation", "apply_request_to_tool"),
    "resolve_active_rules": (".activation", "resolve_active_rules"),
    "select_rules": (".activation", "select_rules"),
    "aggregate_pair_matches": (".aggregator", "aggregate_pair_matches"),
    "check_bitext_pair": (".aggregator", "check_bitext_pair"),
    "TabBitextReader": (".bitext_reader", "TabBitextReader"),
    "BitextRuleConfig": (".bitext_rules", "BitextRuleConfig"),
    "build_builtin_bitext_rules": (".bitext_rules", "build_builtin_bitext_rules"),
    "load_bitext_rules": (".bitext_rules", "load_bitext_rules"),
    "register_bitext_rule": (".bitext_rules", "register_bitext_rule"),
    "CheckResult": (".checker", "CheckResult"),
    "analyze_text": (".checker", "analyze_text"),
    "check_bitext": (".checker", "check_bitext"),
    "check_bitext_stream": (".checker", "check_bitext_stream"),
    "check_text": (".checker", "check_text"),
    "correct_bitext": (".checker", "correct_bitext"),
    "correct_text": (".checker", "correct_text"),
    "apply_corrections": (".correction", "apply_corrections"),
    "sort_for_correction": (".correction", "sort_for_correction"),
    "MatchEngineError": (".errors", "MatchEngineError"),
    "ResourceLoadError": (".errors", "ResourceLoadError"),
    "UnrecognizedRuleConstructor": (".errors", "UnrecognizedRuleConstructor"),
    "LanguageToolEngine": (".language_tool_manager", "LanguageToolEngine"),
    "LanguageToolManager": (".language_tool_manager", "LanguageToolManager"),
    "adjust_all_to_stream": (".position", "adjust_all_to_stream"),
    "adjust_to_stream": (".position", "adjust_to_stream"),
    "shift_lines": (".position", "shift_lines"),
    "profile_rules_on_line": (".profiler", "profile_rules_on_line"),
    "profile_rules_on_text": (".profiler", "profile_rules_on_text"),
    "build_report_csv": (".report_utils", "build_report_csv"),
    "format_matches": (".report_utils", "format_matches"),
    "format_profile_report": (".report_utils", "format_profile_report"),
    "format_time_stats": (".report_utils", "format_time_stats"),
}


def __getattr__(name: str):
    """Lazily import and return exported attributes.

    Importing the package does not pull in ``language_tool_python`` until the
    LanguageTool backend is actually used.
    """

    if name in _LAZY_EXPORTS:
        module_name, attr = _LAZY_EXPORTS[name]
        from importlib import import_module

        mod = import_module(f"src.match_engine{module_name}")
        value = getattr(mod, attr)
        globals()[name] = value
        return value
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_LAZY_EXPORTS.keys()))

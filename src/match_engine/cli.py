"""Command line entry point for checking, correcting and profiling text.

Settings come from the environment and an optional ``.env`` file (see
:func:`~src.match_engine.engine_config.load_engine_settings`); command line
flags override them.
"""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from src.models import RuleActivationRequest, RuleMatch

from .bitext_reader import TabBitextReader
from .bitext_rules import load_bitext_rules
from .checker import check_bitext_stream, check_text, correct_bitext, correct_text
from .engine_config import EngineSettings, load_engine_settings
from .language_tool_manager import LanguageToolEngine, LanguageToolManager
from .profiler import profile_rules_on_text
from .report_utils import (
    build_report_csv,
    format_matches,
    format_profile_report,
    format_time_stats,
)

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check, correct or profile text with LanguageTool rules."
    )
    parser.add_argument(
        "command",
        choices=["check", "correct", "bitext", "correct-bitext", "profile"],
        help="What to do with the input file",
    )
    parser.add_argument("path", type=Path, help="Plain text file, or source<TAB>target lines")
    parser.add_argument(
        "--language",
        help="Language code for the checked text (default: MATCH_ENGINE_LANGUAGE or en-GB)",
    )
    parser.add_argument(
        "--source-language",
        default="en",
        help="Source language code for bitext commands (default: en)",
    )
    parser.add_argument(
        "--dotenv",
        type=Path,
        help="Optional .env file to load settings from",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        help="Rule id to disable; may be repeated",
    )
    parser.add_argument(
        "--enable",
        action="append",
        default=[],
        help="Rule id to enable; may be repeated",
    )
    parser.add_argument(
        "--keep-other-rules",
        action="store_true",
        help="Keep other rules active when --enable is used",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        help="Also write the matches to this CSV file",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def _write_csv(path: Path, matches: Iterable[RuleMatch]) -> None:
    with path.open("w", encoding="utf-8", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerows(build_report_csv(matches))
    LOGGER.info("CSV report written to %s", path)


def _print_matches(
    matches: Sequence[RuleMatch], text: str, settings: EngineSettings
) -> None:
    if matches:
        print(format_matches(matches, text, context_size=settings.context_size))
        print()


def run_command(
    args: argparse.Namespace,
    settings: EngineSettings,
    manager: LanguageToolManager,
) -> None:
    """Run ``args.command`` with engines built by ``manager``."""

    request = RuleActivationRequest(
        disabled_ids=args.disable,
        enabled_ids=args.enable,
        exclusive_enable=not args.keep_other_rules,
    )
    target_engine = manager.build_engine(args.language or settings.language)
    with target_engine:
        target_engine.select_rules(request)

        if args.command in ("check", "correct", "profile"):
            text = args.path.read_text(encoding="utf-8")
            if args.command == "correct":
                print(correct_text(text, target_engine))
                return
            if args.command == "profile":
                samples = profile_rules_on_text(text, target_engine, runs=settings.profile_runs)
                print(format_profile_report(samples))
                return
            result = check_text(text, target_engine)
            _print_matches(result.matches, text, settings)
            print(format_time_stats(result.elapsed_ms, result.sentence_count))
            if args.csv:
                _write_csv(args.csv, result.matches)
            return

        bitext_rules = load_bitext_rules(args.source_language, target_engine.language)
        source_engine: LanguageToolEngine = manager.build_engine(args.source_language)
        with source_engine:
            reader = TabBitextReader.from_path(args.path)
            if args.command == "correct-bitext":
                for target in correct_bitext(reader, source_engine, target_engine, bitext_rules):
                    print(target)
                return
            result = check_bitext_stream(reader, source_engine, target_engine, bitext_rules)
            # positions are offsets into the whole file
            _print_matches(result.matches, args.path.read_text(encoding="utf-8"), settings)
            print(format_time_stats(result.elapsed_ms, result.sentence_count))
            if args.csv:
                _write_csv(args.csv, result.matches)


def main(argv: Optional[Iterable[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)
    settings = load_engine_settings(args.dotenv)
    manager = LanguageToolManager.from_settings(settings)

    try:
        run_command(args, settings, manager)
    except FileNotFoundError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

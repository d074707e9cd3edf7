"""Plain-text and CSV presentation of check and profile results.

Nothing in this module prints; every helper returns a string or rows that
the caller writes wherever it likes.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from src.models import ProfileSample, RuleMatch

from .engine_config import DEFAULT_CONTEXT_SIZE


def _format_suggestions(replacements: Sequence[str] | None, separator: str = "; ") -> str:
    if not replacements:
        return ""
    return separator.join(replacements)


def _clean_message(message: str) -> str:
    return message.replace("<suggestion>", "'").replace("</suggestion>", "'")


def _rule_label(match: RuleMatch) -> str:
    if match.sub_id:
        return f"{match.rule_id}[{match.sub_id}]"
    return match.rule_id


def plain_text_context(
    text: str, from_pos: int, to_pos: int, context_size: int = DEFAULT_CONTEXT_SIZE
) -> str:
    """Return the text around a match with a ``^`` marker line underneath."""
    start = max(0, from_pos - context_size)
    end = min(len(text), to_pos + context_size)
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(text) else ""
    snippet = text[start:end].replace("\r", " ").replace("\n", " ")
    marker_start = len(prefix) + (from_pos - start)
    marker_width = max(1, min(to_pos, len(text)) - from_pos)
    return f"{prefix}{snippet}{suffix}\n{' ' * marker_start}{'^' * marker_width}"


def format_matches(
    matches: Sequence[RuleMatch],
    text: str,
    *,
    previous_matches: int = 0,
    context_size: int = DEFAULT_CONTEXT_SIZE,
) -> str:
    """Render matches as numbered entries separated by blank lines.

    ``previous_matches`` continues the numbering from an earlier batch.
    """
    entries: list[str] = []
    for index, match in enumerate(matches, start=previous_matches + 1):
        lines = [
            f"{index}.) Line {match.line + 1}, column {match.column}, "
            f"Rule ID: {_rule_label(match)}",
            f"Message: {_clean_message(match.message)}",
        ]
        if match.suggested_replacements:
            lines.append(f"Suggestion: {_format_suggestions(match.suggested_replacements)}")
        lines.append(plain_text_context(text, match.from_pos, match.to_pos, context_size))
        if match.url:
            lines.append(f"More info: {match.url}")
        entries.append("\n".join(lines))
    return "\n\n".join(entries)


def format_time_stats(elapsed_ms: float, sentence_count: int) -> str:
    seconds = elapsed_ms / 1000.0
    rate = sentence_count / seconds if seconds > 0 else math.inf
    return f"Time: {elapsed_ms:.0f}ms for {sentence_count} sentences ({rate:.1f} sentences/sec)"


def format_profile_report(samples: Sequence[ProfileSample]) -> str:
    """Render profile samples as a tab-separated table."""
    lines = [
        f"Testing {len(samples)} rules",
        "Rule ID\tTime\tSentences\tMatches\tSentences per sec.",
    ]
    for sample in samples:
        lines.append(
            f"{sample.rule_id}\t{sample.median_millis:.1f}\t{sample.sentence_count}"
            f"\t{sample.match_count}\t{sample.sentences_per_second:.1f}"
        )
    return "\n".join(lines)


def build_report_csv(matches: Iterable[RuleMatch]) -> list[list[str]]:
    """Convert matches into CSV rows; the first row holds the headers."""
    rows: list[list[str]] = [
        ["Line", "Column", "From", "To", "Rule ID", "Message", "Suggestions", "URL"]
    ]
    for match in matches:
        rows.append([
            str(match.line + 1),
            str(match.column),
            str(match.from_pos),
            str(match.to_pos),
            _rule_label(match),
            _clean_message(match.message),
            _format_suggestions(match.suggested_replacements),
            match.url or "",
        ])
    return rows

"""Apply the suggested replacements of rule matches to a text.

Matches must be supplied in ascending, non-overlapping position order.
Unordered input is not rejected: the result then depends on list order
rather than document order. Use :func:`sort_for_correction` to establish
the order explicitly.

The expected text under each match is read from the input, so running the
same matches over an already corrected text is not a no-op once a
replacement has changed a span length.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from src.models import RuleMatch

LOGGER = logging.getLogger(__name__)


def sort_for_correction(matches: Iterable[RuleMatch]) -> list[RuleMatch]:
    """Return ``matches`` stably sorted by ``(from_pos, to_pos)``."""
    return sorted(matches, key=lambda match: (match.from_pos, match.to_pos))


def apply_corrections(text: str, matches: Sequence[RuleMatch]) -> str:
    """Rewrite ``text`` with the first suggestion of every match.

    Before anything is replaced, the original text under each match that has
    suggestions is recorded. Matches are then replayed in order while tracking
    how much the text has shrunk or grown so far. A match is applied only if
    its span still holds the recorded text; a span already changed by an
    earlier, overlapping correction is skipped. Matches without suggestions
    are ignored. Remaining suggestions beyond the first are discarded.
    """
    if not matches:
        return text

    expected = [
        text[match.from_pos : match.to_pos]
        for match in matches
        if match.suggested_replacements
    ]

    corrected = text
    offset = 0
    counter = 0
    for match in matches:
        if not match.suggested_replacements:
            continue
        start = match.from_pos - offset
        end = match.to_pos - offset
        replacement = match.suggested_replacements[0]
        if corrected[start:end] == expected[counter]:
            corrected = corrected[:start] + replacement + corrected[end:]
            offset += (match.to_pos - match.from_pos) - len(replacement)
        else:
            LOGGER.debug(
                "Skipping %s at %d-%d: span already changed by an earlier correction",
                match.rule_id,
                match.from_pos,
                match.to_pos,
            )
        counter += 1
    return corrected

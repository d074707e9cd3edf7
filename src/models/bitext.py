"""Records exchanged between a bilingual reader and the checking code."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AlignedPair:
    """One source sentence and its target-language counterpart."""

    source: str
    target: str


@dataclass(frozen=True)
class StreamingPosition:
    """Snapshot of a reader's running counters after it yielded a pair.

    ``sentence_offset`` is the position of the current target sentence in the
    whole document, ``line_count`` the 0-based line it starts on and
    ``column_count`` the column it starts at. ``target_column_count`` is the
    column of the target text on ``current_line``.
    """

    sentence_offset: int = 0
    column_count: int = 0
    line_count: int = 0
    current_line: str = ""
    target_column_count: int = 0

"""Translate rule matches from sentence-local to document coordinates.

Two situations need adjusting:

* Single-document checks, where offsets are already relative to the checked
  text and only a caller-supplied line offset has to be added.
* Streaming bilingual checks, where every aligned pair is checked on its own
  and the matches start at line 0, column 0 of the target sentence. The
  reader's :class:`~src.models.StreamingPosition` taken right after the pair
  was yielded tells where that sentence sits in the document.
"""

from __future__ import annotations

from typing import Iterable

from src.models import RuleMatch, StreamingPosition


def shift_lines(matches: Iterable[RuleMatch], line_offset: int = 0) -> list[RuleMatch]:
    """Add ``line_offset`` to ``line`` and ``end_line`` of every match.

    Columns and character offsets are left alone.
    """
    return [match.shifted_lines(line_offset) for match in matches]


def adjust_to_stream(match: RuleMatch, position: StreamingPosition) -> RuleMatch:
    """Return ``match`` moved to the document location given by ``position``.

    The column only moves for matches on the first line of the sentence;
    column counters restart on later lines of a multi-line target.
    """
    column = match.column
    if match.line == 0:
        column += position.column_count
    return match.model_copy(
        update={
            "from_pos": match.from_pos + position.sentence_offset,
            "to_pos": match.to_pos + position.sentence_offset,
            "line": match.line + position.line_count,
            "end_line": match.end_line + position.line_count,
            "column": column,
        }
    )


def adjust_all_to_stream(
    matches: Iterable[RuleMatch], position: StreamingPosition
) -> list[RuleMatch]:
    return [adjust_to_stream(match, position) for match in matches]

"""Reader for tab-separated bilingual files.

Each input line holds ``source<TAB>target``. The reader keeps running
counters so matches found in a target sentence can be mapped back to the
whole file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from src.models import AlignedPair, StreamingPosition

LOGGER = logging.getLogger(__name__)


class _FileLines:
    """Lines of a text file, read one at a time on every iteration."""

    def __init__(self, path: Path, encoding: str) -> None:
        self.path = path
        self.encoding = encoding

    def __iter__(self) -> Iterator[str]:
        with self.path.open("r", encoding=self.encoding) as handle:
            yield from handle


class TabBitextReader:
    """Yield :class:`AlignedPair` objects from ``source\\ttarget`` lines.

    :attr:`position` is updated before each pair is yielded, so reading it
    inside the loop body always describes the current pair.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = lines
        self._position = StreamingPosition()

    @classmethod
    def from_path(cls, path: Path, *, encoding: str = "utf-8") -> "TabBitextReader":
        """Read ``path`` lazily; the file is opened when iteration starts."""
        return cls(_FileLines(Path(path), encoding))

    @property
    def position(self) -> StreamingPosition:
        return self._position

    def __iter__(self) -> Iterator[AlignedPair]:
        line_start = 0
        for line_number, raw in enumerate(self._lines):
            line = raw.rstrip("\r\n")
            if "\t" not in line:
                if line.strip():
                    LOGGER.warning(
                        "Skipping line %d without a tab separator", line_number + 1
                    )
                line_start += len(line) + 1
                continue
            source, target = line.split("\t", 1)
            target_column = len(source) + 1
            self._position = StreamingPosition(
                sentence_offset=line_start + target_column,
                column_count=target_column,
                line_count=line_number,
                current_line=line,
                target_column_count=target_column,
            )
            yield AlignedPair(source=source, target=target)
            line_start += len(line) + 1

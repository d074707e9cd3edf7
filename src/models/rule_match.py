"""Rule match model shared by the checking, adjusting and correcting code.

A :class:`RuleMatch` is produced by an analysis engine (or a bilingual rule)
and describes a single flagged span together with its diagnostic message and
any suggested replacements. Instances are frozen; code that needs to move a
match to other coordinates builds a copy with :meth:`BaseModel.model_copy`.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RuleMatch(BaseModel):
    """A single flagged span in a text.

    Offsets are half-open code point positions into the text the match was
    computed against. ``line`` and ``end_line`` are 0-based.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    from_pos: int = Field(ge=0)
    to_pos: int = Field(ge=0)
    line: int = 0
    end_line: int = 0
    column: int = 0
    rule_id: str
    message: str = ""
    suggested_replacements: List[str] = Field(default_factory=list)
    url: str | None = None
    sub_id: str | None = None

    @field_validator("rule_id", mode="before")
    def _strip_rule(cls, value: object) -> str:
        result = str(value or "").strip()
        if not result:
            raise ValueError("rule_id must not be empty")
        return result

    @field_validator("suggested_replacements", mode="before")
    def _normalise_replacements(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            # allow a single suggestion as a bare string
            return [value]
        return [str(x) for x in value]

    @model_validator(mode="after")
    def _check_span(self) -> "RuleMatch":
        if self.from_pos > self.to_pos:
            raise ValueError(
                f"from_pos ({self.from_pos}) must not be greater than to_pos ({self.to_pos})"
            )
        return self

    @property
    def length(self) -> int:
        return self.to_pos - self.from_pos

    def shifted_lines(self, offset: int) -> "RuleMatch":
        """Return a copy with ``offset`` added to ``line`` and ``end_line``."""
        if not offset:
            return self
        return self.model_copy(
            update={"line": self.line + offset, "end_line": self.end_line + offset}
        )

"""Rule activation request and the immutable rule registry snapshot."""

from __future__ import annotations

from typing import FrozenSet, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_id_set(value: object) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = [value]
    return frozenset(str(item).strip() for item in value if str(item).strip())


class RuleActivationRequest(BaseModel):
    """Disable/enable lists plus the exclusive-enable flag for one selection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    disabled_ids: FrozenSet[str] = Field(default_factory=frozenset)
    enabled_ids: FrozenSet[str] = Field(default_factory=frozenset)
    exclusive_enable: bool = True

    @field_validator("disabled_ids", "enabled_ids", mode="before")
    def _normalise_ids(cls, value: object) -> FrozenSet[str]:
        return _as_id_set(value)


class RuleRegistry(BaseModel):
    """Snapshot of every known rule id and which of them are active.

    Selecting rules never mutates a registry; it produces a new one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    all_rule_ids: FrozenSet[str] = Field(default_factory=frozenset)
    default_off_ids: FrozenSet[str] = Field(default_factory=frozenset)
    active_ids: FrozenSet[str] = Field(default_factory=frozenset)

    @field_validator("all_rule_ids", "default_off_ids", "active_ids", mode="before")
    def _normalise_ids(cls, value: object) -> FrozenSet[str]:
        return _as_id_set(value)

    @classmethod
    def from_rules(
        cls,
        rule_ids: Iterable[str],
        default_off_ids: Iterable[str] | None = None,
    ) -> "RuleRegistry":
        """Build the default state: every rule active except default-off ones."""
        all_ids = _as_id_set(list(rule_ids))
        off = _as_id_set(list(default_off_ids or [])) & all_ids
        return cls(all_rule_ids=all_ids, default_off_ids=off, active_ids=all_ids - off)

    def is_active(self, rule_id: str) -> bool:
        return rule_id in self.active_ids

    def with_active(self, active_ids: Iterable[str]) -> "RuleRegistry":
        return self.model_copy(update={"active_ids": _as_id_set(list(active_ids))})

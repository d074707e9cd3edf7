"""Resolve which rules are active after a disable/enable request.

The steps run in a fixed order and the order decides the outcome:

1. every id in ``disabled_ids`` is switched off;
2. every id in ``enabled_ids`` is switched on, including rules that are off
   by default;
3. with ``exclusive_enable`` and a non-empty ``enabled_ids``, every other
   registered rule is switched off.

An id that is both disabled and enabled therefore ends up enabled.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, Iterable

from src.models import RuleActivationRequest, RuleRegistry

LOGGER = logging.getLogger(__name__)


def resolve_active_rules(
    active_ids: AbstractSet[str],
    all_rule_ids: AbstractSet[str],
    request: RuleActivationRequest,
) -> frozenset[str]:
    """Return the active id set that results from applying ``request``."""
    active = set(active_ids) - request.disabled_ids
    if request.enabled_ids:
        active |= request.enabled_ids
        if request.exclusive_enable:
            active -= set(all_rule_ids) - request.enabled_ids
    return frozenset(active)


def select_rules(
    registry: RuleRegistry,
    disabled_ids: Iterable[str] = (),
    enabled_ids: Iterable[str] = (),
    exclusive_enable: bool = True,
) -> RuleRegistry:
    """Return a new registry with the requested rules enabled and disabled."""
    request = RuleActivationRequest(
        disabled_ids=list(disabled_ids),
        enabled_ids=list(enabled_ids),
        exclusive_enable=exclusive_enable,
    )
    active = resolve_active_rules(registry.active_ids, registry.all_rule_ids, request)
    unknown = request.enabled_ids - registry.all_rule_ids
    if unknown:
        LOGGER.warning(
            "Enabling %d rule id(s) not in the registry: %s",
            len(unknown),
            ", ".join(sorted(unknown)),
        )
    LOGGER.info(
        "Rule selection: %d of %d rule(s) active", len(active), len(registry.all_rule_ids)
    )
    return registry.with_active(active)


def apply_request_to_tool(tool: Any, request: RuleActivationRequest) -> None:
    """Apply ``request`` to a ``language_tool_python.LanguageTool`` instance.

    LanguageTool cannot list its rules from the client, so exclusivity is
    expressed through ``enabled_rules_only`` rather than by disabling every
    other id. An exclusive request replaces the tool's enabled set, so ids
    enabled by an earlier request stop running.
    """
    disabled = set(getattr(tool, "disabled_rules", None) or set())
    enabled = set(getattr(tool, "enabled_rules", None) or set())

    disabled |= request.disabled_ids
    if request.enabled_ids:
        disabled -= request.enabled_ids
        if request.exclusive_enable:
            enabled = set(request.enabled_ids)
            tool.enabled_rules_only = True
        else:
            enabled |= request.enabled_ids

    tool.disabled_rules = disabled
    tool.enabled_rules = enabled

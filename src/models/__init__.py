"""Public model exports for the project.

Keep the :mod:`src` namespace clean; tests and other modules should import
``from src.models import RuleMatch, StreamingPosition``.
"""

from __future__ import annotations

from .activation import RuleActivationRequest, RuleRegistry
from .bitext import AlignedPair, StreamingPosition
from .profile import ProfileSample, median
from .rule_match import RuleMatch

__all__ = [
    "AlignedPair",
    "ProfileSample",
    "RuleActivationRequest",
    "RuleMatch",
    "RuleRegistry",
    "StreamingPosition",
    "median",
]

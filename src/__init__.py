"""Bitext match engine package."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "match_engine",
    "models",
]

"""Configuration defaults for the match engine.

Module-level constants hold the defaults used across the package.
:func:`load_engine_settings` overlays values from the environment (and an
optional ``.env`` file) for callers that want them configurable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

# Characters of context shown either side of a match in plain-text output.
DEFAULT_CONTEXT_SIZE = 45

# Timed runs per rule when profiling.
PROFILE_RUNS = 10

DEFAULT_LANGUAGE = "en-GB"

# LanguageTool server configuration passed to language_tool_python.
LANGUAGETOOL_CONFIG = {
    "requestLimitPeriodInSeconds": 60,
    "maxCheckTimeMillis": 120000,
}

# Rules disabled on LanguageTool instances unless a request enables them.
DEFAULT_DISABLED_RULES = {
    "WHITESPACE_RULE",
    "CONSECUTIVE_SPACES",
    "SENTENCE_WHITESPACE",
}


@dataclass(frozen=True)
class EngineSettings:
    language: str = DEFAULT_LANGUAGE
    context_size: int = DEFAULT_CONTEXT_SIZE
    profile_runs: int = PROFILE_RUNS
    remote_server: str | None = None


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default
    if value <= 0:
        LOGGER.warning("Ignoring non-positive %s=%d; using %d", name, value, default)
        return default
    return value


def load_engine_settings(dotenv_path: str | Path | None = None) -> EngineSettings:
    """Read engine settings from the environment.

    When ``dotenv_path`` is given that file is loaded first; existing
    environment variables take precedence over values in the file.
    """
    if dotenv_path is not None:
        load_dotenv(dotenv_path=Path(dotenv_path))
    else:
        load_dotenv()

    language = os.environ.get("MATCH_ENGINE_LANGUAGE", "").strip() or DEFAULT_LANGUAGE
    remote = os.environ.get("LANGUAGETOOL_REMOTE_SERVER", "").strip() or None
    return EngineSettings(
        language=language,
        context_size=_read_int("MATCH_ENGINE_CONTEXT_SIZE", DEFAULT_CONTEXT_SIZE),
        profile_runs=_read_int("MATCH_ENGINE_PROFILE_RUNS", PROFILE_RUNS),
        remote_server=remote,
    )

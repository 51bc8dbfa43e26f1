"""Editor configuration and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "TEXT_TIMELINE_"
DEFAULT_MAX_HISTORY = 100
DEFAULT_EDITOR_NAME = "default"


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Settings an embedding application passes to ``Editor``."""

    max_history: int = DEFAULT_MAX_HISTORY
    name: str = DEFAULT_EDITOR_NAME


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        parsed = int(value)
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def default_max_history(environ: Optional[Mapping[str, str]] = None) -> int:
    """Capacity used when callers pass ``0``; honours ``TEXT_TIMELINE_MAX_HISTORY``."""

    env = os.environ if environ is None else environ
    return _env_int(env, "MAX_HISTORY", DEFAULT_MAX_HISTORY)


def resolve_max_history(
    value: Optional[int], *, environ: Optional[Mapping[str, str]] = None
) -> int:
    """Map a requested capacity onto the one the timeline will enforce.

    ``None`` and ``0`` mean "use the default", never "keep no history".
    """

    if value is None or value == 0:
        return default_max_history(environ)
    if value < 0:
        raise ValueError(f"max_history must be non-negative, got {value}.")
    return int(value)


def load_config(environ: Optional[Mapping[str, str]] = None) -> EditorConfig:
    env = os.environ if environ is None else environ
    return EditorConfig(
        max_history=default_max_history(env),
        name=env.get(f"{ENV_PREFIX}EDITOR_NAME") or DEFAULT_EDITOR_NAME,
    )


__all__ = [
    "DEFAULT_MAX_HISTORY",
    "DEFAULT_EDITOR_NAME",
    "EditorConfig",
    "default_max_history",
    "load_config",
    "resolve_max_history",
]

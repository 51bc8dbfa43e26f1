"""telelog wiring for editor and history events.

Edits run inside ``span("editor::<verb>")``; timeline bookkeeping emits
``record_event("history.<what>")`` at debug level. ``configure`` swaps the
active telelog config (``--log-preset`` on the command line ends up here).
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXT_TIMELINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "text_timeline")

PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"min_level": "DEBUG", "console": True, "colored": True},
    "production": {
        "min_level": "INFO",
        "console": False,
        "file": "text_timeline.log",
        "buffered": True,
    },
    "performance": {
        "min_level": "DEBUG",
        "console": False,
        "json": True,
        "file": "text_timeline-performance.log",
        "buffered": True,
    },
}

_LOGGERS: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _env_settings() -> Dict[str, Any]:
    console = not _env_flag("DISABLE_CONSOLE")
    return {
        "min_level": (_env("LOG_LEVEL") or "INFO").upper(),
        "console": console,
        "colored": console and not _env_flag("NO_COLOR"),
        "json": _env_flag("LOG_JSON"),
        "file": _env("LOG_FILE"),
    }


def _build_config(settings: Dict[str, Any]) -> Any:
    config = tl.Config()
    config.with_min_level(settings["min_level"])
    config.with_console_output(settings["console"])
    if settings.get("colored"):
        config.with_colored_output(True)
    if settings.get("json"):
        config.with_json_format(True)
    log_file = _env("LOG_FILE") or settings.get("file")
    if log_file:
        config.with_file_output(log_file)
    if settings.get("buffered"):
        config.with_buffering(True)
    # edit spans rely on logger.profile
    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active config with ``config``, a named preset, or the env defaults."""

    global _config
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")
    if preset:
        settings = PRESETS.get(preset.lower())
        if settings is None:
            raise ValueError(f"Unknown preset '{preset}'.")
        config = _build_config(settings)
    elif config is None:
        config = _build_config(_env_settings())

    _config = config
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGERS:
        if _config is None:
            configure()
        _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _LOGGERS[logger_name]


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    log = get_logger(logger_name)
    pairs = [("event", name)] + [
        (str(key), _stringify(value)) for key, value in (data or {}).items()
    ]
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(f"event::{name}", pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"event::{name} {dict(pairs)}")


@dataclass
class SpanHandle:
    """Metadata collected while an edit span is open."""

    name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: bool = False,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block; ``metadata`` is pushed as logger context meanwhile.

    With ``component=True`` the block is also tracked as a telelog component
    under ``name``. Errors are logged as ``span.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(
        name=name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            record_event(
                "span.fail",
                level="error",
                data={"span": name, **handle.metadata, "reason": exc},
                logger_name=logger_name,
            )
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]

"""Logging and profiling for the engine, on top of telelog.

``configure`` installs settings (from the environment, a named preset or an
explicit ``telelog.Config``), ``get_logger`` hands out cached loggers,
``record_event`` writes one structured line and ``span`` profiles a block of
work such as a buffer transaction or a formatting pass.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MSCL_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "mscl_engine")
DEFAULT_LOG_FILE = "mscl_engine.log"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def env_value(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``MSCL_ENGINE_<name>``."""

    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env_value(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """The subset of telelog options the engine exposes."""

    level: str = DEFAULT_LOG_LEVEL
    console: bool = True
    colored: bool = True
    json: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "TelemetrySettings":
        return cls(
            level=env_value("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
            console=not env_flag("DISABLE_CONSOLE", False),
            colored=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", False),
            log_file=env_value("LOG_FILE") or None,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level.upper())
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        # Spans rely on telelog's profiler being on.
        config.with_profiling(True)
        return config


PRESETS: Dict[str, TelemetrySettings] = {
    "development": TelemetrySettings(level="DEBUG"),
    "quiet": TelemetrySettings(colored=False),
    "file": TelemetrySettings(
        level="DEBUG", console=False, json=True, log_file=DEFAULT_LOG_FILE
    ),
}


def _preset_settings(preset: str) -> TelemetrySettings:
    try:
        settings = PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(f"Unknown telemetry preset '{preset}'.") from None
    if settings.log_file:
        log_file = env_value("LOG_FILE") or settings.log_file
        settings = replace(settings, log_file=log_file)
    return settings


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[TelemetrySettings] = None,
) -> None:
    """Replace the active telelog configuration.

    At most one of ``config`` (a ``telelog.Config``), ``preset`` (a key of
    ``PRESETS``) or ``settings`` may be given; with none of them the
    ``MSCL_ENGINE_LOG_*`` environment decides. Cached loggers are dropped.
    """

    global _ACTIVE_CONFIG
    if sum(option is not None for option in (config, preset, settings)) > 1:
        raise ValueError("Provide only one of `config`, `preset` or `settings`.")

    if config is None:
        if preset is not None:
            settings = _preset_settings(preset)
        config = (settings or TelemetrySettings.from_env()).to_config()
    else:
        config.with_profiling(True)

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = TelemetrySettings.from_env().to_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _log(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(val)) for key, val in fields.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    fields = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects results reported when the block ends."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def _fields(self, **extra: Any) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            fields["component"] = self.component_name
        fields.update(extra)
        return fields

    def note(self, message: str, **extra: Any) -> None:
        _log(self.logger, "debug", f"span::{message}", self._fields(**extra))

    def fail(self, reason: str) -> None:
        _log(self.logger, "error", "span::fail", self._fields(reason=reason))


@contextmanager
def _logger_context(logger: Any, values: Dict[str, str]) -> Iterator[None]:
    for key, value in values.items():
        logger.add_context(key, value)
    try:
        yield
    finally:
        for key in values:
            logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the enclosed block under ``name``.

    ``component`` tracks the block as a telelog component: ``True`` uses
    ``name``, a string names it. ``metadata`` is attached as logger context
    for the duration of the block. An exception escaping the block is logged
    through ``SpanHandle.fail`` and re-raised.
    """

    logger = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=logger,
        span_name=name,
        component_name=component_name,
        metadata=dict(context),
    )

    with ExitStack() as stack:
        stack.enter_context(_logger_context(logger, context))
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "env_flag",
    "env_value",
    "get_logger",
    "logger",
    "record_event",
    "span",
]

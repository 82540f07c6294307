#!/usr/bin/env python3
"""Process-wide configuration for the logger hierarchy.

Two switches are shared by every logger in the process:

- ``hierarchical_logging_enabled``: in global mode (the default) every attached
  logger filters against the root's level and only the emitting logger's own
  subscribers receive its records. In hierarchical mode each logger may hold
  its own level, inherited by descendants, and records bubble up to every
  ancestor's subscribers.
- ``record_stack_trace_at_level``: records at or above this level capture the
  current call stack when the caller did not supply one. ``OFF`` disables
  capture.

Environment variables (read once, at import):
    HIERLOG_HIERARCHICAL: "true"/"1"/"yes" to start in hierarchical mode
    HIERLOG_STACK_TRACE_LEVEL: level name or rank for stack-trace capture
    HIERLOG_ROOT_LEVEL: initial level of the root logger
    HIERLOG_DIAGNOSTICS: "true" to let the library's own loguru diagnostics through
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Final

import attrs
from loguru import logger

from hierlog.level import INFO, OFF, Level

__all__ = [
    "DEFAULT_LEVEL",
    "INITIAL_ROOT_LEVEL",
    "LoggingSettings",
    "configured",
    "enable_diagnostics",
    "settings",
]

# Level used by the root and by detached loggers until one is set explicitly
DEFAULT_LEVEL: Final = INFO


def _parse_bool_env(env_var: str, default: bool) -> bool:
    """Parse boolean from environment variable with fallback to default.

    Args:
        env_var: Environment variable name to check
        default: Default value if env var not set

    Returns:
        Boolean value from environment or default
    """
    env_value = os.getenv(env_var)
    if env_value is None:
        return default
    return env_value.strip().lower() in ("true", "1", "yes")


def _parse_level_env(env_var: str, default: Level) -> Level:
    """Parse a level name or rank from the environment, falling back to default."""
    env_value = os.getenv(env_var)
    if not env_value:
        return default
    try:
        return Level.parse(env_value)
    except ValueError:
        logger.warning(f"Ignoring {env_var}={env_value!r}: not a level name or rank, using {default}")
        return default


def enable_diagnostics(enabled: bool = True) -> None:
    """Let the library's internal loguru diagnostics through (or silence them)."""
    if enabled:
        logger.enable("hierlog")
    else:
        logger.disable("hierlog")


def _log_change(instance: LoggingSettings, attribute: attrs.Attribute, value: Any) -> Any:
    if getattr(instance, attribute.name, value) != value:
        logger.debug(f"{attribute.name} -> {value}")
    return value


ENV_HIERARCHICAL: Final = _parse_bool_env("HIERLOG_HIERARCHICAL", False)
ENV_STACK_TRACE_LEVEL: Final = _parse_level_env("HIERLOG_STACK_TRACE_LEVEL", OFF)
INITIAL_ROOT_LEVEL: Final = _parse_level_env("HIERLOG_ROOT_LEVEL", DEFAULT_LEVEL)


@attrs.define
class LoggingSettings:
    """Mutable process-wide switches.

    ``record_stack_trace_at_level`` accepts anything ``Level.parse`` does, so
    ``settings.record_stack_trace_at_level = "warn"`` works.
    """

    hierarchical_logging_enabled: bool = attrs.field(
        default=ENV_HIERARCHICAL,
        converter=bool,
        on_setattr=attrs.setters.pipe(attrs.setters.convert, _log_change),
    )
    record_stack_trace_at_level: Level = attrs.field(
        default=ENV_STACK_TRACE_LEVEL,
        converter=Level.parse,
        on_setattr=attrs.setters.pipe(attrs.setters.convert, _log_change),
    )

    def update(self, **kwargs: Any) -> None:
        """Update several settings at once.

        Example:
            settings.update(hierarchical_logging_enabled=True, record_stack_trace_at_level="WARN")
        """
        unknown = [key for key in kwargs if not hasattr(self, key)]
        if unknown:
            raise AttributeError(f"Unknown logging settings: {unknown}")
        for key, value in kwargs.items():
            setattr(self, key, value)

    def snapshot(self) -> dict[str, Any]:
        return attrs.asdict(self, recurse=False)

    def reset(self) -> None:
        """Restore the environment-derived defaults."""
        self.update(
            hierarchical_logging_enabled=ENV_HIERARCHICAL,
            record_stack_trace_at_level=ENV_STACK_TRACE_LEVEL,
        )


settings = LoggingSettings()


@contextmanager
def configured(**overrides: Any) -> Iterator[LoggingSettings]:
    """Temporarily apply settings overrides, restoring the previous values on exit.

    Example:
        with configured(hierarchical_logging_enabled=True):
            get_logger("a.b").level = DEBUG
    """
    previous = settings.snapshot()
    settings.update(**overrides)
    try:
        yield settings
    finally:
        settings.update(**previous)


# Libraries stay quiet unless the host application opts in
enable_diagnostics(_parse_bool_env("HIERLOG_DIAGNOSTICS", False))

#!/usr/bin/env python3
"""Severity levels.

A ``Level`` is a named rank. Ordering, equality and hashing all use the rank
only, so two levels with different names but the same rank are interchangeable
(``Level("A", 5) == Level("B", 5)``) both in comparisons and as mapping keys.

Predefined scale, ascending::

    ALL(0) < VERBOSE(300) < DEBUG(500) < INFO(800) < WARN(900) < ERROR(1200) < OFF(2000)

Custom levels may use any rank; keep them between ``ALL`` and ``OFF`` so the
two special levels keep their meaning.
"""

from __future__ import annotations

from typing import Final

import attrs

__all__ = [
    "ALL",
    "DEBUG",
    "ERROR",
    "INFO",
    "LEVELS",
    "OFF",
    "VERBOSE",
    "WARN",
    "Level",
]


@attrs.define(frozen=True, order=True)
class Level:
    """An immutable, totally ordered severity tag."""

    name: str = attrs.field(eq=False, order=False)
    rank: int = attrs.field()

    def __str__(self) -> str:
        return self.name

    def __int__(self) -> int:
        return self.rank

    @classmethod
    def parse(cls, value: Level | str | int) -> Level:
        """Resolve a level from a Level, a predefined level name or a rank.

        Args:
            value: Level instance, case-insensitive predefined name ("warn"),
                or integer rank. Ranks that match a predefined level return that
                constant; any other rank yields an anonymous custom level.

        Returns:
            The matching Level

        Raises:
            ValueError: If a name does not match any predefined level
        """
        if isinstance(value, Level):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid level: {value!r}")
        if isinstance(value, int):
            return _BY_RANK.get(value) or cls(f"Level {value}", value)

        text = str(value).strip()
        if text.lstrip("-").isdigit():
            return cls.parse(int(text))
        try:
            return _BY_NAME[text.upper()]
        except KeyError:
            valid_levels = [level.name for level in LEVELS]
            raise ValueError(f"Invalid log level: {value!r}. Valid levels are: {valid_levels}") from None


# Special key to turn on logging for all levels
ALL: Final = Level("ALL", 0)

# Key for highly detailed tracing
VERBOSE: Final = Level("VERBOSE", 300)

# Key for tracing information
DEBUG: Final = Level("DEBUG", 500)

# Key for informational messages
INFO: Final = Level("INFO", 800)

# Key for potential problems
WARN: Final = Level("WARN", 900)

# Key for serious failures
ERROR: Final = Level("ERROR", 1200)

# Special key to turn off all logging
OFF: Final = Level("OFF", 2000)

LEVELS: Final[tuple[Level, ...]] = (ALL, VERBOSE, DEBUG, INFO, WARN, ERROR, OFF)

_BY_NAME: Final[dict[str, Level]] = {level.name: level for level in LEVELS} | {"WARNING": WARN}
_BY_RANK: Final[dict[int, Level]] = {level.rank: level for level in LEVELS}

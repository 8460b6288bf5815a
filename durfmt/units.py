"""Time unit table for durfmt.

Units are ordered from finest to coarsest. Every unit knows how many
nanoseconds it spans, how many of it make up the next coarser unit, and the
suffix it is displayed with.
"""

from enum import Enum
from typing import Any

# Time unit constants (all values in nanoseconds)
NANOSECOND = 1
MICROSECOND = 1000
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


class TimeUnit(Enum):
    NANOSECONDS = (0, NANOSECOND, 1000, "ns")
    MICROSECONDS = (1, MICROSECOND, 1000, "μs")
    MILLISECONDS = (2, MILLISECOND, 1000, "ms")
    SECONDS = (3, SECOND, 60, "s")
    MINUTES = (4, MINUTE, 60, "m")
    HOURS = (5, HOUR, 24, "h")
    DAYS = (6, DAY, None, "d")

    def __init__(self, index: int, nanos: int, ratio: int | None, suffix: str):
        self.index: int = index
        self.nanos: int = nanos
        # Number of this unit in the next coarser one; DAYS is the coarsest
        self.ratio: int | None = ratio
        self.suffix: str = suffix

    def to_nanos(self, amount: int) -> int:
        """Convert an amount of this unit to nanoseconds."""
        return amount * self.nanos

    def __str__(self) -> str:
        return self.suffix

    def __repr__(self) -> str:
        return f"TimeUnit.{self.name}"


# Finest to coarsest, indexable by TimeUnit.index
UNITS: tuple[TimeUnit, ...] = tuple(TimeUnit)

_ALIASES: dict[str, TimeUnit] = {}
for _unit in TimeUnit:
    _ALIASES[_unit.suffix] = _unit
    _ALIASES[_unit.name.lower()] = _unit
    _ALIASES[_unit.name.lower()[:-1]] = _unit
_ALIASES["us"] = TimeUnit.MICROSECONDS


def coerce_unit(unit: Any, option: str = "unit") -> TimeUnit:
    """Resolve a TimeUnit from a member, a display suffix, or a unit name.

    Accepts:
    - TimeUnit: returned as-is
    - str: a suffix ("ms", "μs", or "us"), or a unit name in singular or
      plural form, case-insensitive ("seconds", "Minute")

    Raises:
        ValueError: If the string names no known unit
        TypeError: If unit is neither a TimeUnit nor a string
    """
    if isinstance(unit, TimeUnit):
        return unit
    if isinstance(unit, str):
        key = unit.strip()
        resolved = _ALIASES.get(key) or _ALIASES.get(key.lower())
        if resolved is None:
            valid = ", ".join(u.suffix for u in TimeUnit)
            raise ValueError(
                f"Unknown time unit for {option}: {unit!r}\n"
                f"Valid suffixes: {valid}\n"
                f"Unit names such as 'seconds' or 'minute' are accepted too."
            )
        return resolved
    raise TypeError(
        f"{option} must be a TimeUnit or a unit name.\n"
        f"Got {type(unit).__name__!r}: {unit!r}\n"
        f"Examples:\n"
        f"  TimeUnit.MILLISECONDS\n"
        f"  'ms'  # display suffix\n"
        f"  'milliseconds'  # unit name"
    )

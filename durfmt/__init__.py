from datetime import timedelta
from importlib.resources import files
from typing import Any

from .core import DurationFormat
from .units import (
    DAY,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    TimeUnit,
    coerce_unit,
)


def format_duration(
    amount: int | timedelta, unit: TimeUnit | str | None = None, **options: Any
) -> str:
    """Format a duration with a one-off formatter built from keyword options.

    Example:
        >>> format_duration(5_586_486_000_000, level_count=3)
        '93 m 6 s 486 ms'
    """
    return DurationFormat(**options).format(amount, unit)


# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(encoding="utf-8"),
    "api": (_docs_path / "API.md").read_text(encoding="utf-8"),
}

__all__ = [
    "DurationFormat",
    "TimeUnit",
    "coerce_unit",
    "format_duration",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "docs",
]

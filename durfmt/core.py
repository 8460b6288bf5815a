import logging
from datetime import timedelta
from typing import Any

from typing_extensions import Self

from durfmt.units import MICROSECOND, MILLISECOND, SECOND, UNITS, TimeUnit, coerce_unit

_LOGGER = logging.getLogger(__name__)

# Upper-exclusive nanosecond bounds for automatic primary unit selection.
# Seconds, minutes and hours run up to 100 before rolling over.
_AUTO_THRESHOLDS: tuple[tuple[int, TimeUnit], ...] = (
    (10 * MICROSECOND, TimeUnit.NANOSECONDS),
    (10 * MILLISECOND, TimeUnit.MICROSECONDS),
    (10 * SECOND, TimeUnit.MILLISECONDS),
    (100 * SECOND, TimeUnit.SECONDS),
    (100 * TimeUnit.MINUTES.nanos, TimeUnit.MINUTES),
    (100 * TimeUnit.HOURS.nanos, TimeUnit.HOURS),
)


def _auto_unit(nanos: int) -> TimeUnit:
    for bound, unit in _AUTO_THRESHOLDS:
        if nanos < bound:
            return unit
    return TimeUnit.DAYS


def _coerce_flag(flag: Any, option: str) -> bool:
    if not isinstance(flag, bool):
        raise TypeError(
            f"{option} must be a bool.\n"
            f"Got {type(flag).__name__!r}: {flag!r}"
        )
    return flag


def _coerce_level(level: Any) -> int:
    if isinstance(level, bool) or not isinstance(level, int):
        raise TypeError(
            f"level_count must be an int.\n"
            f"Got {type(level).__name__!r}: {level!r}"
        )
    if level <= 0:
        raise ValueError(f"level_count must be positive, got {level}")
    return level


def _coerce_optional_unit(unit: Any, option: str) -> TimeUnit | None:
    if unit is None:
        return None
    return coerce_unit(unit, option)


def _coerce_amount(amount: Any, unit: Any) -> int:
    """Convert a format input to a non-negative count of nanoseconds.

    Accepts:
    - int: nanoseconds, or an amount of `unit` when one is given
    - timedelta: converted exactly; `unit` must be omitted

    Raises:
        TypeError: If amount is an unsupported type, or a timedelta is
            combined with a unit
        ValueError: If the duration is negative
    """
    if isinstance(amount, timedelta):
        if unit is not None:
            raise TypeError(
                f"A timedelta already carries its unit; got unit={unit!r}.\n"
                f"Hint: call format(delta) without a unit."
            )
        nanos = (
            (amount.days * 86400 + amount.seconds) * SECOND
            + amount.microseconds * MICROSECOND
        )
    elif isinstance(amount, int) and not isinstance(amount, bool):
        nanos = amount if unit is None else coerce_unit(unit).to_nanos(amount)
    else:
        raise TypeError(
            f"Duration must be an int or a timedelta.\n"
            f"Got {type(amount).__name__!r}: {amount!r}\n"
            f"Examples:\n"
            f"  fmt.format(1_500_000)  # int nanoseconds\n"
            f"  fmt.format(90, TimeUnit.SECONDS)  # int amount of a unit\n"
            f"  fmt.format(timedelta(minutes=3))  # timedelta"
        )
    if nanos < 0:
        raise ValueError(f"Duration must be non-negative, got {nanos} ns")
    return nanos


class DurationFormat:
    """Format durations as compact strings such as ``13 s 499 μs``.

    The first field shown is the primary time unit. When `primary_unit` is
    None it is selected per input from the magnitude of the duration. The
    last field is limited by `level_count`, the maximum number of
    consecutive units shown, and by `lowest_unit`, the finest unit allowed.

    Zero fields before the first non-zero one are dropped when
    `drop_leading_zeroes` is set, unless every field is zero, in which case
    the last field is printed. Zero fields after the first non-zero one are
    dropped when `drop_inner_zeroes` is set.

    Setters mutate the formatter and return it, so configuration chains:

        >>> fmt = DurationFormat().set_level_count(3)
        >>> fmt.format(13_000_499_000)
        '13 s 499 μs'
    """

    def __init__(
        self,
        *,
        primary_unit: TimeUnit | str | None = None,
        lowest_unit: TimeUnit | str | None = None,
        level_count: int = 1,
        drop_leading_zeroes: bool = True,
        drop_inner_zeroes: bool = True,
    ):
        self._primary_unit: TimeUnit | None = _coerce_optional_unit(
            primary_unit, "primary_unit"
        )
        self._lowest_unit: TimeUnit | None = _coerce_optional_unit(
            lowest_unit, "lowest_unit"
        )
        self._level_count: int = _coerce_level(level_count)
        self._drop_leading_zeroes: bool = _coerce_flag(
            drop_leading_zeroes, "drop_leading_zeroes"
        )
        self._drop_inner_zeroes: bool = _coerce_flag(
            drop_inner_zeroes, "drop_inner_zeroes"
        )

    @property
    def primary_unit(self) -> TimeUnit | None:
        """The configured primary unit, or None when selected automatically."""
        return self._primary_unit

    @property
    def lowest_unit(self) -> TimeUnit | None:
        return self._lowest_unit

    @property
    def level_count(self) -> int:
        return self._level_count

    @property
    def drop_leading_zeroes(self) -> bool:
        return self._drop_leading_zeroes

    @property
    def drop_inner_zeroes(self) -> bool:
        return self._drop_inner_zeroes

    def get_primary_unit(self) -> TimeUnit | None:
        return self._primary_unit

    def set_drop_inner_zeroes(self, flag: bool) -> Self:
        """Drop zero fields after the first non-zero one (default True)."""
        self._drop_inner_zeroes = _coerce_flag(flag, "drop_inner_zeroes")
        _LOGGER.debug("drop_inner_zeroes set to %s", flag)
        return self

    def set_drop_leading_zeroes(self, flag: bool) -> Self:
        """Drop zero fields before the first non-zero one (default True).

        The last field is kept even when zero, so the output is never empty.
        """
        self._drop_leading_zeroes = _coerce_flag(flag, "drop_leading_zeroes")
        _LOGGER.debug("drop_leading_zeroes set to %s", flag)
        return self

    def set_primary_unit(self, unit: TimeUnit | str | None) -> Self:
        """Fix the leading unit, or pass None to select it per input."""
        self._primary_unit = _coerce_optional_unit(unit, "primary_unit")
        _LOGGER.debug("primary_unit set to %s", self._primary_unit)
        return self

    def set_lowest_unit(self, unit: TimeUnit | str | None) -> Self:
        """Set the finest unit to display; None leaves only level_count."""
        self._lowest_unit = _coerce_optional_unit(unit, "lowest_unit")
        _LOGGER.debug("lowest_unit set to %s", self._lowest_unit)
        return self

    def set_level_count(self, level: int) -> Self:
        """Set the maximum number of consecutive units to display.

        With seconds as the primary unit, 2300 ms reads "2 s 300 ms" at
        level 2 and "2 s" at level 1.

        Raises:
            ValueError: If level is not positive
        """
        self._level_count = _coerce_level(level)
        _LOGGER.debug("level_count set to %d", level)
        return self

    def replace(self, **changes: Any) -> "DurationFormat":
        """Return an independent copy with the given options changed."""
        options: dict[str, Any] = {
            "primary_unit": self._primary_unit,
            "lowest_unit": self._lowest_unit,
            "level_count": self._level_count,
            "drop_leading_zeroes": self._drop_leading_zeroes,
            "drop_inner_zeroes": self._drop_inner_zeroes,
        }
        unknown = set(changes) - set(options)
        if unknown:
            raise TypeError(
                f"Unknown DurationFormat option(s): {', '.join(sorted(unknown))}\n"
                f"Valid options: {', '.join(options)}"
            )
        options.update(changes)
        return DurationFormat(**options)

    def _unit_range(self, nanos: int) -> tuple[int, int]:
        """Return (main_index, last_index) of the units displayed for nanos."""
        if self._primary_unit is None:
            main_index = _auto_unit(nanos).index
        else:
            main_index = self._primary_unit.index
        last_index = max(0, main_index - self._level_count + 1)

        if self._lowest_unit is not None:
            lowest_index = self._lowest_unit.index
            if self._primary_unit is None and main_index < lowest_index:
                # Too short to reach the lowest unit; show that unit alone
                _LOGGER.debug(
                    "%d ns is below lowest unit %s", nanos, self._lowest_unit
                )
                main_index = last_index = lowest_index
            else:
                last_index = max(last_index, min(lowest_index, main_index))

        if last_index > main_index:
            raise AssertionError(
                f"Inconsistent unit range: time={nanos}, "
                f"main_index={main_index}, last_index={last_index}"
            )
        return main_index, last_index

    @staticmethod
    def _rounded_count(nanos: int, last_index: int) -> int:
        """Count of the lowest displayed unit, rounded half up."""
        unit_nanos = UNITS[last_index].nanos
        count, remainder = divmod(nanos, unit_nanos)
        if last_index > 0 and remainder >= unit_nanos // 2:
            count += 1
        return count

    def _decompose(self, nanos: int) -> list[tuple[int, TimeUnit]]:
        main_index, last_index = self._unit_range(nanos)
        carry = self._rounded_count(nanos, last_index)

        values: list[int] = []
        for index in range(last_index, main_index):
            carry, value = divmod(carry, UNITS[index].ratio)  # pyright: ignore[reportArgumentType]
            values.append(value)
        # The primary unit keeps the whole quotient, e.g. "1500 ms"
        values.append(carry)

        return [
            (value, UNITS[index])
            for index, value in reversed(list(enumerate(values, start=last_index)))
        ]

    def fields(
        self, amount: int | timedelta, unit: TimeUnit | str | None = None
    ) -> list[tuple[int, TimeUnit]]:
        """Return every (value, unit) field in range, coarsest first.

        Zero fields are included; `format` decides which of them to print.
        """
        return self._decompose(_coerce_amount(amount, unit))

    def format(
        self, amount: int | timedelta, unit: TimeUnit | str | None = None
    ) -> str:
        """Format a duration.

        Args:
            amount: Nanoseconds, an amount of `unit`, or a timedelta
            unit: Time unit of an int amount; defaults to nanoseconds

        Returns:
            The formatted string, e.g. "93 m 6 s 486 ms"
        """
        fields = self.fields(amount, unit)
        parts: list[str] = []
        has_non_zero = False
        for position, (value, field_unit) in enumerate(fields):
            is_last = position == len(fields) - 1
            if has_non_zero:
                show = value > 0 or not self._drop_inner_zeroes
            else:
                show = value > 0 or not self._drop_leading_zeroes or is_last
            if show:
                parts.append(f"{value} {field_unit.suffix}")
            has_non_zero = has_non_zero or value > 0
        return " ".join(parts)

    def is_displayed_as_zero(
        self, amount: int | timedelta, unit: TimeUnit | str | None = None
    ) -> bool:
        """Return True if formatting the duration would show only zero fields."""
        nanos = _coerce_amount(amount, unit)
        _, last_index = self._unit_range(nanos)
        return self._rounded_count(nanos, last_index) == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DurationFormat):
            return NotImplemented
        return self._options() == other._options()

    def _options(self) -> tuple[Any, ...]:
        return (
            self._primary_unit,
            self._lowest_unit,
            self._level_count,
            self._drop_leading_zeroes,
            self._drop_inner_zeroes,
        )

    def __repr__(self) -> str:
        return (
            f"DurationFormat(primary_unit={self._primary_unit!r}, "
            f"lowest_unit={self._lowest_unit!r}, "
            f"level_count={self._level_count}, "
            f"drop_leading_zeroes={self._drop_leading_zeroes}, "
            f"drop_inner_zeroes={self._drop_inner_zeroes})"
        )

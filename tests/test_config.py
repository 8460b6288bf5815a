import logging

import pytest

from durfmt import DurationFormat, TimeUnit, docs


def test_defaults():
    fmt = DurationFormat()

    assert fmt.primary_unit is None
    assert fmt.get_primary_unit() is None
    assert fmt.lowest_unit is None
    assert fmt.level_count == 1
    assert fmt.drop_leading_zeroes is True
    assert fmt.drop_inner_zeroes is True


def test_setters_return_same_instance():
    fmt = DurationFormat()

    assert fmt.set_drop_inner_zeroes(False) is fmt
    assert fmt.set_drop_leading_zeroes(False) is fmt
    assert fmt.set_primary_unit(TimeUnit.SECONDS) is fmt
    assert fmt.set_lowest_unit(TimeUnit.MILLISECONDS) is fmt
    assert fmt.set_level_count(2) is fmt

    assert fmt == DurationFormat(
        primary_unit=TimeUnit.SECONDS,
        lowest_unit=TimeUnit.MILLISECONDS,
        level_count=2,
        drop_leading_zeroes=False,
        drop_inner_zeroes=False,
    )


def test_units_accept_names_and_suffixes():
    fmt = DurationFormat(primary_unit="seconds", lowest_unit="μs")

    assert fmt.get_primary_unit() is TimeUnit.SECONDS
    assert fmt.lowest_unit is TimeUnit.MICROSECONDS

    fmt.set_primary_unit(None).set_lowest_unit("Minute")
    assert fmt.primary_unit is None
    assert fmt.lowest_unit is TimeUnit.MINUTES


def test_level_count_must_be_positive():
    fmt = DurationFormat()

    with pytest.raises(ValueError, match="level_count must be positive, got 0"):
        fmt.set_level_count(0)
    with pytest.raises(ValueError, match="level_count must be positive, got -2"):
        fmt.set_level_count(-2)
    with pytest.raises(ValueError, match="level_count must be positive"):
        DurationFormat(level_count=0)
    with pytest.raises(TypeError, match="level_count must be an int"):
        fmt.set_level_count(2.0)  # pyright: ignore[reportArgumentType]

    # A rejected level leaves the previous value in place
    assert fmt.level_count == 1


def test_invalid_options_are_rejected():
    fmt = DurationFormat()

    with pytest.raises(TypeError, match="drop_inner_zeroes must be a bool"):
        fmt.set_drop_inner_zeroes(0)  # pyright: ignore[reportArgumentType]
    with pytest.raises(TypeError, match="drop_leading_zeroes must be a bool"):
        DurationFormat(drop_leading_zeroes="yes")  # pyright: ignore[reportArgumentType]
    with pytest.raises(TypeError, match="primary_unit must be a TimeUnit"):
        fmt.set_primary_unit(3)  # pyright: ignore[reportArgumentType]
    with pytest.raises(ValueError, match="Unknown time unit for lowest_unit"):
        fmt.set_lowest_unit("weeks")


def test_replace_returns_independent_copy():
    base = DurationFormat(level_count=3)
    copy = base.replace(primary_unit=TimeUnit.MILLISECONDS)

    assert copy is not base
    assert copy.level_count == 3
    assert copy.primary_unit is TimeUnit.MILLISECONDS
    assert base.primary_unit is None

    copy.set_level_count(1)
    assert base.level_count == 3

    with pytest.raises(TypeError, match="Unknown DurationFormat option"):
        base.replace(levels=2)
    with pytest.raises(ValueError, match="level_count must be positive"):
        base.replace(level_count=0)


def test_repr_and_equality():
    fmt = DurationFormat(primary_unit=TimeUnit.SECONDS)

    assert repr(fmt) == (
        "DurationFormat(primary_unit=TimeUnit.SECONDS, lowest_unit=None, "
        "level_count=1, drop_leading_zeroes=True, drop_inner_zeroes=True)"
    )
    assert fmt == DurationFormat(primary_unit="s")
    assert fmt != DurationFormat()
    assert fmt != "DurationFormat"


def test_setters_log_changes(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="durfmt.core")

    DurationFormat().set_level_count(3).set_primary_unit("ms")

    assert "level_count set to 3" in caplog.text
    assert "primary_unit set to ms" in caplog.text


def test_packaged_docs_are_loaded():
    assert "durfmt" in docs["readme"]
    assert "is_displayed_as_zero" in docs["api"]

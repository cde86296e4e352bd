# dates.py - calendar arithmetic for date tick scales
# Copyright (C) 2020 Jochen Voss <voss@seehuhn.de>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

"""Calendar Units
--------------

Dates are :py:class:`datetime.datetime` objects, either naive or with
a time zone attached.  Durations are expressed as a number of a single
:py:class:`DateUnit`.

Days, months and years follow the wall clock: adding one day to
midnight gives midnight of the next day, even if a daylight saving
change makes that day 23 or 25 hours long.  Hours and smaller units
follow the elapsed time.

Differences between dates are returned as exact
:py:class:`fractions.Fraction` objects.

"""

from collections import namedtuple
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from fractions import Fraction
import math

from dateutil.relativedelta import relativedelta

from . import errors
from .scale import to_fraction


class DateUnit(IntEnum):
    MILLISECOND = 0
    SECOND = 1
    MINUTE = 2
    HOUR = 3
    DAY = 4
    MONTH = 5
    YEAR = 6


UNITS_ASC = list(DateUnit)

# nominal unit lengths in milliseconds, using the mean Gregorian year
UNIT_MS = {
    DateUnit.MILLISECOND: 1,
    DateUnit.SECOND: 1000,
    DateUnit.MINUTE: 60 * 1000,
    DateUnit.HOUR: 60 * 60 * 1000,
    DateUnit.DAY: 24 * 60 * 60 * 1000,
    DateUnit.MONTH: 2629746000,
    DateUnit.YEAR: 31556952000,
}

UNIT_RADIX = {
    DateUnit.SECOND: 60,
    DateUnit.MINUTE: 60,
    DateUnit.HOUR: 24,
    DateUnit.MONTH: 12,
}

UNIT_EXCLUDED_FACTORS = {
    DateUnit.SECOND: (3, 4, 6, 12, 20),
    DateUnit.MINUTE: (3, 4, 6, 12, 20),
    DateUnit.HOUR: (2, 4, 8),
}

_MICROSECOND = timedelta(microseconds=1)
_FUDGE = Fraction(1, 10**9)


def check_unit(unit):
    """Convert `unit` into a :py:class:`DateUnit`.

    Unit names like ``"day"`` are accepted, independent of case.

    """
    if isinstance(unit, DateUnit):
        return unit
    try:
        if isinstance(unit, str):
            return DateUnit[unit.upper()]
        return DateUnit(unit)
    except (KeyError, ValueError):
        raise errors.WrongUsage("invalid date unit %r" % (unit,)) from None


def larger_unit(unit):
    """Get the next larger unit, or ``None`` for years."""
    unit = check_unit(unit)
    if unit == DateUnit.YEAR:
        return None
    return DateUnit(unit + 1)


def smaller_unit(unit):
    """Get the next smaller unit, or ``None`` for milliseconds."""
    unit = check_unit(unit)
    if unit == DateUnit.MILLISECOND:
        return None
    return DateUnit(unit - 1)


def compare_units(a, b):
    """Compare two units.

    The result is positive if `a` is larger than `b`, zero if the
    units are the same and negative if `a` is smaller than `b`.

    """
    return int(check_unit(a)) - int(check_unit(b))


class DateDuration(namedtuple('DateDuration', ['value', 'unit'])):

    """A duration, given as a number of calendar units.

    `value` can be fractional, for example ``DateDuration(0.5, 'day')``.

    """

    __slots__ = ()

    def __new__(cls, value, unit=DateUnit.MILLISECOND):
        return super().__new__(cls, value, check_unit(unit))

    def milliseconds(self):
        """The nominal length of the duration in milliseconds."""
        return to_fraction(self.value) * UNIT_MS[self.unit]

    def as_unit(self, unit):
        """Convert to a different unit, using nominal unit lengths."""
        unit = check_unit(unit)
        return DateDuration(self.milliseconds() / UNIT_MS[unit], unit)


def as_duration(x):
    """Convert a :py:class:`datetime.timedelta` into a :py:class:`DateDuration`.

    DateDuration objects are returned unchanged.

    """
    if isinstance(x, DateDuration):
        return x
    if isinstance(x, timedelta):
        return DateDuration(Fraction(x // _MICROSECOND, 1000),
                            DateUnit.MILLISECOND)
    raise errors.WrongUsage("invalid duration %r" % (x,))


def _utc(date):
    if date.tzinfo is None:
        return date
    return date.astimezone(timezone.utc)


def _elapsed_us(date, origin):
    """Elapsed time from `origin` to `date`, in microseconds."""
    return (_utc(date) - _utc(origin)) // _MICROSECOND


def _add_elapsed(date, microseconds):
    delta = timedelta(microseconds=microseconds)
    if date.tzinfo is None:
        return date + delta
    return (_utc(date) + delta).astimezone(date.tzinfo)


def _normalize(date):
    """Move wall clock times which do not exist to a valid time."""
    if date.tzinfo is None:
        return date
    return _utc(date).astimezone(date.tzinfo)


def _same_zone(date, origin):
    if date.tzinfo is None or origin.tzinfo is None:
        return date
    if date.tzinfo is origin.tzinfo:
        return date
    return date.astimezone(origin.tzinfo)


def add_units(date, n, unit):
    """Add a whole number `n` of units to `date`.

    Month ends are clamped, so that adding one month to January 31st
    gives the last day of February.

    """
    unit = check_unit(unit)
    n = int(n)
    if unit < DateUnit.DAY:
        return _add_elapsed(date, n * UNIT_MS[unit] * 1000)
    if unit == DateUnit.DAY:
        return _normalize(date + timedelta(days=n))
    if unit == DateUnit.MONTH:
        return _normalize(date + relativedelta(months=n))
    return _normalize(date + relativedelta(years=n))


def diff_units(date, origin, unit):
    """Count the whole units from `origin` to `date`.

    The result is truncated towards zero, so that
    ``add_units(origin, diff_units(date, origin, unit), unit)`` never
    passes `date`.

    """
    unit = check_unit(unit)
    if unit < DateUnit.DAY:
        us = _elapsed_us(date, origin)
        n = abs(us) // (UNIT_MS[unit] * 1000)
        return n if us >= 0 else -n

    date = _same_zone(date, origin)
    wall_date = date.replace(tzinfo=None)
    wall_origin = origin.replace(tzinfo=None)
    if unit == DateUnit.DAY:
        wall = wall_date - wall_origin
        n = abs(wall) // timedelta(days=1)
        if wall < timedelta(0):
            n = -n
    else:
        delta = relativedelta(wall_date, wall_origin)
        if unit == DateUnit.MONTH:
            n = delta.years * 12 + delta.months
        else:
            n = delta.years

    # add_units moves wall clock times inside a DST gap forward
    if n > 0 and add_units(origin, n, unit) > date:
        n -= 1
    elif n < 0 and add_units(origin, n, unit) < date:
        n += 1
    return n


def date_interval_length(origin, date, unit):
    """Get the signed length from `origin` to `date`, in units of `unit`.

    Whole units are counted using calendar arithmetic.  The remainder
    is measured as a fraction of the actual calendar unit which follows
    the last whole unit, so that a month is not assumed to have a fixed
    number of days.  For units smaller than a day, whole calendar days
    are counted first.

    Returns:
        A :py:class:`fractions.Fraction`.

    """
    unit = check_unit(unit)
    res = Fraction(0)
    if unit < DateUnit.DAY:
        days = diff_units(date, origin, DateUnit.DAY)
        if days:
            origin = add_units(origin, days, DateUnit.DAY)
            res += days * Fraction(UNIT_MS[DateUnit.DAY], UNIT_MS[unit])

    n = diff_units(date, origin, unit)
    res += n
    start = add_units(origin, n, unit)
    partial = _elapsed_us(date, start)
    if partial > 0:
        length = _elapsed_us(add_units(start, 1, unit), start)
        res += Fraction(partial, length)
    elif partial < 0:
        length = _elapsed_us(start, add_units(start, -1, unit))
        res += Fraction(partial, length)
    return res


def _trunc(x):
    return math.floor(x) if x > 0 else math.ceil(x)


def step_date_linear(date, steps, unit):
    """Advance `date` by `steps` units.

    `steps` can be fractional and negative.  Whole units are stepped
    using calendar arithmetic, the remaining fraction is interpolated
    linearly within the following (or, for negative steps, preceding)
    calendar unit.  This is the inverse of
    :py:func:`date_interval_length`.

    """
    unit = check_unit(unit)
    steps = to_fraction(steps)
    if abs(steps) > 1:
        if unit < DateUnit.DAY:
            ratio = Fraction(UNIT_MS[DateUnit.DAY], UNIT_MS[unit])
            days = _trunc(steps / ratio)
            if days:
                date = add_units(date, days, DateUnit.DAY)
                steps -= days * ratio
        whole = _trunc(steps)
        date = add_units(date, whole, unit)
        steps -= whole

    if steps == 0:
        return date
    if steps > 0:
        return interpolated_date(date, add_units(date, 1, unit), steps)
    return interpolated_date(date, add_units(date, -1, unit), -steps)


def interpolated_date(date1, date2, position):
    """Interpolate linearly between two dates.

    A `position` of 0 gives `date1`, a position of 1 gives `date2`.
    The result is rounded to whole microseconds.

    """
    length = _elapsed_us(date2, date1)
    offset = round(to_fraction(position) * length)
    return _add_elapsed(date1, offset)


def start_of(date, unit):
    """Truncate `date` to the start of the enclosing `unit`."""
    unit = check_unit(unit)
    if unit == DateUnit.MILLISECOND:
        return date.replace(microsecond=date.microsecond // 1000 * 1000)
    fields = {'microsecond': 0}
    if unit >= DateUnit.MINUTE:
        fields['second'] = 0
    if unit >= DateUnit.HOUR:
        fields['minute'] = 0
    if unit >= DateUnit.DAY:
        fields['hour'] = 0
        fields['fold'] = 0
    if unit >= DateUnit.MONTH:
        fields['day'] = 1
    if unit >= DateUnit.YEAR:
        fields['month'] = 1
    return _normalize(date.replace(**fields))


def round_date_linear(date, unit):
    """Round `date` to the nearest start of a `unit`."""
    return start_of(step_date_linear(date, Fraction(1, 2), unit), unit)


def _round_half_up(x):
    return math.floor(x + Fraction(1, 2))


def _rounding_origin(date, unit):
    if unit < DateUnit.SECOND:
        return start_of(date, DateUnit.SECOND)
    if unit < DateUnit.DAY:
        return start_of(date, DateUnit.DAY)
    return start_of(date, DateUnit.YEAR)


def round_date(date, value, unit, origin_date=None, method=_round_half_up):
    """Round `date` to a multiple of `value` units.

    Multiples are counted in calendar periods from `origin_date`.
    Without an origin, multiples of milliseconds are counted from the
    start of the second, multiples of seconds, minutes and hours from
    the start of the day, and multiples of days and months from the
    start of the year.  Years are rounded using the year number, so
    that decades start at multiples of ten.

    Args:
        date (datetime): the date to round.
        value (number): the positive rounding multiple.
        unit (DateUnit): the unit of `value`.
        origin_date (datetime, optional): the origin for counting periods.
        method (function): maps a number of periods to an integer,
            e.g. :py:func:`math.floor` or :py:func:`math.ceil`.

    """
    unit = check_unit(unit)
    value = to_fraction(value)
    if value <= 0:
        raise errors.WrongUsage("rounding value must be positive")

    if unit == DateUnit.YEAR and origin_date is None:
        year_start = start_of(date, DateUnit.YEAR)
        year = date.year + date_interval_length(year_start, date, unit)
        year = _round_periods(year / value, method) * value
        return step_date_linear(year_start, year - date.year, unit)

    if origin_date is None:
        origin_date = _rounding_origin(date, unit)
    periods = date_interval_length(origin_date, date, unit) / value
    return step_date_linear(origin_date,
                            _round_periods(periods, method) * value, unit)


def _round_periods(periods, method):
    nearest = _round_half_up(periods)
    if abs(periods - nearest) < _FUDGE:
        return nearest
    return method(periods)


def floor_date(date, value, unit, origin_date=None):
    """Round `date` down to a multiple of `value` units.

    See :py:func:`round_date`.

    """
    if value == 1 and origin_date is None:
        return start_of(date, unit)
    return round_date(date, value, unit, origin_date, method=math.floor)


def ceil_date(date, value, unit, origin_date=None):
    """Round `date` up to a multiple of `value` units.

    See :py:func:`round_date`.

    """
    floor = floor_date(date, value, unit, origin_date)
    if floor == date:
        return floor
    return step_date_linear(floor, value, unit)


def snap_date(date, unit):
    """Remove small rounding errors from `date`.

    If rounding `date` to the nearest `unit` and to the nearest
    next-smaller unit give the same result, the rounded date is
    returned.  Otherwise `date` is returned unchanged.

    """
    smaller = smaller_unit(unit)
    if smaller is None:
        return date
    rounded = round_date_linear(date, unit)
    if rounded == round_date_linear(date, smaller):
        return rounded
    return date


def is_naive(date):
    return date.tzinfo is None or date.utcoffset() is None


def epoch(tzinfo=None):
    """Midnight on 1970-01-01, as a wall clock time in `tzinfo`."""
    return datetime(1970, 1, 1, tzinfo=tzinfo)

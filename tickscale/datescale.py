# datescale.py - tick scales for date axes
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

"""Date Tick Scales
----------------

A :py:class:`DateScale` places ticks on calendar boundaries: whole
seconds, quarter hours, midnights, first days of months, decades and
so on.  Locations are measured in the `base_unit` of the scale,
counted from `origin_date`.

"""

from datetime import datetime, timedelta
from fractions import Fraction
import logging
import math

from . import dates
from . import errors
from . import param
from .dates import DateDuration, DateUnit, UNIT_MS
from .linear import LinearScale
from .scale import Scale, TickInterval, TickScale, TickVector
from .scale import min_interval_parts, to_fraction

_log = logging.getLogger(__name__)


class DateScale(Scale):

    """A tick scale for :py:class:`datetime.datetime` values.

    Tick intervals are :py:class:`tickscale.dates.DateDuration`
    objects.  Where a :py:class:`TickInterval` value is expected in
    the constraints, :py:class:`datetime.timedelta` objects can be
    used, too.

    Args:
        minor_tick_depth (int): the number of minor tick levels.
        constraints (dict, optional): default constraints.
        base_unit (DateUnit or str): a duration of one `base_unit`
            has length 1 in location space.
        origin_date (datetime, optional): the date at location 0.
            The default is midnight on 1970-01-01 in `tzinfo`.
        tzinfo (datetime.tzinfo, optional): the time zone of the
            default origin and of the empty scale.  Use ``None`` for
            naive dates.
        min_unit_duration (float): the smallest number of units
            in the minimum interval for which a unit is used for
            placing ticks.  Smaller values give larger intervals.

    """

    def __init__(self, minor_tick_depth=0, constraints=None,
                 base_unit=DateUnit.DAY, origin_date=None, tzinfo=None,
                 min_unit_duration=0.6):
        self.base_unit = dates.check_unit(base_unit)
        if origin_date is None:
            origin_date = dates.epoch(tzinfo)
        elif not isinstance(origin_date, datetime):
            msg = "invalid origin date %r" % (origin_date,)
            raise errors.WrongUsage(msg)
        self.origin_date = origin_date
        self.tzinfo = tzinfo
        if not min_unit_duration > 0:
            raise errors.WrongUsage("minimum unit duration must be positive")
        self.min_unit_duration = min_unit_duration
        self.linear_scale = LinearScale()

        # whole units of any size have at most this denominator in base units
        self.max_step_fraction_denominator = max(
            Scale.max_step_fraction_denominator, UNIT_MS[self.base_unit])

        super().__init__(minor_tick_depth, constraints)

    def empty_value(self):
        return dates.epoch(self.tzinfo)

    def empty_value_interval(self):
        return DateDuration(0, self.base_unit)

    def get_tick_scale(self, start, end, constraints=None):
        self._check_dates(start, end)
        if end <= start:
            return self.empty_scale()

        constraints = param.update(self.constraints, constraints)

        min_ms = Fraction(0)
        min_value, min_location = min_interval_parts(
            constraints['min_interval'])
        if min_value is not None:
            try:
                ms = dates.as_duration(min_value).milliseconds()
            except (errors.WrongUsage, TypeError):
                msg = "invalid minimum duration %r" % (min_value,)
                raise errors.InvalidConstraints(msg) from None
            if ms < 0:
                raise errors.InvalidConstraints(
                    "minimum duration must be non-negative")
            min_ms = max(min_ms, ms)
        if min_location is not None:
            try:
                loc = to_fraction(min_location)
            except (TypeError, ValueError, OverflowError):
                msg = "invalid minimum interval %r" % (min_location,)
                raise errors.InvalidConstraints(msg) from None
            if loc < 0:
                raise errors.InvalidConstraints(
                    "minimum interval must be non-negative")
            min_ms = max(min_ms, loc * UNIT_MS[self.base_unit])

        max_count = param.check_max_count(constraints['max_count'])
        if max_count is not None:
            if max_count == 0:
                return self.empty_scale()
            length = dates.date_interval_length(start, end, self.base_unit)
            min_ms = max(min_ms, length / to_fraction(max_count)
                         * UNIT_MS[self.base_unit])

        if min_ms <= 0:
            raise errors.InvalidConstraints(
                "must specify either a minimum interval "
                "or a maximum interval count")

        durations = {unit: min_ms / UNIT_MS[unit] for unit in dates.UNITS_ASC}
        working_unit = DateUnit.MILLISECOND
        for unit in reversed(dates.UNITS_ASC):
            if durations[unit] >= self.min_unit_duration:
                working_unit = unit
                break
        _log.debug("minimum duration %.6g ms, trying %s first",
                   min_ms, working_unit.name.lower())

        if working_unit == DateUnit.MILLISECOND \
           and self.base_unit == DateUnit.MILLISECOND:
            return self._millisecond_scale(start, end, min_ms,
                                           constraints['expand'])

        best = None
        best_count = -1
        for unit in dates.UNITS_ASC[working_unit:]:
            min_interval = durations[unit]
            if unit > working_unit or unit == DateUnit.MILLISECOND:
                # only whole units above the working unit, and never
                # fractions of a millisecond
                min_interval = max(min_interval, 1)
            unit_constraints = {
                'min_interval': TickInterval(min_interval),
                'radix': dates.UNIT_RADIX.get(unit, 10),
                'exclude_factors': dates.UNIT_EXCLUDED_FACTORS.get(unit, ()),
                'expand': constraints['expand'],
            }
            tick_start = self._encode_date(dates.snap_date(start, unit), unit)
            tick_end = self._encode_date(dates.snap_date(end, unit), unit)
            scale = self.linear_scale.get_tick_scale(tick_start, tick_end,
                                                     unit_constraints)
            if scale.interval.location == 0:
                continue
            count = _count_ticks(scale, tick_start, tick_end)
            if count > best_count:
                best, best_count = (scale, unit), count
            if count >= 2:
                break

        if best is None:
            return self.empty_scale()
        scale, unit = best
        _log.debug("using %s ticks, %d in range", unit.name.lower(),
                   best_count)
        return self._date_scale(scale, unit)

    def _check_dates(self, start, end):
        for date in (start, end):
            if not isinstance(date, datetime):
                raise errors.InvalidInterval(
                    "invalid interval end point %r" % (date,))
        naive = dates.is_naive(self.origin_date)
        if dates.is_naive(start) != naive or dates.is_naive(end) != naive:
            raise errors.InvalidInterval(
                "cannot mix naive and time zone aware dates")

    def _encode_date(self, date, unit):
        return dates.date_interval_length(self.origin_date, date, unit)

    def _millisecond_scale(self, start, end, min_ms, expand):
        ms_start = self._encode_date(start, DateUnit.MILLISECOND)
        ms_end = self._encode_date(end, DateUnit.MILLISECOND)
        scale = self.linear_scale.get_tick_scale(ms_start, ms_end, {
            'min_interval': TickInterval(location=max(1, min_ms)),
            'expand': expand,
        })
        if scale.interval.location == 0:
            return self.empty_scale()
        origin = dates.step_date_linear(self.origin_date, scale.origin.value,
                                        DateUnit.MILLISECOND)
        return TickScale(
            TickVector(origin, float(scale.origin.location)),
            TickInterval(DateDuration(scale.interval.value,
                                      DateUnit.MILLISECOND),
                         float(scale.interval.location)))

    def _date_scale(self, scale, unit):
        """Convert a tick scale for unit counts into a date tick scale."""
        value = scale.interval.value
        origin = dates.step_date_linear(self.origin_date, scale.origin.value,
                                        unit)
        if unit == self.base_unit:
            location = float(value)
            origin_location = float(scale.origin.value)
        else:
            coef = Fraction(UNIT_MS[unit], UNIT_MS[self.base_unit])
            location = float(to_fraction(value) * coef)
            origin_location = self.snap_location(
                float(coef * to_fraction(scale.origin.value)),
                origin=0, interval=location)
        return TickScale(TickVector(origin, origin_location),
                         TickInterval(DateDuration(value, unit), location))

    def add_interval_to_value(self, value, interval):
        interval = dates.as_duration(interval)
        return dates.step_date_linear(value, interval.value, interval.unit)

    def floor_value(self, value):
        interval = dates.as_duration(self.tick_scale.interval.value)
        return dates.floor_date(value, interval.value, interval.unit,
                                origin_date=self.tick_scale.origin.value)

    def location_of_value(self, value):
        origin = self.tick_scale.origin
        interval = dates.as_duration(self.tick_scale.interval.value)
        steps = dates.date_interval_length(origin.value, value, interval.unit)
        steps /= to_fraction(interval.value)
        return float(self.step_location(origin.location, steps))

    def value_at_location(self, location):
        origin = self.tick_scale.origin
        interval = dates.as_duration(self.tick_scale.interval.value)
        steps = to_fraction(location) - to_fraction(origin.location)
        steps /= to_fraction(self.tick_scale.interval.location)
        steps *= to_fraction(interval.value)
        return dates.step_date_linear(origin.value, steps, interval.unit)

    def is_value(self, value):
        return isinstance(value, datetime)

    def is_interval(self, interval):
        return isinstance(interval, (DateDuration, timedelta))

    def is_value_equal(self, a, b):
        return a == b

    def compare_values(self, a, b):
        """The signed difference ``a - b``, measured in base units."""
        return dates.date_interval_length(b, a, self.base_unit)

    def is_interval_equal(self, a, b):
        a = dates.as_duration(a).milliseconds()
        b = dates.as_duration(b).milliseconds()
        return a == b


def _count_ticks(scale, start, end):
    """Count the ticks of a numeric tick scale inside [start, end]."""
    origin = to_fraction(scale.origin.value)
    interval = to_fraction(scale.interval.value)
    first = math.ceil((to_fraction(start) - origin) / interval)
    last = math.floor((to_fraction(end) - origin) / interval)
    return max(0, last - first + 1)

# datescale_test.py - unit tests for datescale.py
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

from datetime import datetime, timedelta
from fractions import Fraction
import math
import zoneinfo

import pytest

from . import errors
from .dates import DateDuration, DateUnit
from .datescale import DateScale
from .scale import TickInterval, TickScale, TickVector

NZ = zoneinfo.ZoneInfo('Pacific/Auckland')


def test_defaults():
    s = DateScale()
    assert s.base_unit == DateUnit.DAY
    assert s.origin_date == datetime(1970, 1, 1)
    assert s.is_tick_scale_equal(s.tick_scale, s.empty_scale())
    assert s.empty_value() == datetime(1970, 1, 1)
    assert s.empty_scale().interval.value == DateDuration(0, 'day')

    s = DateScale(tzinfo=NZ, base_unit='hour')
    assert s.origin_date == datetime(1970, 1, 1, tzinfo=NZ)
    assert s.empty_value().tzinfo is NZ

    with pytest.raises(errors.WrongUsage):
        DateScale(base_unit='fortnight')
    with pytest.raises(errors.WrongUsage):
        DateScale(origin_date='2020-01-01')

def test_daily_ticks():
    s = DateScale()
    start = datetime(2020, 6, 1)
    end = datetime(2020, 7, 1)
    ticks = s.get_ticks(start, end, {'max_count': 30})
    assert len(ticks) == 31
    assert s.tick_scale.interval.value == DateDuration(1, 'day')
    for i, t in enumerate(ticks):
        assert t.value == datetime(2020, 6, 1) + timedelta(days=i)
        assert t.location == pytest.approx(ticks[0].location + i)

def test_daily_ticks_dst():
    s = DateScale(tzinfo=NZ)
    start = datetime(2020, 4, 1, tzinfo=NZ)
    end = datetime(2020, 5, 1, tzinfo=NZ)
    ticks = s.get_ticks(start, end, {'max_count': 30})
    assert len(ticks) == 31
    for i, t in enumerate(ticks):
        assert t.value.replace(tzinfo=None) == \
            datetime(2020, 4, 1) + timedelta(days=i)
        assert (t.value.hour, t.value.minute) == (0, 0)
    for t0, t1 in zip(ticks[:-1], ticks[1:]):
        assert t1.location - t0.location == pytest.approx(1)

def test_location_round_trip():
    s = DateScale(origin_date=datetime(2020, 1, 1))
    s.tick_scale = TickScale(TickVector(datetime(2020, 1, 1), 0),
                             TickInterval(DateDuration(12, 'hour'), 0.5))
    date = datetime(2020, 1, 2, 12)
    assert s.location_of_value(date) == 1.5
    assert s.value_at_location(1.5) == date

    s.tick_scale = TickScale(TickVector(datetime(2020, 1, 1), 0),
                             TickInterval(DateDuration(0.5, 'day'), 0.5))
    assert s.location_of_value(date) == 1.5
    assert s.value_at_location(1.5) == date

def test_hourly_ticks():
    s = DateScale()
    start = datetime(2020, 1, 11, 12)
    end = datetime(2020, 1, 11, 18)
    s.update_tick_scale(start, end, {'max_count': 5})
    assert s.tick_scale.interval.value == DateDuration(3, 'hour')
    assert s.tick_scale.interval.location == pytest.approx(0.125)
    ticks = s.get_ticks_in_value_range(start, end)
    assert [t.value.hour for t in ticks] == [12, 15]
    origin = s.location_of_value(datetime(2020, 1, 11))
    assert [t.location - origin for t in ticks] == \
        pytest.approx([0.5, 0.625])
    for t in ticks:
        assert s.value_at_location(t.location) == t.value

def test_decades():
    s = DateScale(base_unit='year')
    ticks = s.get_ticks(datetime(1900, 1, 1), datetime(2000, 1, 1),
                        {'max_count': 10})
    assert [t.value.year for t in ticks] == list(range(1900, 2001, 10))
    assert [t.location for t in ticks] == \
        pytest.approx(list(range(-70, 31, 10)))

def test_months():
    s = DateScale()
    ticks = s.get_ticks(datetime(2021, 1, 1), datetime(2022, 1, 1),
                        {'max_count': 6})
    assert s.tick_scale.interval.value == DateDuration(2, 'month')
    assert [t.value for t in ticks] == \
        [datetime(2021, m, 1) for m in range(1, 13, 2)] + \
        [datetime(2022, 1, 1)]
    assert ticks[1].location - ticks[0].location == pytest.approx(60.87375)

def test_minutes():
    s = DateScale(base_unit='minute')
    c = {'min_interval': TickInterval(location=7)}
    ticks = s.get_ticks(datetime(2020, 1, 1, 10), datetime(2020, 1, 1, 11), c)
    assert s.tick_scale.interval.value == DateDuration(10, 'minute')
    assert [t.value.minute for t in ticks] == [0, 10, 20, 30, 40, 50, 0]

    c['expand'] = True
    ticks = s.get_ticks(datetime(2020, 1, 1, 10, 3),
                        datetime(2020, 1, 1, 11, 2), c)
    assert s.tick_scale.interval.value == DateDuration(10, 'minute')
    assert [t.value.minute for t in ticks] == [0, 10, 20, 30, 40, 50, 0, 10]

def test_min_duration():
    s = DateScale()
    start = datetime(2020, 1, 1)
    end = datetime(2020, 1, 2)
    c = {'min_interval': TickInterval(timedelta(hours=5))}
    s.update_tick_scale(start, end, c)
    assert s.tick_scale.interval.value == DateDuration(6, 'hour')

    c = {'min_interval': TickInterval(DateDuration(5, 'hour'))}
    s.update_tick_scale(start, end, c)
    assert s.tick_scale.interval.value == DateDuration(6, 'hour')

def test_milliseconds():
    origin = datetime(2020, 1, 1)
    s = DateScale(base_unit='millisecond', origin_date=origin)
    start = origin + timedelta(milliseconds=1)
    end = origin + timedelta(milliseconds=9)
    ticks = s.get_ticks(start, end, {'max_count': 4})
    assert s.tick_scale.interval.value == DateDuration(2, 'millisecond')
    assert [t.location for t in ticks] == [2, 4, 6, 8]
    assert [t.value for t in ticks] == \
        [origin + timedelta(milliseconds=k) for k in [2, 4, 6, 8]]

def test_compare_values():
    s = DateScale()
    a = datetime(2020, 1, 2, 12)
    b = datetime(2020, 1, 1)
    assert s.compare_values(a, b) == 1.5
    assert s.compare_values(b, a) == -1.5
    assert s.is_value_equal(a, a)
    assert not s.is_value_equal(a, a.replace(tzinfo=NZ))
    assert s.is_interval_equal(DateDuration(1, 'day'), timedelta(days=1))
    assert not s.is_interval_equal(DateDuration(1, 'day'),
                                   DateDuration(1, 'hour'))

def test_update_tick_scale():
    s = DateScale()
    start = datetime(2020, 6, 1)
    end = datetime(2020, 7, 1)
    assert s.update_tick_scale(start, end, {'max_count': 5})
    assert not s.update_tick_scale(start, end, {'max_count': 5})
    assert s.update_tick_scale(end, start, {'max_count': 5})
    assert s.tick_scale.interval.location == 0
    assert s.get_ticks(start, start, {'max_count': 5}) == []

def test_minor_ticks():
    minor = [{'max_count': 2}]
    s = DateScale(minor_tick_depth=1,
                  constraints={'minor_tick_constraints': minor})
    s.update_tick_scale(datetime(2021, 1, 1), datetime(2022, 1, 1),
                        {'max_count': 6})
    assert s.tick_scale.interval.value == DateDuration(2, 'month')
    minor_scale = s.minor_tick_scales[0]
    assert minor_scale.interval.value == DateDuration(1, 'month')
    assert minor_scale.origin.value == datetime(2021, 1, 1)
    assert minor_scale.interval.location < s.tick_scale.interval.location

def test_invalid():
    s = DateScale()
    c = {'max_count': 5}
    with pytest.raises(errors.InvalidInterval):
        s.get_tick_scale(0, 1, c)
    with pytest.raises(errors.InvalidInterval):
        s.get_tick_scale(datetime(2020, 1, 1),
                         datetime(2020, 2, 1, tzinfo=NZ), c)
    with pytest.raises(errors.InvalidConstraints):
        s.get_tick_scale(datetime(2020, 1, 1), datetime(2020, 2, 1))
    with pytest.raises(errors.InvalidConstraints):
        s.get_tick_scale(datetime(2020, 1, 1), datetime(2020, 2, 1),
                         {'max_count': -1})
    with pytest.raises(errors.InvalidConstraints):
        s.get_tick_scale(datetime(2020, 1, 1), datetime(2020, 2, 1),
                         {'min_interval': TickInterval('a day')})
    with pytest.raises(errors.InvalidConstraints):
        s.get_tick_scale(datetime(2020, 1, 1), datetime(2020, 2, 1),
                         {'min_interval': TickInterval(location=math.nan)})
    empty = s.get_tick_scale(datetime(2020, 1, 1), datetime(2020, 2, 1),
                             {'max_count': 0})
    assert empty.interval.location == 0

def test_first_update_builds_minor_ticks():
    minor = [{'max_count': 4}]
    s = DateScale(minor_tick_depth=1,
                  constraints={'minor_tick_constraints': minor})
    assert s.tick_scale.interval.location == 0
    assert s.update_tick_scale(datetime(1970, 1, 1), datetime(1970, 1, 6),
                               {'max_count': 5})
    assert s.tick_scale.interval.value == DateDuration(1, 'day')
    assert s.tick_scale.origin == (datetime(1970, 1, 1), 0)
    minor_scale = s.minor_tick_scales[0]
    assert minor_scale.interval.value == DateDuration(6, 'hour')
    assert minor_scale.interval.location == 0.25

def test_seconds_on_day_base():
    s = DateScale()
    start = datetime(2020, 1, 1, 10)
    ticks = s.get_ticks(start, datetime(2020, 1, 1, 10, 1), {'max_count': 6})
    assert s.tick_scale.interval.value == DateDuration(10, 'second')
    assert s.tick_scale.interval.location == float(Fraction(1, 8640))
    assert [t.value for t in ticks] == \
        [start + timedelta(seconds=10 * k) for k in range(7)]
    origin = 18262 + Fraction(10, 24)
    assert [t.location for t in ticks] == pytest.approx(
        [float(origin + Fraction(k, 8640)) for k in range(7)], abs=1e-9)

def test_milliseconds_on_day_base():
    s = DateScale()
    start = datetime(2020, 1, 1, 10)
    end = start + timedelta(milliseconds=5)
    ticks = s.get_ticks(start, end, {'max_count': 50})
    assert s.tick_scale.interval.value == DateDuration(1, 'millisecond')
    assert s.tick_scale.interval.location == float(Fraction(1, 86400000))
    assert [t.value for t in ticks] == \
        [start + timedelta(milliseconds=k) for k in range(6)]

def test_location_independent_of_unit():
    s = DateScale()
    date = datetime(2020, 1, 1, 10, 30)
    expected = float(18262 + Fraction(21, 48))

    s.update_tick_scale(datetime(2020, 1, 1, 10), datetime(2020, 1, 1, 11),
                        {'max_count': 6})
    assert s.tick_scale.interval.value == DateDuration(10, 'minute')
    assert s.tick_scale.interval.location == float(Fraction(1, 144))
    assert s.location_of_value(date) == pytest.approx(expected, abs=1e-9)

    s.update_tick_scale(datetime(2020, 1, 1, 10), datetime(2020, 1, 1, 16),
                        {'max_count': 6})
    assert s.tick_scale.interval.value == DateDuration(1, 'hour')
    assert s.location_of_value(date) == pytest.approx(expected, abs=1e-9)

#! /usr/bin/env python3
# scale.py - common code for axis tick scales
# Copyright (C) 2019-2020 Jochen Voss <voss@seehuhn.de>
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

"""The Scale base class
--------------------

A scale maps domain values (numbers, dates, ...) to locations on a
real number line and knows how to place "nice" ticks on that line.
The current tick placement is described by a :py:class:`TickScale`,
which consists of the location of one tick (the origin) and the
distance between neighbouring ticks (the interval).

Concrete scales are implemented in :py:mod:`tickscale.linear`,
:py:mod:`tickscale.discrete` and :py:mod:`tickscale.datescale`.

"""

from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction
import logging
import math
import numbers

import numpy as np

from . import errors
from . import param

_log = logging.getLogger(__name__)

TickVector = namedtuple('TickVector', ['value', 'location'])
TickVector.__doc__ = """A domain value together with its location."""

TickInterval = namedtuple('TickInterval', ['value', 'location'],
                          defaults=[None, None])
TickInterval.__doc__ = """A step between two ticks.

`value` is the step in the value domain, `location` is the length of
the step in location space.  For the ``min_interval`` constraint,
either field can be left as ``None``.

"""

TickScale = namedtuple('TickScale', ['origin', 'interval'])
TickScale.__doc__ = """Tick positions, given by one tick and the tick spacing.

A scale with ``interval.location == 0`` is empty and produces no ticks.

"""


def to_decimal(x):
    """Convert a number to a :py:class:`decimal.Decimal`.

    Floats are converted via their shortest string representation, so
    that ``to_decimal(0.1) == Decimal('0.1')``.

    """
    if isinstance(x, Decimal):
        return x
    if isinstance(x, numbers.Integral):
        return Decimal(int(x))
    if isinstance(x, Fraction):
        return Decimal(x.numerator) / Decimal(x.denominator)
    if isinstance(x, numbers.Real):
        return Decimal(str(float(x)))
    raise TypeError("%r is not a number" % (x,))


def to_fraction(x):
    """Convert a number to an exact :py:class:`fractions.Fraction`."""
    if isinstance(x, Fraction):
        return x
    return Fraction(to_decimal(x))


def min_interval_parts(min_interval):
    """Split the ``min_interval`` constraint into value and location."""
    if min_interval is None:
        return None, None
    if isinstance(min_interval, TickInterval):
        return min_interval.value, min_interval.location
    try:
        return min_interval.get('value'), min_interval.get('location')
    except AttributeError:
        msg = "invalid minimum interval %r" % (min_interval,)
        raise errors.InvalidConstraints(msg) from None


class Scale:

    """Base class for tick scales.

    Call :py:meth:`update_tick_scale` to initialise and to update the
    scale.  Subclasses implement the value specific parts:
    :py:meth:`get_tick_scale`, :py:meth:`add_interval_to_value`,
    :py:meth:`floor_value`, :py:meth:`location_of_value`,
    :py:meth:`value_at_location`, the type checks and comparisons.

    Args:
        minor_tick_depth (int): the number of minor tick levels.  A
            depth of 1 creates a single minor tick scale, which
            subdivides the intervals of the main scale.
        constraints (dict, optional): default constraints, merged with
            the constraints of every tick scale calculation.  See
            :py:mod:`tickscale.param`.

    """

    max_step_fraction_denominator = 1000

    def __init__(self, minor_tick_depth=0, constraints=None):
        self.constraints = param.merge(constraints)
        self.minor_tick_scales = []
        self._minor_tick_depth = 0
        self.minor_tick_depth = minor_tick_depth or 0
        self.tick_scale = self.empty_scale()

    @property
    def minor_tick_depth(self):
        return self._minor_tick_depth

    @minor_tick_depth.setter
    def minor_tick_depth(self, depth):
        if depth < 0:
            raise errors.WrongUsage("negative minor tick depth %d" % depth)
        if depth == self._minor_tick_depth:
            return
        self._minor_tick_depth = depth
        del self.minor_tick_scales[depth:]
        while len(self.minor_tick_scales) < depth:
            self.minor_tick_scales.append(self.empty_scale())

    def empty_value(self):
        """A zero value, used for the origin of the empty scale."""
        raise NotImplementedError()

    def empty_value_interval(self):
        """A zero interval, used for the empty scale."""
        raise NotImplementedError()

    def empty_scale(self):
        return TickScale(TickVector(self.empty_value(), 0),
                         TickInterval(self.empty_value_interval(), 0))

    def get_tick_scale(self, start, end, constraints=None):
        """Calculate the best tick scale for a value range.

        Args:
            start: the inclusive start of the value range.
            end: the inclusive end of the value range.
            constraints (dict, optional): constraints, merged on top of
                the scale's own constraints.

        Returns:
            A :py:class:`TickScale`.  The empty scale is returned if
            the range is empty.

        """
        raise NotImplementedError()

    def update_tick_scale(self, start, end, constraints=None):
        """Recalculate the tick scale for a new value range.

        The minor tick scales are recalculated whenever the main
        scale changes.

        Returns:
            ``True`` if the tick scale has changed, ``False`` if it is
            unchanged.

        """
        scale = self.get_tick_scale(start, end, constraints)
        if self.is_tick_scale_equal(scale, self.tick_scale):
            return False
        _log.debug("%s: tick scale changed to %s",
                   type(self).__name__, scale)
        self.tick_scale = scale
        self._update_minor_tick_scales(param.merge(self.constraints,
                                                   constraints))
        return True

    def _update_minor_tick_scales(self, constraints):
        scale = self.tick_scale
        minor_scales = []
        for level in range(self.minor_tick_depth):
            if scale.interval.location == 0:
                scale = self.empty_scale()
            else:
                start = scale.origin.value
                end = self.add_interval_to_value(start, scale.interval.value)
                scale = self.get_tick_scale(
                    start, end, param.minor_constraints(constraints, level))
            minor_scales.append(scale)
        self.minor_tick_scales[:] = minor_scales

    def iterate_tick_values_in_range(self, start, end):
        """Iterate over all tick values in the range [start, end).

        You must call :py:meth:`update_tick_scale` to use this method.

        """
        if self.compare_values(start, end) >= 0:
            return
        if self.tick_scale.interval.location <= 0:
            return

        value = self.floor_value(start)
        while self.compare_values(value, end) < 0:
            if self.compare_values(value, start) >= 0:
                yield value
            next_value = self.next_value(value)
            if self.is_value_equal(next_value, value):
                raise errors.InternalInvariantViolation(
                    "could not get next value after %r" % (value,))
            value = next_value

    def get_ticks_in_value_range(self, start, end):
        """Get all ticks in the value range [start, end).

        Returns:
            A list of :py:class:`TickVector` objects, in increasing
            order.

        """
        if self.compare_values(start, end) >= 0:
            return []
        if self.tick_scale.interval.location <= 0:
            return []

        value = self.floor_value(start)
        tick = TickVector(value, self.location_of_value(value))
        ticks = []
        while self.compare_values(tick.value, end) < 0:
            if self.compare_values(tick.value, start) >= 0:
                ticks.append(tick)
            next_tick = self.next_tick(tick)
            if self.is_value_equal(next_tick.value, tick.value):
                raise errors.InternalInvariantViolation(
                    "could not get next tick after %r" % (tick,))
            tick = next_tick
        return ticks

    def get_ticks_in_location_range(self, start, end):
        """Get all ticks in the location range [start, end)."""
        return self.get_ticks_in_value_range(self.value_at_location(start),
                                             self.value_at_location(end))

    def count_ticks_in_value_range(self, start, end):
        return sum(1 for _ in self.iterate_tick_values_in_range(start, end))

    def get_ticks(self, start, end, constraints=None):
        """Update the tick scale and get the ticks covering [start, end].

        Unlike :py:meth:`get_ticks_in_value_range`, the tick at `end`
        is included.  If ``expand`` is set, the range is first extended
        to whole intervals.

        """
        self.update_tick_scale(start, end, constraints)
        expand = param.update(self.constraints, constraints)['expand']
        if expand and self.tick_scale.interval.location > 0:
            start, end = self.span_value_range(start, end)
        ticks = self.get_ticks_in_value_range(start, end)

        # add the closing tick
        if ticks and self.tick_scale.interval.location > 0:
            end_tick = self.next_tick(ticks[-1])
            if self.compare_values(end_tick.value, end) <= 0:
                ticks.append(end_tick)
        return ticks

    def get_tick_locations(self, start, end, constraints=None):
        """Like :py:meth:`get_ticks`, but only return the locations.

        Returns:
            A numpy array of tick locations.

        """
        ticks = self.get_ticks(start, end, constraints)
        return np.array([float(t.location) for t in ticks])

    def next_tick(self, tick):
        return TickVector(self.next_value(tick.value),
                          self.next_location(tick.location))

    def add_interval_to_value(self, value, interval):
        raise NotImplementedError()

    def next_value(self, value):
        """Add one interval to `value`."""
        return self.add_interval_to_value(value, self.tick_scale.interval.value)

    def next_location(self, location):
        """Add one interval to `location`.

        See :py:meth:`snap_location` for the rounding applied.

        """
        return self.snap_location(location + self.tick_scale.interval.location)

    def step_location(self, location, steps):
        """Add `steps` intervals to `location`."""
        return self.snap_location(
            location + steps * self.tick_scale.interval.location)

    def snap_location(self, location, origin=None, interval=None):
        """Remove rounding errors from a location.

        If the interval is a fraction, e.g. 1/60, repeatedly adding
        it accumulates rounding errors.  Whenever `location` is a
        whole number of intervals away from the origin and that number
        of steps is a multiple of the interval's denominator, the
        distance to the origin must be an integer and is rounded
        accordingly.  Denominators are limited to
        :py:attr:`max_step_fraction_denominator`.

        Args:
            location: the location to snap.
            origin (optional): origin location to use instead of the
                tick scale origin.
            interval (optional): interval location to use instead of
                the tick scale interval.

        """
        if origin is None:
            origin = self.tick_scale.origin.location
        if interval is None:
            interval = self.tick_scale.interval.location

        x = to_decimal(location)
        interval = to_decimal(interval)
        origin = to_decimal(origin)
        if _is_int(x) or _is_int(interval) or x == origin:
            return location

        dist = x - origin
        steps = (dist / interval).to_integral_value(ROUND_HALF_UP)
        fraction = Fraction(interval).limit_denominator(
            self.max_step_fraction_denominator)
        if steps % fraction.denominator == 0:
            dist = dist.to_integral_value(ROUND_HALF_UP)
        res = origin + dist
        if isinstance(location, Decimal):
            return res
        return float(res)

    def floor_value(self, value):
        """Round `value` down to the nearest tick."""
        raise NotImplementedError()

    def ceil_value(self, value):
        """Round `value` up to the nearest tick."""
        floor = self.floor_value(value)
        if self.is_value_equal(floor, value):
            return floor
        return self.add_interval_to_value(floor, self.tick_scale.interval.value)

    def span_value_range(self, start, end):
        return self.floor_value(start), self.ceil_value(end)

    def _as_location(self, location):
        return location

    def floor_location(self, location):
        location = self._as_location(location)
        origin = self.tick_scale.origin.location
        interval = self.tick_scale.interval.location
        return math.floor((location - origin) / interval) * interval + origin

    def ceil_location(self, location):
        location = self._as_location(location)
        origin = self.tick_scale.origin.location
        interval = self.tick_scale.interval.location
        return math.ceil((location - origin) / interval) * interval + origin

    def span_location_range(self, start, end):
        return self.floor_location(start), self.ceil_location(end)

    def location_of_value(self, value):
        raise NotImplementedError()

    def value_at_location(self, location):
        raise NotImplementedError()

    def is_value(self, value):
        raise NotImplementedError()

    def is_interval(self, interval):
        raise NotImplementedError()

    def compare_values(self, a, b):
        """Compare two values.

        Returns a negative number if `a` is smaller than `b`, zero if
        the values are equal and a positive number if `a` is larger
        than `b`.  Think of the comma as a minus sign.

        """
        raise NotImplementedError()

    def is_value_equal(self, a, b):
        return self.compare_values(a, b) == 0

    def is_interval_equal(self, a, b):
        raise NotImplementedError()

    def is_tick_scale_equal(self, scale1, scale2):
        """Compare two tick scales by value, not by identity."""
        o1, o2 = scale1.origin, scale2.origin
        i1, i2 = scale1.interval, scale2.interval
        if not (self.is_value(o1.value) and self.is_value(o2.value)):
            return False
        if not (self.is_interval(i1.value) and self.is_interval(i2.value)):
            return False
        return (o1.location == o2.location
                and i1.location == i2.location
                and self.is_value_equal(o1.value, o2.value)
                and self.is_interval_equal(i1.value, i2.value))


def _is_int(x):
    return x.is_finite() and x == x.to_integral_value()

# discrete.py - tick scales for integer indexed and categorical axes
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

import math
import numbers

from . import errors
from .scale import Scale, TickInterval, TickScale, TickVector


class DiscreteScale(Scale):

    """A tick scale where every integer, or every category, is a tick.

    Without `values`, the scale is used for ordinal axes, where the
    caller maps the categories to the indices 0, 1, 2, ...  If a
    sequence of `values` is given, the values themselves are the ticks
    and the location of a value is its index in the sequence.
    Constraints are accepted for compatibility with the other scales,
    but are ignored.

    Args:
        minor_tick_depth (int): the number of minor tick levels.
        constraints (dict, optional): default constraints.
        values (iterable, optional): the categories, in axis order.
        empty_value (optional): the value used for the empty scale,
            and returned when stepping past the last category.

    """

    def __init__(self, minor_tick_depth=0, constraints=None, values=None,
                 empty_value=None):
        if values is not None:
            values = list(values)
            if not values:
                raise errors.WrongUsage("no categories given")
        self.values = values
        self._empty_value = empty_value
        super().__init__(minor_tick_depth, constraints)

    def empty_value(self):
        if self.values is None:
            return 0
        return self._empty_value

    def empty_value_interval(self):
        return 0

    def _index(self, value):
        try:
            return self.values.index(value)
        except ValueError:
            msg = "%r is not a category of this scale" % (value,)
            raise errors.WrongUsage(msg) from None

    def get_tick_scale(self, start, end, constraints=None):
        if self.values is None:
            for x in (start, end):
                if not isinstance(x, numbers.Real) or not math.isfinite(x):
                    raise errors.InvalidInterval(
                        "invalid interval end point %r" % (x,))
            if end < start:
                return self.empty_scale()
            origin = math.floor(start)
            return TickScale(TickVector(origin, origin), TickInterval(1, 1))

        empty = self._empty_value
        if start == empty or end == empty:
            return self.empty_scale()
        for x in (start, end):
            if x not in self.values:
                raise errors.InvalidInterval(
                    "invalid interval end point %r" % (x,))
        origin = self.values.index(start)
        if self.values.index(end) < origin:
            return self.empty_scale()
        return TickScale(TickVector(start, origin), TickInterval(1, 1))

    def add_interval_to_value(self, value, interval):
        if self.values is None:
            return value + interval
        if value == self._empty_value:
            return value
        i = self._index(value) + interval
        if not 0 <= i < len(self.values):
            return self._empty_value
        return self.values[i]

    def floor_value(self, value):
        if self.values is not None:
            return value
        origin = self.tick_scale.origin.value
        interval = self.tick_scale.interval.value
        return origin + math.floor((value - origin) / interval) * interval

    def location_of_value(self, value):
        if self.values is None:
            return value
        if value == self._empty_value:
            return self.empty_scale().origin.location
        return self._index(value)

    def value_at_location(self, location):
        if self.values is None:
            return location
        i = math.floor(location)
        if not 0 <= i < len(self.values):
            return self._empty_value
        return self.values[i]

    def is_value(self, value):
        if self.values is None:
            return isinstance(value, numbers.Real)
        return value == self._empty_value or value in self.values

    def is_interval(self, interval):
        return isinstance(interval, numbers.Integral)

    def compare_values(self, a, b):
        if self.values is None:
            return a - b
        if a == b:
            return 0
        # the empty value sorts before all categories
        if a == self._empty_value:
            return -1
        if b == self._empty_value:
            return 1
        return self._index(a) - self._index(b)

    def is_interval_equal(self, a, b):
        return a == b

#! /usr/bin/env python3
# linear.py - tick scales for numeric axes
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

"""Numeric Tick Scales
-------------------

Tick intervals are of the form ``factor * radix**k``, where `factor`
is a divisor of the radix.  For the default radix 10 this gives the
familiar steps ..., 0.1, 0.2, 0.5, 1, 2, 5, 10, 20, ...

Values and locations are :py:class:`decimal.Decimal` objects and
coincide, so that tick positions are exact.

"""

from decimal import Decimal
from fractions import Fraction
import math
import numbers

from . import errors
from . import factors as factorsmod
from . import param
from .scale import Scale, TickInterval, TickScale, TickVector
from .scale import min_interval_parts, to_decimal, to_fraction

_ZERO = Decimal(0)


class LinearScale(Scale):

    """A tick scale for real numbers.

    Args:
        minor_tick_depth (int): the number of minor tick levels.
        constraints (dict, optional): default constraints.

    """

    def empty_value(self):
        return _ZERO

    def empty_value_interval(self):
        return _ZERO

    def get_tick_scale(self, start, end, constraints=None):
        start = _check_endpoint(start)
        end = _check_endpoint(end)
        if end <= start:
            return self.empty_scale()

        constraints = param.update(self.constraints, constraints)
        start = Fraction(start)
        end = Fraction(end)
        length = end - start

        min_interval = Fraction(0)
        for m in min_interval_parts(constraints['min_interval']):
            if m is None:
                continue
            m = _check_constraint(m, 'minimum interval')
            if m < 0:
                raise errors.InvalidConstraints(
                    "minimum interval must be finite and non-negative")
            min_interval = max(min_interval, m)

        max_count = param.check_max_count(constraints['max_count'])
        if max_count is not None:
            if max_count == 0:
                return self.empty_scale()
            min_interval = max(min_interval, length / to_fraction(max_count))

        if min_interval <= 0:
            raise errors.InvalidConstraints(
                "must specify either a minimum interval "
                "or a maximum interval count")

        radix = _check_radix(constraints['radix'])
        exclude = set(constraints['exclude_factors'] or ())

        exponent = _exponent(min_interval, radix)
        start_scaled = Fraction(math.floor(start / exponent))
        end_scaled = Fraction(math.ceil(end / exponent))

        if constraints['expand']:
            factors = factorsmod.find_factors(radix)
        else:
            scaled_length = int(end_scaled - start_scaled)
            factors = factorsmod.find_common_factors(radix, scaled_length)
        if not factors:
            factors = factorsmod.FACTORS_10
        factors = [f for f in factors if f not in exclude] or [radix]

        # At some power of the radix, even the smallest factor is
        # larger than min_interval, so this loop terminates.
        while True:
            for factor in factors:
                interval = factor * exponent
                if interval < min_interval:
                    continue
                origin = math.floor(start_scaled / factor) * factor * exponent
                origin = _from_fraction(origin)
                interval = _from_fraction(interval)
                return TickScale(TickVector(origin, origin),
                                 TickInterval(interval, interval))
            exponent *= radix
            start_scaled /= radix
            end_scaled /= radix

    def add_interval_to_value(self, value, interval):
        return to_decimal(value) + to_decimal(interval)

    def floor_value(self, value):
        origin = self.tick_scale.origin.value
        interval = self.tick_scale.interval.value
        steps = math.floor((to_decimal(value) - origin) / interval)
        return origin + steps * interval

    def location_of_value(self, value):
        return to_decimal(value)

    def value_at_location(self, location):
        return to_decimal(location)

    def _as_location(self, location):
        return to_decimal(location)

    def is_value(self, value):
        return isinstance(value, (Decimal, numbers.Real))

    def is_interval(self, interval):
        return isinstance(interval, (Decimal, numbers.Real))

    def compare_values(self, a, b):
        return to_decimal(a) - to_decimal(b)

    def is_interval_equal(self, a, b):
        return to_decimal(a) == to_decimal(b)


def _check_endpoint(x):
    try:
        x = to_decimal(x)
    except TypeError:
        raise errors.InvalidInterval("invalid interval end point %r" % (x,))
    if not x.is_finite():
        raise errors.InvalidInterval("invalid interval end point %s" % x)
    return x


def _check_constraint(x, what):
    """Convert a numeric constraint to an exact fraction."""
    try:
        x = to_decimal(x)
    except TypeError:
        raise errors.InvalidConstraints("invalid %s %r" % (what, x))
    if not x.is_finite():
        raise errors.InvalidConstraints("%s must be finite" % what)
    return Fraction(x)


def _check_radix(radix):
    try:
        r = to_decimal(radix)
    except TypeError:
        r = None
    if r is None or not r.is_finite() or r != r.to_integral_value() or r < 2:
        raise errors.InvalidConstraints(
            "radix must be an integer greater than 1, not %r" % (radix,))
    return int(r)


def _exponent(x, radix):
    """Get the largest power of `radix` which is less than or equal to `x`."""
    e = Fraction(1)
    if x >= 1:
        while e * radix <= x:
            e *= radix
    else:
        while e > x:
            e /= radix
    return e


def _from_fraction(x):
    if x.denominator == 1:
        return Decimal(x.numerator)
    return Decimal(x.numerator) / Decimal(x.denominator)

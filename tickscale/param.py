# param.py - default constraints for the tickscale package
# Copyright (C) 2014-2020 Jochen Voss <voss@seehuhn.de>
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

"""Tick Scale Constraints
----------------------

Constraints are plain dictionaries.  The recognised keys, together
with their types and default values, are listed in :py:data:`DEFAULT`.
Either ``min_interval`` or ``max_count`` (or both) must be given
before a tick scale can be computed.

"""

from decimal import Decimal
import math
import numbers

from . import errors

# name: (type, default value, description)
DEFAULT = {
    'min_interval': ('interval', None, 'smallest tick interval, as a value and/or location delta'),
    'max_count': ('num', None, 'maximum number of intervals to divide the range into'),
    'expand': ('bool', False, 'whether to round the range outward to whole intervals'),
    'radix': ('int', 10, 'base used when searching for natural tick intervals'),
    'exclude_factors': ('ints', (), 'interval multipliers which must not be used'),
    'minor_tick_constraints': ('list', (), 'constraints for each level of minor ticks'),
}

VALID_KEYS = set(DEFAULT.keys())


def check_keys(constraints):
    if constraints is None:
        return {}
    try:
        keys = constraints.keys()
    except AttributeError:
        msg = "constraints must be a dictionary, not %r" % (constraints,)
        raise errors.InvalidConstraints(msg) from None
    invalid = keys - VALID_KEYS
    if invalid:
        msg = "invalid constraint '%s'" % invalid.pop()
        raise errors.InvalidConstraints(msg)
    return constraints


def update(*constraints, **kwargs):
    """Merge a list of constraint dictionaries.

    Later entries override earlier ones and defaults are used where no
    values are given.  A value of ``None`` counts as "not given", so
    that a scale's own constraints can be switched off per call.

    """
    if kwargs:
        constraints = constraints + (kwargs,)
    constraints = [check_keys(c) for c in constraints if c is not None]

    res = {}
    for key, (_, default, _) in DEFAULT.items():
        val = default
        for c in constraints:
            if key in c:
                val = c[key]
        if val is None:
            val = default
        res[key] = val
    return res


def merge(*constraints, **kwargs):
    """Merge constraint dictionaries without filling in defaults."""
    res = {}
    for c in constraints + (kwargs,):
        if c is None:
            continue
        for key, val in check_keys(c).items():
            res[key] = val
    return res


def check_max_count(max_count):
    """Validate the ``max_count`` constraint.

    Returns ``None`` if no usable count is given (``None`` or infinity),
    and the count otherwise.  A count of zero is valid and means that
    the tick scale is empty.

    """
    if max_count is None:
        return None
    if isinstance(max_count, bool) or \
       not isinstance(max_count, (numbers.Real, Decimal)):
        msg = "invalid maximum count %r" % (max_count,)
        raise errors.InvalidConstraints(msg)
    if math.isnan(max_count) or max_count < 0:
        raise errors.InvalidConstraints(
            "maximum count must be greater than or equal to zero")
    if math.isinf(max_count):
        return None
    return max_count


def minor_constraints(constraints, level):
    """Get the constraints for minor tick level `level`.

    Minor ticks never extend beyond the major interval they subdivide,
    so ``expand`` is always switched off.

    """
    levels = constraints.get('minor_tick_constraints') or ()
    if level < len(levels):
        res = merge(levels[level])
    else:
        res = {}
    res['expand'] = False
    return res

# factors.py - integer divisors used to find natural tick intervals
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

FACTORS_10 = [1, 2, 5, 10]


def _find_factors_pos(x):
    head = []
    tail = []
    root = math.isqrt(x)
    for i in range(1, root + 1):
        if x % i == 0:
            head.append(i)
            if i * i != x:
                tail.append(x // i)
    return head + tail[::-1]


def find_factors(n):
    """Get all divisors of `n`, in ascending order.

    For negative `n` the negative divisors are returned, so that
    ``find_factors(-10) == [-10, -5, -2, -1]``.  An empty list is
    returned if `n` is zero or not an integer.

    """
    if n == 0 or n % 1 != 0:
        return []
    x = abs(int(n))
    if x == 10:
        factors = list(FACTORS_10)
    else:
        factors = _find_factors_pos(x)
    if n < 0:
        factors = [-f for f in reversed(factors)]
    return factors


def find_common_factors(a, b):
    """Get the divisors shared by `a` and `b`, in ascending order.

    The signs of `a` and `b` must agree, otherwise there are no common
    factors.

    """
    if a == 0 or b == 0 or (a < 0) != (b < 0):
        return []
    if a == b:
        return find_factors(a)

    if abs(a) < abs(b):
        lower, higher = a, b
    else:
        lower, higher = b, a
    return [f for f in find_factors(lower) if higher % f == 0]

# __init__.py - package directory file for TickScale
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

"""Nice Tick Positions for Numeric, Discrete and Date Axes
=======================================================

:copyright: 2014-2020, Jochen Voss
:license: GPL version 3 or newer, see LICENSE for more details

Quick Start
-----------

Create a scale, then update it whenever the visible range changes::

    s = tickscale.LinearScale(constraints={'max_count': 5})
    s.update_tick_scale(0, 1)
    ticks = s.get_ticks_in_value_range(0, 1)

Modules
-------

The TickScale package is composed of the following main modules:

* :py:mod:`tickscale.scale`
* :py:mod:`tickscale.linear`
* :py:mod:`tickscale.discrete`
* :py:mod:`tickscale.datescale`
* :py:mod:`tickscale.dates`
* :py:mod:`tickscale.param`

"""

__title__ = 'tickscale'
__version__ = '0.4'
__author__ = 'Jochen Voss'
__license__ = 'GPLv3+'
__copyright__ = 'Copyright (c) 2014-2020 Jochen Voss'

from .dates import DateDuration, DateUnit
from .datescale import DateScale
from .discrete import DiscreteScale
from .errors import TickScaleError, WrongUsage, InvalidInterval, \
    InvalidConstraints, InternalInvariantViolation
from .linear import LinearScale
from .scale import Scale, TickInterval, TickScale, TickVector

# errors.py - exceptions raised by the TickScale package
# Copyright (C) 2014 Jochen Voss <voss@seehuhn.de>
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


class TickScaleError(Exception):

    def __init__(self, msg):
        super().__init__(msg)
        self.msg = msg

    def __str__(self):
        return self.msg


class WrongUsage(TickScaleError):

    pass


class InvalidInterval(WrongUsage):

    """A tick computation was asked to cover a non-finite range."""

    pass


class InvalidConstraints(WrongUsage):

    """Tick scale constraints are missing, unknown or out of range."""

    pass


class InternalInvariantViolation(TickScaleError):

    """Tick iteration failed to advance.

    This indicates a bug in a :py:class:`tickscale.scale.Scale` subclass.

    """

    pass

# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
#
# See LICENSE for more details.
#
# Copyright: Red Hat Inc. 2025

"""
A keyword keeping state across calls.
"""

import threading

# pylint: disable=E0611
from rfremote.core.keyword import keyword
from rfremote.core.result import Success


class Counter(object):
    """
    Hands out successive integers starting at ``start``.

    Concurrent callers never observe the same value.

    :param start: The first value handed out
    :type start: int
    """

    def __init__(self, start=0):
        self._value = start
        self._lock = threading.Lock()

    @property
    def value(self):
        with self._lock:
            return self._value

    def next_value(self):
        with self._lock:
            value = self._value
            self._value = value + 1
        return value

    @keyword("Increment Counter")
    def increment_counter(self):
        value = self.next_value()
        return Success(return_value=value, output=f"Counter value is {value}")

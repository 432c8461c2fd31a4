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
Example keywords served by default.
"""

import logging
import os

# pylint: disable=E0611
from rfremote.core.keyword import KeywordFailure, keyword
from rfremote.core.logger import DEFAULT_LOG_NAME
from rfremote.core.result import Success

LOG = logging.getLogger(f"{DEFAULT_LOG_NAME}." + __name__)


@keyword("Addone", types=(int,))
def addone(value):
    """
    Return ``value`` plus one.
    """
    LOG.debug("Adding one to %d", value)
    return Success(return_value=value + 1, output=f"Adding one to {value}")


@keyword(types=(str, str))
def strings_should_be_equal(first, second):
    """
    Fail unless ``first`` and ``second`` are the same string.
    """
    output = f"Comparing '{first}' to '{second}'."
    if first != second:
        raise KeywordFailure("Given strings are not equal.", output=output)
    return Success(output=output)


@keyword(types=(str,))
def count_items_in_directory(path):
    """
    Return the number of entries in directory ``path``.

    Hidden entries are counted too. A missing or unreadable directory
    fails the keyword.
    """
    with os.scandir(path) as entries:
        count = sum(1 for _ in entries)
    return Success(
        return_value=count, output=f"Directory '{path}' contains {count} items."
    )

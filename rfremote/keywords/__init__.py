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
Keyword libraries bundled with the server.
"""

import logging

# pylint: disable=E0611
from rfremote.core.logger import DEFAULT_LOG_NAME
from rfremote.core.registry import KeywordRegistry
from rfremote.keywords import counter, examples

LOG = logging.getLogger(f"{DEFAULT_LOG_NAME}." + __name__)


def build_registry(counter_start=0):
    """
    Builds the frozen registry served for the lifetime of the process.

    :param counter_start: First value returned by "Increment Counter"
    :type counter_start: int
    :rtype: rfremote.core.registry.KeywordRegistry
    """
    registry = KeywordRegistry()
    for source in (examples, counter.Counter(counter_start)):
        names = registry.collect(source)
        LOG.debug("Registered keywords from %r: %s", source, ", ".join(names))
    registry.freeze()
    return registry

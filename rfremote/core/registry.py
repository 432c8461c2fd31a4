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
The keyword registry.

The registry maps keyword names to handlers. It is filled once while the
server starts and then frozen, so request threads only ever read it.
"""

import inspect
import logging

# pylint: disable=E0611
from rfremote.core.keyword import Keyword, is_keyword
from rfremote.core.logger import DEFAULT_LOG_NAME

LOG = logging.getLogger(f"{DEFAULT_LOG_NAME}." + __name__)


class RegistryError(Exception):
    """Raised when a frozen registry is modified."""

    pass


class KeywordRegistry(object):
    """
    Insertion ordered mapping from keyword name to :class:`Keyword`.
    """

    def __init__(self):
        self._keywords = {}
        self._frozen = False

    @property
    def frozen(self):
        return self._frozen

    def freeze(self):
        """
        End the build phase, later registrations raise :class:`RegistryError`.
        """
        self._frozen = True
        LOG.debug("Keyword registry frozen with %d keywords", len(self._keywords))

    def register(self, kw):
        """
        Registers a keyword under its name.

        A keyword registered twice replaces the earlier handler and keeps
        its position in :meth:`names`. The replacement is logged.

        :param kw: The keyword, or a function marked with ``@keyword``
        :type kw: Keyword or callable
        :return: The handler that was replaced, if any
        :rtype: Keyword or None
        :raises RegistryError: If the registry is frozen
        """
        if self._frozen:
            raise RegistryError(
                f"Cannot register keyword after the registry was frozen: {kw!r}"
            )
        if not isinstance(kw, Keyword):
            kw = Keyword.from_callable(kw)

        previous = self._keywords.get(kw.name)
        if previous is not None:
            LOG.warning(
                "Keyword '%s' registered twice, %r replaces %r",
                kw.name,
                kw.func,
                previous.func,
            )
        self._keywords[kw.name] = kw
        return previous

    def collect(self, source):
        """
        Registers every keyword found on a module or an object.

        Members are visited in source definition order, bound methods
        included.

        :param source: Module, class instance or any object with keywords
        :return: Names of the keywords registered from ``source``
        :rtype: list
        """
        members = [
            member
            for _, member in inspect.getmembers(source, is_keyword)
            if not inspect.isclass(member)
        ]
        members.sort(key=_definition_line)

        names = []
        for member in members:
            kw = Keyword.from_callable(member)
            self.register(kw)
            names.append(kw.name)
        return names

    def names(self):
        return list(self._keywords)

    def lookup(self, name):
        """
        Retrieves a keyword by name.

        :param name: The exact keyword name
        :type name: str
        :return: The keyword, or None when no keyword has that name
        :rtype: Keyword or None
        """
        return self._keywords.get(name)

    def __contains__(self, name):
        return name in self._keywords

    def __len__(self):
        return len(self._keywords)

    def __iter__(self):
        return iter(self._keywords.values())


def _definition_line(member):
    code = getattr(inspect.unwrap(member), "__code__", None)
    return code.co_firstlineno if code is not None else 0

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

import inspect

# pylint: disable=E0611
from rfremote.core.marshal import ArgumentShape

NAME_ATTR = "robot_name"
TYPES_ATTR = "robot_types"


class KeywordFailure(Exception):
    """
    Raised by a keyword when the check it performs does not hold.

    :param error: The failure message reported to the client
    :type error: str
    :param output: Output produced before the failure was detected
    :type output: str
    """

    ROBOT_SUPPRESS_NAME = True

    def __init__(self, error, output=""):
        super().__init__(error)
        self.output = output


def default_name(func_name):
    """
    Turn ``strings_should_be_equal`` into ``Strings Should Be Equal``.
    """
    words = [word for word in func_name.split("_") if word]
    return " ".join(word[0].upper() + word[1:] for word in words)


def keyword(name=None, types=()):
    """
    Mark a function or method as a remote keyword.

    :param name: Keyword name, derived from the function name when omitted
    :type name: str or None
    :param types: Expected type of each positional argument, left to right
    :type types: tuple
    """

    def decorator(func):
        setattr(func, NAME_ATTR, name or default_name(func.__name__))
        setattr(func, TYPES_ATTR, tuple(types))
        return func

    return decorator


def is_keyword(obj):
    return callable(obj) and isinstance(getattr(obj, NAME_ATTR, None), str)


def shape_from_callable(func, types=()):
    """
    Build the argument shape of ``func`` from its signature.

    :raises TypeError: If the signature cannot be called positionally
    """
    minimum = 0
    count = 0
    varargs = False
    for param in inspect.signature(func).parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
            if param.default is param.empty:
                minimum = count
        elif param.kind == param.VAR_POSITIONAL:
            varargs = True
        elif param.kind == param.KEYWORD_ONLY and param.default is not param.empty:
            continue
        else:
            raise TypeError(
                f"Keyword function '{func.__name__}' takes unsupported "
                f"parameter '{param.name}'"
            )

    types = tuple(types)
    if len(types) > count:
        raise TypeError(
            f"Keyword function '{func.__name__}' declares {len(types)} types "
            f"for {count} positional parameters"
        )
    types += (object,) * (count - len(types))
    return ArgumentShape(types, minimum=minimum, varargs=varargs)


class Keyword(object):
    """
    A named handler together with the arguments it accepts.
    """

    def __init__(self, name, func, shape=None):
        if not isinstance(name, str) or not name:
            raise ValueError(f"Keyword name must be a non-empty string: {name!r}")
        self.name = name
        self.func = func
        self.shape = shape if shape is not None else shape_from_callable(func)

    @classmethod
    def from_callable(cls, func):
        """
        Create a keyword from a function marked with :func:`keyword`.
        """
        if not is_keyword(func):
            raise ValueError(f"{func!r} is not marked as a keyword")
        return cls(
            getattr(func, NAME_ATTR),
            func,
            shape_from_callable(func, getattr(func, TYPES_ATTR, ())),
        )

    def __call__(self, *args):
        return self.func(*args)

    def __repr__(self):
        return f"<Keyword {self.name!r} {self.shape}>"

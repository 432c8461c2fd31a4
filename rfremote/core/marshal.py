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
Conversion of generic XML-RPC parameters into keyword arguments.

The transport hands over whatever the client sent: strings, integers,
booleans, floats, lists, dictionaries or binary blobs. Each keyword declares
the arity and per-position type it expects; this module checks the received
values against that shape and produces the argument tuple, or raises a
:class:`MarshalError` describing both shapes.
"""

from xmlrpc.client import Binary

from avocado.utils import astring

# pylint: disable=E0611
from rfremote.core.faults import MarshalError

SUPPORTED_TYPES = (object, str, int, float, bool, list, dict, bytes)

_TYPE_NAMES = {
    object: "any",
    str: "str",
    int: "int",
    float: "float",
    bool: "bool",
    list: "list",
    dict: "dict",
    bytes: "bytes",
    tuple: "list",
    Binary: "bytes",
    type(None): "nil",
}


def type_name(value_type):
    return _TYPE_NAMES.get(value_type, value_type.__name__)


def describe(values):
    """
    Describe the shape of received values, e.g. ``(str, int)``.

    :param values: The received parameter values
    :type values: list or tuple
    :rtype: str
    """
    return "(%s)" % ", ".join(type_name(type(value)) for value in values)


class ArgumentShape(object):
    """
    Arity and per-position types a keyword accepts.

    :param types: Type of each position, left to right
    :type types: tuple
    :param minimum: Number of mandatory positions
    :type minimum: int
    :param varargs: Whether positions past ``types`` are accepted
    :type varargs: bool
    """

    def __init__(self, types, minimum=None, varargs=False):
        for value_type in types:
            if value_type not in SUPPORTED_TYPES:
                raise TypeError(f"Unsupported argument type: {value_type!r}")
        self.types = tuple(types)
        self.minimum = len(self.types) if minimum is None else minimum
        self.varargs = varargs

    @property
    def maximum(self):
        return None if self.varargs else len(self.types)

    def accepts_count(self, count):
        if count < self.minimum:
            return False
        return self.varargs or count <= len(self.types)

    def type_at(self, position):
        if position < len(self.types):
            return self.types[position]
        return object

    def __str__(self):
        names = [type_name(value_type) for value_type in self.types]
        for position in range(self.minimum, len(names)):
            names[position] = f"[{names[position]}]"
        if self.varargs:
            names.append("*any")
        return "(%s)" % ", ".join(names)

    def __repr__(self):
        return f"<ArgumentShape {self}>"


def _convert(value, value_type):
    """
    Convert one value to ``value_type``.

    :raises TypeError: If the value is not acceptable for the position
    :raises ValueError: If the value has the right kind but bad content
    """
    if value_type is object:
        return value.data if isinstance(value, Binary) else value

    if value_type is bool:
        if isinstance(value, bool):
            return value
    elif value_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif value_type is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif value_type is str:
        if isinstance(value, str):
            return value
        if isinstance(value, Binary):
            return astring.to_text(value.data, "utf-8")
        if isinstance(value, bytes):
            return astring.to_text(value, "utf-8")
    elif value_type is bytes:
        if isinstance(value, Binary):
            return value.data
        if isinstance(value, bytes):
            return value
    elif value_type is list:
        if isinstance(value, (list, tuple)):
            return list(value)
    elif value_type is dict:
        if isinstance(value, dict):
            return value

    raise TypeError(f"cannot use {type_name(type(value))} as {type_name(value_type)}")


def marshal_arguments(name, shape, params, named=None):
    """
    Build the argument tuple for keyword ``name``.

    :param name: Keyword name, used in error messages
    :type name: str
    :param shape: The shape the keyword expects
    :type shape: ArgumentShape
    :param params: Positional values received from the transport
    :type params: list or tuple
    :param named: Named arguments received from the transport, only an
                  empty mapping is accepted
    :type named: dict or None
    :return: The converted positional arguments
    :rtype: tuple
    :raises MarshalError: If the values do not fit the shape
    """
    if not isinstance(params, (list, tuple)):
        raise MarshalError(
            name, shape, type_name(type(params)), "arguments must be a list"
        )

    received = describe(params)

    if named is not None and not isinstance(named, dict):
        raise MarshalError(
            name, shape, received, "named arguments must be a mapping"
        )
    if named:
        raise MarshalError(
            name,
            shape,
            received,
            "named arguments are not supported: %s" % ", ".join(map(str, named)),
        )

    if not shape.accepts_count(len(params)):
        raise MarshalError(
            name, shape, received, f"wrong number of arguments ({len(params)})"
        )

    arguments = []
    for position, value in enumerate(params):
        try:
            arguments.append(_convert(value, shape.type_at(position)))
        except (TypeError, ValueError) as e:
            raise MarshalError(
                name, shape, received, f"argument {position + 1}: {e}"
            ) from e
    return tuple(arguments)

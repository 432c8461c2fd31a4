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
Keyword outcomes and their encoding into remote result dictionaries.

A keyword either succeeds, optionally returning a value, or fails with an
error message and an optional traceback. Both carry the output text the
keyword produced. :func:`encode` turns an outcome into the dictionary the
remote library interface expects::

    {"status": "PASS", "return": 89, "output": "Adding one to 88"}
    {"status": "FAIL", "output": "...", "error": "...", "traceback": "..."}
"""

import re
from xmlrpc.client import MAXINT, MININT, Binary

from avocado.utils import astring, stacktrace

PASS = "PASS"
FAIL = "FAIL"

UNKNOWN_ERROR = "Unknown failure"

_XML_ILLEGAL = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class Success(object):
    def __init__(self, return_value=None, output=""):
        self.return_value = return_value
        self.output = output

    def __repr__(self):
        return f"<Success return={self.return_value!r} output={self.output!r}>"


class Failure(object):
    def __init__(self, error, output="", traceback=None):
        self.error = error
        self.output = output
        self.traceback = traceback

    @classmethod
    def from_exc_info(cls, exc_info, output=""):
        """
        Build a failure from ``sys.exc_info()``.

        The error is the exception message, prefixed with the exception
        class name unless the exception is an assertion style failure.

        :param exc_info: Exception info produced by sys.exc_info()
        :type exc_info: tuple
        :param output: Output produced before the exception
        :type output: str
        """
        exc_type, exc_value, _ = exc_info
        message = _text(exc_value)
        if not message:
            message = exc_type.__name__
        elif not _suppress_name(exc_type):
            message = f"{exc_type.__name__}: {message}"
        return cls(
            message, output=output, traceback=stacktrace.prepare_exc_info(exc_info)
        )

    def __repr__(self):
        return f"<Failure error={self.error!r} output={self.output!r}>"


def _suppress_name(exc_type):
    return issubclass(exc_type, AssertionError) or getattr(
        exc_type, "ROBOT_SUPPRESS_NAME", False
    )


def _text(value):
    if isinstance(value, (bytes, bytearray)):
        return astring.to_text(bytes(value), "utf-8", "replace")
    try:
        return str(value)
    except Exception:  # pylint: disable=W0703
        return object.__repr__(value)


def _xml_safe(text):
    """
    Send text that XML cannot carry as :class:`xmlrpc.client.Binary`.

    :param text: The text to send
    :type text: str
    :return: ``text`` itself, or its UTF-8 bytes wrapped in Binary
    """
    if _XML_ILLEGAL.search(text):
        return Binary(text.encode("utf-8", "surrogatepass"))
    return text


def to_wire(value, _parents=frozenset()):
    """
    Convert a keyword return value into something XML-RPC can carry.

    A container nested inside itself is sent as its text representation.

    :param value: Any value returned by a keyword
    :return: The value made of str, int, float, bool, list, dict and Binary
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if MININT <= value <= MAXINT:
            return value
        return str(value)
    if isinstance(value, (float, Binary)):
        return value
    if isinstance(value, str):
        return _xml_safe(value)
    if isinstance(value, (bytes, bytearray)):
        return Binary(bytes(value))
    if isinstance(value, (list, tuple, dict)):
        if id(value) in _parents:
            return _xml_safe(_text(value))
        parents = _parents | {id(value)}
        if isinstance(value, dict):
            return {
                _XML_ILLEGAL.sub("\ufffd", _text(key)): to_wire(item, parents)
                for key, item in value.items()
            }
        return [to_wire(item, parents) for item in value]
    return _xml_safe(_text(value))


def encode(outcome):
    """
    Encode a keyword outcome as a remote result dictionary.

    Missing pieces are filled with defaults instead of raising, so every
    outcome produces a well formed result: PASS results always carry
    ``return`` and ``output``; FAIL results always carry ``output`` and
    ``error`` and carry ``traceback`` only when there is one. Text holding
    characters XML cannot carry is sent as Binary.

    :param outcome: The outcome of a keyword invocation
    :type outcome: Success or Failure
    :return: The remote result dictionary
    :rtype: dict
    """
    output = "" if outcome.output is None else _xml_safe(_text(outcome.output))

    if isinstance(outcome, Failure):
        error = _text(outcome.error) if outcome.error else UNKNOWN_ERROR
        result = {
            "status": FAIL,
            "output": output,
            "error": _xml_safe(error),
        }
        if outcome.traceback:
            result["traceback"] = _xml_safe(_text(outcome.traceback))
        return result

    return {
        "status": PASS,
        "return": to_wire(getattr(outcome, "return_value", None)),
        "output": output,
    }

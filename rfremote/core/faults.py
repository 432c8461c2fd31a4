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
Protocol level faults.

A fault means the call could not be dispatched at all. It travels back to
the client as an XML-RPC fault response, never as a result dictionary, so a
driver can tell a misused call apart from a keyword that ran and failed.
"""

from xmlrpc.client import Fault

SERVER_ERROR = 1
UNKNOWN_METHOD = -32601
INVALID_PARAMS = -32602
UNKNOWN_KEYWORD = -32001


class MarshalError(Exception):
    """
    Raised when call parameters cannot be converted into the arguments a
    keyword expects.
    """

    def __init__(self, keyword, expected, received, reason=None):
        self.keyword = keyword
        self.expected = expected
        self.received = received
        self.reason = reason
        message = f"Keyword '{keyword}' expected {expected} but got {received}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def unknown_method(method):
    return Fault(UNKNOWN_METHOD, f"Unsupported method '{method}'")


def unknown_keyword(name):
    return Fault(UNKNOWN_KEYWORD, f"No keyword with name '{name}' found")


def invalid_params(message):
    return Fault(INVALID_PARAMS, message)


def from_marshal_error(error):
    """
    Convert a marshalling failure into the fault reported to the client.

    :param error: The failure raised by the marshaller
    :type error: MarshalError
    :rtype: xmlrpc.client.Fault
    """
    return invalid_params(str(error))

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
Dispatch of remote library interface calls.

The dispatcher answers ``get_keyword_names`` and ``run_keyword`` on behalf
of the XML-RPC transport. A ``run_keyword`` call goes through lookup,
argument marshalling, invocation and result encoding. Calls that cannot be
dispatched raise :class:`xmlrpc.client.Fault`; keywords that run and fail
produce a FAIL result instead.
"""

import logging
import sys

from avocado.utils import stacktrace

# pylint: disable=E0611
from rfremote.core import faults, result
from rfremote.core.faults import MarshalError
from rfremote.core.keyword import KeywordFailure
from rfremote.core.logger import DEFAULT_LOG_NAME
from rfremote.core.marshal import marshal_arguments, type_name

LOG = logging.getLogger(f"{DEFAULT_LOG_NAME}." + __name__)


def invoke(kw, arguments):
    """
    Run a keyword and turn whatever happens into an outcome.

    Exceptions raised by the keyword never leave this function, they
    become a :class:`~rfremote.core.result.Failure`.

    :param kw: The keyword to run
    :type kw: rfremote.core.keyword.Keyword
    :param arguments: Marshalled positional arguments
    :type arguments: tuple
    :rtype: Success or Failure
    """
    try:
        outcome = kw(*arguments)
    except KeywordFailure as e:
        LOG.debug("Keyword '%s' failed: %s", kw.name, e)
        return result.Failure.from_exc_info(sys.exc_info(), output=e.output)
    except (Exception, SystemExit):  # pylint: disable=W0703
        stacktrace.log_exc_info(sys.exc_info(), LOG.name)
        return result.Failure.from_exc_info(sys.exc_info())

    if not isinstance(outcome, (result.Success, result.Failure)):
        outcome = result.Success(return_value=outcome)
    return outcome


class Dispatcher(object):
    """
    Serves the remote library interface from a frozen keyword registry.

    :param registry: The registry built at startup
    :type registry: rfremote.core.registry.KeywordRegistry
    """

    def __init__(self, registry):
        if not registry.frozen:
            registry.freeze()
        self._registry = registry

    @property
    def registry(self):
        return self._registry

    def _dispatch(self, method, params):
        """
        Entry point used by ``SimpleXMLRPCServer.register_instance``.

        :param method: The called XML-RPC method name
        :type method: str
        :param params: The decoded call parameters
        :type params: tuple
        """
        if method == "get_keyword_names":
            return self.get_keyword_names(*params)
        if method == "run_keyword":
            if len(params) not in (2, 3):
                raise faults.invalid_params(
                    "run_keyword expects (name, args[, kwargs]), "
                    f"got {len(params)} parameters"
                )
            return self.run_keyword(*params)
        raise faults.unknown_method(method)

    def get_keyword_names(self, *_ignored):
        return self._registry.names()

    def run_keyword(self, name, args, kwargs=None):
        """
        Run keyword ``name`` with ``args`` and encode the outcome.

        :param name: The keyword name
        :type name: str
        :param args: Positional arguments as received
        :type args: list
        :param kwargs: Named arguments as received, must be empty
        :type kwargs: dict or None
        :return: The remote result dictionary
        :rtype: dict
        :raises xmlrpc.client.Fault: If the call cannot be dispatched
        """
        if not isinstance(name, str):
            raise faults.invalid_params(
                f"Keyword name must be a string, got {type_name(type(name))}"
            )

        kw = self._registry.lookup(name)
        if kw is None:
            LOG.warning("Unknown keyword '%s' requested", name)
            raise faults.unknown_keyword(name)

        try:
            arguments = marshal_arguments(name, kw.shape, args, kwargs)
        except MarshalError as e:
            LOG.warning("Cannot run keyword '%s': %s", name, e)
            raise faults.from_marshal_error(e) from e

        LOG.debug("Running keyword '%s' with arguments %r", name, arguments)
        outcome = invoke(kw, arguments)
        try:
            response = result.encode(outcome)
        except Exception:  # pylint: disable=W0703
            stacktrace.log_exc_info(sys.exc_info(), LOG.name)
            response = result.encode(result.Failure.from_exc_info(sys.exc_info()))
        LOG.info("Keyword '%s' finished with status %s", name, response["status"])
        return response

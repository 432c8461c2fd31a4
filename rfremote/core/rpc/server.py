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
XML-RPC transport of the remote keyword server.

This module provides the RPCServer class that binds a threaded XML-RPC
listener and routes every call to a :class:`Dispatcher`.
"""

import json
import logging
import sys
import traceback
from socketserver import ThreadingMixIn
from xmlrpc.client import Fault, dumps, loads
from xmlrpc.server import SimpleXMLRPCRequestHandler, SimpleXMLRPCServer

# pylint: disable=E0611
from rfremote.core import faults
from rfremote.core.logger import DEFAULT_LOG_NAME

LOG = logging.getLogger(f"{DEFAULT_LOG_NAME}." + __name__)

RPC_PATHS = ("/", "/RPC2")


class _RequestHandler(SimpleXMLRPCRequestHandler):
    rpc_paths = RPC_PATHS

    def log_message(self, format, *args):  # pylint: disable=W0622
        LOG.debug("%s - %s", self.address_string(), format % args)


class _ThreadingXMLRPCServer(ThreadingMixIn, SimpleXMLRPCServer):
    """
    SimpleXMLRPCServer handling each request in its own thread and
    reporting unexpected errors as JSON encoded faults.
    """

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, addr, **kwargs):
        try:
            super().__init__(addr, requestHandler=_RequestHandler, **kwargs)
        except OSError as e:
            if "Address already in use" in str(e):
                raise OSError(
                    f"Cannot bind to {addr[0]}:{addr[1]} - address already in use. "
                    "Another server instance may be running."
                ) from e
            raise

    def _marshaled_dispatch(self, data, dispatch_method=None, path=None):
        try:
            params, method = loads(data, use_builtin_types=self.use_builtin_types)

            if dispatch_method is not None:
                response = dispatch_method(method, params)
            else:
                response = self._dispatch(method, params)

            response = (response,)
            response_xml = dumps(
                response,
                methodresponse=True,
                allow_none=self.allow_none,
                encoding=self.encoding,
            )
        except Fault as fault:
            response_xml = dumps(
                fault, allow_none=self.allow_none, encoding=self.encoding
            )
        except Exception:  # pylint: disable=W0703
            exc_type, exc_value, exc_tb = sys.exc_info()
            tb_info_str = "".join(
                traceback.format_exception(exc_type, exc_value, exc_tb)
            )

            mod = getattr(exc_type, "__module__", "")
            if mod and mod not in ("__main__", "builtins"):
                exc_type_str = f"{mod}.{exc_type.__name__}"
            else:
                exc_type_str = exc_type.__name__

            exc_info = {
                "exc_type": exc_type_str,
                "exc_value": str(exc_value),
                "tb_info": tb_info_str,
            }
            LOG.error(
                "Server Error: %s: %s\n\nTraceback:\n%s",
                exc_type_str,
                exc_value,
                tb_info_str,
            )
            response_xml = dumps(
                Fault(faults.SERVER_ERROR, json.dumps(exc_info)),
                encoding=self.encoding,
                allow_none=self.allow_none,
            )

        return response_xml.encode(self.encoding, "xmlcharrefreplace")


class RPCServer(object):
    """
    Manages the XML-RPC server lifecycle.

    :param addr: A tuple (host, port) for the server to bind to, port 0
                 picks a free port.
    :type addr: tuple
    :param dispatcher: Handles every incoming call
    :type dispatcher: rfremote.core.rpc.dispatcher.Dispatcher
    """

    def __init__(self, addr, dispatcher):
        host, port = addr
        self._server = _ThreadingXMLRPCServer(
            (host, port), allow_none=True, use_builtin_types=False
        )
        self._server.register_instance(dispatcher)
        self._dispatcher = dispatcher

    @property
    def server_address(self):
        return self._server.server_address[:2]

    def serve_forever(self, poll_interval=0.5):
        """
        Serve requests until :meth:`shutdown` is called or an interrupt
        occurs. The listening socket is closed on return.
        """
        addr = self.server_address
        LOG.info(
            "Serving %d keywords on http://%s:%s/RPC2",
            len(self._dispatcher.registry),
            addr[0],
            addr[1],
        )

        try:
            self._server.serve_forever(poll_interval)
        except KeyboardInterrupt:
            LOG.info("RPCServer interrupted by KeyboardInterrupt. Shutting down.")
        finally:
            try:
                self._server.server_close()
            except OSError as e:
                LOG.warning("Error during server cleanup: %s", e)

    def shutdown(self):
        """
        Stop :meth:`serve_forever`, must be called from another thread.
        """
        self._server.shutdown()

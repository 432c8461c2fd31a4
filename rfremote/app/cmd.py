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

import logging
import os
import signal
import sys

# pylint: disable=E0611
from rfremote import keywords
from rfremote.core import rpc
from rfremote.core.logger import DEFAULT_LOG_NAME

LOG = logging.getLogger(f"{DEFAULT_LOG_NAME}." + __name__)


def _signal_handler(signum, frame):
    """
    Handle shutdown signals gracefully.

    :param signum: Signal number
    :type signum: int
    :param frame: Current stack frame
    :type frame: frame
    """
    signal_names = {signal.SIGTERM: "SIGTERM", signal.SIGINT: "SIGINT"}
    signal_name = signal_names.get(signum, f"Signal {signum}")
    LOG.info("Received %s, server graceful shutdown...", signal_name)
    sys.exit(0)


def _write_pid_file(pid_file):
    """
    Write the current process ID to the PID file.

    :param pid_file: Path to the PID file
    :type pid_file: str
    :raises OSError: If PID file cannot be written
    """
    pid = str(os.getpid())
    try:
        with open(pid_file, "w") as f:
            f.write(pid + "\n")
    except OSError as e:
        LOG.error("Failed to write PID file %s: %s", pid_file, e)
        raise


def _cleanup_pid_file(pid_file):
    if pid_file and os.path.exists(pid_file):
        try:
            os.remove(pid_file)
        except OSError as e:
            LOG.warning("Failed to remove PID file %s: %s", pid_file, e)


def create_server(host, port, counter_start=0):
    """
    Build the keyword registry and bind the server to it.

    The registry is built and frozen here, before the first request can
    arrive, and shared read-only by every request thread.

    :param host: The host address to bind to
    :type host: str
    :param port: The port number to listen on, 0 picks a free port
    :type port: int
    :param counter_start: First value returned by "Increment Counter"
    :type counter_start: int
    :rtype: rfremote.core.rpc.server.RPCServer
    """
    registry = keywords.build_registry(counter_start)
    dispatcher = rpc.dispatcher.Dispatcher(registry)
    return rpc.server.RPCServer((host, port), dispatcher)


def run(host, port, pid_file=None, counter_start=0):
    """
    Run the remote keyword server.

    This function builds the keyword registry, binds the XML-RPC server,
    writes the PID file and serves requests until interrupted.

    :param host: The host address for the server to bind to
    :type host: str
    :param port: The port number for the server to listen on
    :type port: int
    :param pid_file: Path to write the process ID file, if any
    :type pid_file: str or None
    :param counter_start: First value returned by "Increment Counter"
    :type counter_start: int
    :raises SystemExit: On startup failure or shutdown
    """
    signal.signal(signal.SIGTERM, _signal_handler)
    signal.signal(signal.SIGINT, _signal_handler)

    try:
        LOG.info("Remote keyword server starting with PID %s", os.getpid())

        server = create_server(host, port, counter_start)

        if pid_file:
            _write_pid_file(pid_file)

        server.serve_forever()

    except KeyboardInterrupt:
        LOG.info("Keyboard interrupt received, shutting down gracefully")

    except OSError as e:
        LOG.error("Cannot run server on %s:%s: %s", host, port, e)
        sys.exit(1)

    except ValueError as e:
        LOG.error("Configuration error: %s", e)
        sys.exit(1)

    except Exception as e:  # pylint: disable=W0703
        LOG.error("Unexpected error during server operation: %s", e, exc_info=True)
        sys.exit(1)

    finally:
        _cleanup_pid_file(pid_file)

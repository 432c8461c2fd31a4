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

import argparse
import ipaddress
import os
import re
import sys
from importlib import metadata

# pylint: disable=E0611
from rfremote.core.logger import validate_log_level

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8270


def get_version():
    try:
        return metadata.version("rfremote")
    except metadata.PackageNotFoundError:
        return "unknown"


def validate_host(host):
    """
    Validate the host argument.

    :param host: The host address to validate
    :type host: str
    :return: The validated host address
    :rtype: str
    :raises argparse.ArgumentTypeError: If host is invalid
    """
    if not host:
        raise argparse.ArgumentTypeError("Host cannot be empty")

    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        hostname_pattern = (
            r"^[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])"
            r"?(\.[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*$"
        )
        if re.match(hostname_pattern, host) and len(host) <= 253:
            return host
        raise argparse.ArgumentTypeError(f"Invalid host address: {host}") from None


def validate_port(port):
    """
    Validate the port argument, 0 lets the system pick a free port.

    :param port: The port number to validate
    :type port: str
    :return: The validated port number
    :rtype: int
    :raises argparse.ArgumentTypeError: If port is invalid
    """
    try:
        port_int = int(port)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Port must be a number, got: {port}"
        ) from None

    if port_int < 0 or port_int > 65535:
        raise argparse.ArgumentTypeError(
            f"Port must be between 0 and 65535, got: {port_int}"
        )
    if 0 < port_int < 1024:
        print(
            f"Warning: Using privileged port {port_int} may require root privileges",
            file=sys.stderr,
        )
    return port_int


def validate_pid_file(pid_file):
    """
    Validate the PID file argument.

    :param pid_file: The PID file path to validate
    :type pid_file: str
    :return: The validated absolute PID file path
    :rtype: str
    :raises argparse.ArgumentTypeError: If PID file path is invalid
    """
    if not pid_file:
        raise argparse.ArgumentTypeError("PID file path cannot be empty")

    abs_path = os.path.abspath(pid_file)
    pid_dir = os.path.dirname(abs_path)
    if not os.path.exists(pid_dir):
        raise argparse.ArgumentTypeError(
            f"PID file directory does not exist: {pid_dir}"
        )

    if not os.access(pid_dir, os.W_OK):
        raise argparse.ArgumentTypeError(
            f"PID file directory is not writable: {pid_dir}"
        )

    if os.path.exists(abs_path):
        print(
            f"Warning: PID file already exists and will be overwritten: {abs_path}",
            file=sys.stderr,
        )

    return abs_path


def validate_level(level):
    try:
        return validate_log_level(level)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rfremote",
        description="Remote keyword server - XML-RPC server for the "
        "Robot Framework remote library interface",
        epilog="For security, the server defaults to localhost binding. "
        "Use --host 0.0.0.0 to allow external connections.",
    )

    parser.add_argument(
        "--host",
        type=validate_host,
        default=DEFAULT_HOST,
        metavar="ADDRESS",
        help=f"Host address to bind to [default: {DEFAULT_HOST} (localhost only)]",
    )

    parser.add_argument(
        "--port",
        type=validate_port,
        default=DEFAULT_PORT,
        metavar="PORT",
        help=f"Port number to listen on, 0 picks a free port [default: {DEFAULT_PORT}]",
    )

    parser.add_argument(
        "--pid-file",
        type=validate_pid_file,
        default=None,
        metavar="PATH",
        help="Path to write the process ID file",
    )

    parser.add_argument(
        "--counter-start",
        type=int,
        default=0,
        metavar="N",
        help='First value returned by the "Increment Counter" keyword [default: 0]',
    )

    parser.add_argument(
        "--log-level",
        type=validate_level,
        default="INFO",
        metavar="LEVEL",
        help="Console log level [default: INFO]",
    )

    parser.add_argument(
        "--version", action="version", version=f"rfremote v{get_version()}"
    )
    return parser


def init_arguments(argv=None):
    """
    Initialize and validate arguments from the command line.

    :param argv: Arguments to parse instead of ``sys.argv[1:]``
    :type argv: list or None
    :return: The populated and validated namespace of arguments.
    :rtype: argparse.Namespace
    :raises SystemExit: If argument validation fails
    """
    args = build_parser().parse_args(argv)

    if args.host == "0.0.0.0":
        print(
            "Warning: Binding to 0.0.0.0 exposes the server to external networks. "
            "Ensure proper firewall protection.",
            file=sys.stderr,
        )

    return args

"""
The `app` package of the remote keyword server.

This package contains command-line argument parsing and the main
execution command.
"""

# pylint: disable=E0611
from rfremote.app import args, cmd

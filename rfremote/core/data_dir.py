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

import os
import tempfile

DATA_DIR_ENV = "RFREMOTE_DATA_DIR"
LOG_FILENAME = "rfremote.log"


def get_data_dir():
    """
    Gets the main data directory of the server.

    The location can be overridden with the $RFREMOTE_DATA_DIR environment
    variable, otherwise a "rfremote" directory under the system temporary
    directory is used.

    :return: The absolute path to the data directory.
    :rtype: str
    """
    data_dir = os.environ.get(DATA_DIR_ENV)
    if not data_dir:
        data_dir = os.path.join(tempfile.gettempdir(), "rfremote")
    return os.path.abspath(data_dir)


def get_log_dir():
    """
    Gets the directory where log files are stored.

    :return: The absolute path to the log directory.
    :rtype: str
    """
    return os.path.join(get_data_dir(), "log")


def get_log_filename():
    return os.path.join(get_log_dir(), LOG_FILENAME)


if __name__ == "__main__":
    print("data dir:         " + get_data_dir())
    print("log dir:          " + get_log_dir())
    print("log file:         " + get_log_filename())

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

# pylint: disable=E0611
from rfremote.app.args import init_arguments
from rfremote.app.cmd import run
from rfremote.core import data_dir
from rfremote.core.logger import DEFAULT_LOG_NAME, init_logger


def setup_directories(dirs, logger):
    """
    Create the directories the server writes to.

    :param dirs: Tuple of directory paths to create
    :type dirs: tuple
    :param logger: Logger instance for reporting
    :type logger: logging.Logger
    """
    for directory in dirs:
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create directory %s: %s", directory, e)
            raise


def main(argv=None):
    """Main entry point for the remote keyword server."""
    args = init_arguments(argv)

    init_logger(data_dir.get_log_filename(), console_level=args.log_level)
    logger = logging.getLogger(f"{DEFAULT_LOG_NAME}.__main__")

    setup_directories((data_dir.get_data_dir(), data_dir.get_log_dir()), logger)

    run(args.host, args.port, args.pid_file, args.counter_start)


if __name__ == "__main__":
    main()

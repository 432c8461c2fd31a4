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
import shutil
from pathlib import Path

from setuptools import Command, find_packages, setup

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
VERSION = open(os.path.join(BASE_DIR, "VERSION"), "r").read().strip()


class Clean(Command):
    """Our custom command to get rid of scratch files after build."""

    description = "Get rid of scratch, byte files and build stuff."
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        cleaning_list = ["MANIFEST", "BUILD", "./build", "./dist"]

        cleaning_list += list(Path(".").glob("*.egg-info"))
        cleaning_list += list(Path(".").rglob("*.pyc"))
        cleaning_list += list(Path(".").rglob("__pycache__"))

        for e in cleaning_list:
            if not os.path.exists(e):
                continue
            if os.path.isfile(e):
                os.remove(e)
            if os.path.isdir(e):
                shutil.rmtree(e)


if __name__ == "__main__":
    setup(
        name="rfremote",
        version=VERSION,
        description="Remote keyword server for the Robot Framework remote "
        "library interface",
        packages=find_packages(exclude=("selftests*",)),
        python_requires=">=3.8",
        install_requires=["avocado-framework>=68.0"],
        entry_points={
            "console_scripts": [
                "rfremote = rfremote.__main__:main",
            ],
        },
        cmdclass={"clean": Clean},
    )

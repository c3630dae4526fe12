# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2026 Canonical Ltd.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""Install and remove deb packages in an alternate root directory."""

import logging
from pathlib import Path

from hacker_ostree.errors import CommandFailed
from hacker_ostree.utils import process

from . import errors

logger = logging.getLogger(__name__)


def install_archive(
    deb_path: Path,
    *,
    package_name: str,
    install_dir: Path,
    runner: process.Runner = process.run,
) -> None:
    """Unpack and configure a deb archive under ``install_dir``.

    Files already present in the target tree are overwritten.
    """
    cmd = [
        "dpkg",
        "--instdir",
        str(install_dir),
        "--force-not-root",
        "--force-overwrite",
        "-i",
        str(deb_path),
    ]
    try:
        runner(cmd)
    except CommandFailed as err:
        raise errors.PackageInstallError(package_name, details=str(err)) from err


def remove_package(
    package_name: str,
    *,
    install_dir: Path,
    runner: process.Runner = process.run,
) -> None:
    """Remove a package previously installed under ``install_dir``."""
    cmd = [
        "dpkg",
        "--instdir",
        str(install_dir),
        "--force-not-root",
        "-r",
        package_name,
    ]
    try:
        runner(cmd)
    except CommandFailed as err:
        raise errors.PackageRemoveError(package_name, details=str(err)) from err

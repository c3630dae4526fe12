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

"""Persistent list of packages installed in the overlay."""

import logging
from pathlib import Path

from hacker_ostree.utils import file_utils

from .locking import LockFactory, default_lock

logger = logging.getLogger(__name__)


class InstalledPackagesStore:
    """Track the names of packages installed in the overlay.

    Names are stored one per line, in installation order.

    :param filepath: The text file holding the package names.
    :param lock: A factory for the context manager guarding read-modify-write
        cycles. Defaults to an advisory lock on ``<filepath>.lock``.
    """

    def __init__(self, filepath: Path, *, lock: LockFactory | None = None) -> None:
        self._filepath = filepath
        self._lock = lock or default_lock(filepath)

    @property
    def filepath(self) -> Path:
        """Return the path to the installed packages file."""
        return self._filepath

    def load(self) -> list[str]:
        """Read the installed package names, skipping blank lines."""
        if not self._filepath.exists():
            return []

        with self._filepath.open() as packages_file:
            packages = [line.strip() for line in packages_file]

        return [pkg for pkg in packages if pkg]

    def save(self, packages: list[str]) -> None:
        """Overwrite the installed packages file with the given names."""
        text = "".join(f"{pkg}\n" for pkg in packages)
        file_utils.write_text_atomic(self._filepath, text)

    def add(self, package_name: str) -> None:
        """Record a package as installed, unless it's already recorded."""
        with self._lock():
            packages = self.load()
            if package_name in packages:
                logger.debug("Package %s already recorded", package_name)
                return

            packages.append(package_name)
            self.save(packages)

    def remove(self, package_name: str) -> None:
        """Forget all records of the given package."""
        with self._lock():
            packages = self.load()
            remaining = [pkg for pkg in packages if pkg != package_name]
            if remaining == packages:
                return

            self.save(remaining)

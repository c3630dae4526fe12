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

"""Overlay package installation and bookkeeping."""

import logging

from hacker_ostree.dirs import OverlayDirs
from hacker_ostree.packages import AptRepository, dpkg
from hacker_ostree.state_manager import InstalledPackagesStore, RepositoryStore
from hacker_ostree.utils import process

logger = logging.getLogger(__name__)


class OverlayManager:
    """Install, remove and track packages in the overlay directory.

    The overlay is a writable installation root kept outside the base
    system image. Every package installed through the manager is recorded
    so that the overlay can be rebuilt after the base image changes.

    :param dirs: The overlay directories.
    :param repositories: The configured repository lines.
    :param installed_packages: The record of packages installed in the overlay.
    :param runner: The function used to execute commands.
    """

    def __init__(
        self,
        *,
        dirs: OverlayDirs,
        repositories: RepositoryStore,
        installed_packages: InstalledPackagesStore,
        runner: process.Runner = process.run,
    ) -> None:
        self._dirs = dirs
        self._installed_packages = installed_packages
        self._run = runner
        self._apt = AptRepository(dirs=dirs, repositories=repositories, runner=runner)

    def update_cache(self) -> None:
        """Refresh the overlay package metadata."""
        self._dirs.mkdirs()
        logger.info("Updating package lists")
        self._apt.refresh_packages_list()

    def install(self, package_name: str) -> None:
        """Download a package and install it in the overlay.

        The package list is refreshed before downloading. The package is
        recorded as installed only if the installation succeeds.

        :param package_name: The package to install.
        """
        self.update_cache()

        logger.info("Installing package %s", package_name)
        deb_path = self._apt.download_package(package_name)
        dpkg.install_archive(
            deb_path,
            package_name=package_name,
            install_dir=self._dirs.overlay_dir,
            runner=self._run,
        )

        self._installed_packages.add(package_name)

    def remove(self, package_name: str) -> None:
        """Remove a package from the overlay and forget it."""
        logger.info("Removing package %s", package_name)
        dpkg.remove_package(
            package_name, install_dir=self._dirs.overlay_dir, runner=self._run
        )

        self._installed_packages.remove(package_name)

    def list_packages(self) -> list[str]:
        """Return the names of packages installed in the overlay."""
        return self._installed_packages.load()

    def search(self, query: str) -> str:
        """Search the configured repositories for packages matching a query."""
        return self._apt.search(query)

    def upgrade(self) -> None:
        """Reinstall all installed packages with their newest versions.

        Packages are processed in installation order, stopping at the
        first failure.
        """
        self.update_cache()
        self._reinstall_all()

    def resync(self) -> None:
        """Reinstall all recorded packages on top of the current deployment."""
        self._reinstall_all()

    def clean(self) -> None:
        """Remove downloaded package archives from the cache."""
        logger.info("Cleaning package cache")
        self._apt.clean()

    def _reinstall_all(self) -> None:
        for package_name in self._installed_packages.load():
            self.install(package_name)

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

"""Exceptions raised by the packages handling subsystem."""

from hacker_ostree.errors import HackerOstreeError


class PackagesError(HackerOstreeError):
    """Base class for package handler errors."""


class PackageListRefreshError(PackagesError):
    """Failed to refresh the list of available packages.

    :param message: The error message.
    """

    def __init__(self, message: str, *, details: str | None = None):
        self.message = message
        brief = f"Failed to refresh package list: {message}."
        resolution = "Make sure the network and repository configuration are correct."

        super().__init__(brief=brief, details=details, resolution=resolution)


class PackageDownloadError(PackagesError):
    """Failed to download a package from the configured repositories.

    :param package_name: The package to download.
    """

    def __init__(self, package_name: str, *, details: str | None = None) -> None:
        self.package_name = package_name
        brief = f"Failed to download package {package_name!r}."
        resolution = (
            "Make sure the network configuration and package names are correct."
        )

        super().__init__(brief=brief, details=details, resolution=resolution)


class PackageArchiveNotFound(PackagesError):
    """No downloaded archive was found for a package.

    :param package_name: The name of the package.
    """

    def __init__(self, package_name: str):
        self.package_name = package_name
        brief = f"No .deb file found for {package_name}."

        super().__init__(brief=brief)


class PackageInstallError(PackagesError):
    """Failed to install a package archive into the overlay.

    :param package_name: The name of the package.
    """

    def __init__(self, package_name: str, *, details: str | None = None) -> None:
        self.package_name = package_name
        brief = f"Failed to install package {package_name!r} in the overlay."

        super().__init__(brief=brief, details=details)


class PackageRemoveError(PackagesError):
    """Failed to remove a package from the overlay.

    :param package_name: The name of the package.
    """

    def __init__(self, package_name: str, *, details: str | None = None) -> None:
        self.package_name = package_name
        brief = f"Failed to remove package {package_name!r} from the overlay."
        resolution = "Use 'hacker-ostree list' to see the installed packages."

        super().__init__(brief=brief, details=details, resolution=resolution)


class PackageSearchError(PackagesError):
    """Failed to search the package metadata.

    :param query: The search query.
    """

    def __init__(self, query: str, *, details: str | None = None) -> None:
        self.query = query
        brief = f"Failed to search packages matching {query!r}."
        resolution = "Run 'hacker-ostree update' to refresh the package list."

        super().__init__(brief=brief, details=details, resolution=resolution)

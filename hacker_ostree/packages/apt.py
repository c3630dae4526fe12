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

"""APT operations scoped to the overlay repositories and cache."""

import contextlib
import logging
import tempfile
from collections.abc import Iterator
from pathlib import Path

from hacker_ostree.dirs import OverlayDirs
from hacker_ostree.errors import CommandFailed
from hacker_ostree.state_manager import RepositoryStore
from hacker_ostree.utils import process

from . import errors

logger = logging.getLogger(__name__)


class AptRepository:
    """Run APT commands against the overlay's private package universe.

    Each invocation sees only the repositories configured in the overlay
    repository store and uses the overlay cache, ignoring the host's
    sources.list and sources.list.d configuration.

    :param dirs: The overlay directories.
    :param repositories: The configured repository lines.
    :param runner: The function used to execute commands.
    """

    def __init__(
        self,
        *,
        dirs: OverlayDirs,
        repositories: RepositoryStore,
        runner: process.Runner = process.run,
    ) -> None:
        self._dirs = dirs
        self._repositories = repositories
        self._run = runner

    @contextlib.contextmanager
    def staged_sources(self) -> Iterator[Path]:
        """Write the configured repositories to a temporary source list.

        :return: The path to the staged source list, removed on exit.
        """
        repos = self._repositories.load()

        with tempfile.NamedTemporaryFile(
            "w", prefix="hacker-ostree-", suffix=".list"
        ) as sources:
            for repo_line in repos:
                sources.write(f"{repo_line}\n")
            sources.flush()
            logger.debug("Staged %d repositories in %s", len(repos), sources.name)

            yield Path(sources.name)

    def apt_options(self, sources_path: Path) -> list[str]:
        """Return the options pointing APT at the overlay cache and sources."""
        return [
            "-o",
            f"Dir::Cache={self._dirs.cache_dir}",
            "-o",
            f"Dir::Etc::SourceList={sources_path}",
            # disable sources.list.d
            "-o",
            "Dir::Etc::SourceParts=-",
        ]

    def refresh_packages_list(self) -> None:
        """Refresh the package metadata from the configured repositories."""
        with self.staged_sources() as sources_path:
            cmd = ["apt-get", "update", *self.apt_options(sources_path)]
            try:
                self._run(cmd)
            except CommandFailed as err:
                raise errors.PackageListRefreshError(
                    "failed to run apt-get update", details=str(err)
                ) from err

    def download_package(self, package_name: str) -> Path:
        """Download a package archive to the overlay archives directory.

        :param package_name: The package to download.

        :return: The path to the downloaded archive.

        :raises PackageArchiveNotFound: If no archive is found after download.
        """
        logger.debug("Downloading package %s", package_name)

        with self.staged_sources() as sources_path:
            cmd = [
                "apt-get",
                "download",
                package_name,
                *self.apt_options(sources_path),
            ]
            try:
                self._run(cmd, cwd=self._dirs.archives_dir)
            except CommandFailed as err:
                raise errors.PackageDownloadError(
                    package_name, details=str(err)
                ) from err

        return self.find_archive(package_name)

    def find_archive(self, package_name: str) -> Path:
        """Locate the downloaded archive for a package.

        If more than one version is present, the most recently downloaded
        archive is returned.

        :raises PackageArchiveNotFound: If no archive exists for the package.
        """
        archives = list(self._dirs.archives_dir.glob(f"{package_name}_*.deb"))
        if not archives:
            raise errors.PackageArchiveNotFound(package_name)

        return max(archives, key=lambda path: (path.stat().st_mtime, path.name))

    def search(self, query: str) -> str:
        """Search the package metadata.

        :param query: The search expression.

        :return: The raw search output.
        """
        with self.staged_sources() as sources_path:
            cmd = ["apt-cache", "search", *self.apt_options(sources_path), query]
            try:
                result = self._run(cmd)
            except CommandFailed as err:
                raise errors.PackageSearchError(query, details=str(err)) from err

        return result.stdout

    def clean(self) -> None:
        """Remove all downloaded package archives."""
        archives_dir = self._dirs.archives_dir
        if not archives_dir.is_dir():
            return

        entries = sorted(archives_dir.iterdir())
        if not entries:
            logger.debug("Package cache is already clean")
            return

        self._run(["rm", "-rf", *entries])

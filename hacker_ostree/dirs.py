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

"""Definitions for overlay directories."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class OverlayDirs:
    """The directories used to manage the package overlay.

    :param root: The filesystem root all paths are relative to. Defaults
        to the host root directory.

    :ivar config_dir: The directory containing configuration files.
    :ivar repos_file: The list of configured repository lines.
    :ivar config_file: Optional settings for the command line tool.
    :ivar state_dir: The directory containing persistent state.
    :ivar installed_packages_file: The list of packages installed in the overlay.
    :ivar cache_dir: The APT cache root used for overlay operations.
    :ivar archives_dir: The directory holding downloaded package archives.
    :ivar overlay_dir: The installation root for overlay packages.
    """

    def __init__(self, *, root: Path | str = "/") -> None:
        self.root = Path(root)
        self.config_dir = self.root / "etc" / "hacker-ostree"
        self.repos_file = self.config_dir / "repos.json"
        self.config_file = self.config_dir / "config.yaml"
        self.state_dir = self.root / "var" / "lib" / "hacker-ostree"
        self.installed_packages_file = self.state_dir / "installed_packages.txt"
        self.cache_dir = self.state_dir / "apt-cache"
        self.archives_dir = self.cache_dir / "archives"
        self.overlay_dir = self.state_dir / "overlay"

    def mkdirs(self) -> None:
        """Create the overlay directories if they don't exist."""
        for dir_path in [
            self.config_dir,
            self.state_dir,
            self.cache_dir,
            self.archives_dir,
            self.overlay_dir,
        ]:
            logger.debug("Ensure directory %s", dir_path)
            dir_path.mkdir(parents=True, exist_ok=True)

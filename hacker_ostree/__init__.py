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

"""Manage an APT package overlay on top of an OSTree base image."""

from importlib.metadata import PackageNotFoundError, version

from .dirs import OverlayDirs
from .errors import HackerOstreeError

try:
    __version__ = version("hacker-ostree")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "dev"


__all__ = [
    "__version__",
    "HackerOstreeError",
    "OverlayDirs",
]

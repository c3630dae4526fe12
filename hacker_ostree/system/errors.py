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

"""Base image error definitions."""

from hacker_ostree import errors


class ImageError(errors.HackerOstreeError):
    """Base class for base image handler errors."""


class ImagePullError(ImageError):
    """Failed to pull a commit from an OSTree remote.

    :param remote: The OSTree remote.
    :param ref: The reference to pull.
    """

    def __init__(self, remote: str, ref: str, *, details: str | None = None):
        self.remote = remote
        self.ref = ref
        brief = f"Failed to pull {ref!r} from remote {remote!r}."
        resolution = "Make sure the network configuration and remote are correct."

        super().__init__(brief=brief, details=details, resolution=resolution)


class ImageDeployError(ImageError):
    """Failed to deploy a pulled commit.

    :param remote: The OSTree remote.
    :param ref: The reference to deploy.
    """

    def __init__(self, remote: str, ref: str, *, details: str | None = None):
        self.remote = remote
        self.ref = ref
        brief = f"Failed to deploy '{remote}:{ref}'."

        super().__init__(brief=brief, details=details)


class ImageRollbackError(ImageError):
    """Failed to undeploy the current deployment.

    :param index: The deployment index to undeploy.
    """

    def __init__(self, index: int, *, details: str | None = None):
        self.index = index
        brief = f"Failed to undeploy deployment {index}."
        resolution = "Use 'ostree admin status' to list the existing deployments."

        super().__init__(brief=brief, details=details, resolution=resolution)

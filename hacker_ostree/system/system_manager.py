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

"""Base image update and rollback."""

import logging

from hacker_ostree.errors import CommandFailed
from hacker_ostree.overlays import OverlayManager
from hacker_ostree.utils import process

from . import errors

logger = logging.getLogger(__name__)

_ROLLBACK_DEPLOYMENT_INDEX = 0


class SystemManager:
    """Update the OSTree base image and keep the overlay in sync with it.

    :param overlay_manager: The manager of the package overlay.
    :param remote: The OSTree remote to pull from.
    :param ref: The reference to pull and deploy.
    :param runner: The function used to execute commands.
    """

    def __init__(
        self,
        *,
        overlay_manager: OverlayManager,
        remote: str = "origin",
        ref: str = "main",
        runner: process.Runner = process.run,
    ) -> None:
        self._overlay_manager = overlay_manager
        self._remote = remote
        self._ref = ref
        self._run = runner

    def update(self) -> None:
        """Pull and deploy the newest base image, then resync the overlay."""
        logger.info("Pulling %s from %s", self._ref, self._remote)
        try:
            self._run(["ostree", "pull", self._remote, self._ref])
        except CommandFailed as err:
            raise errors.ImagePullError(
                self._remote, self._ref, details=str(err)
            ) from err

        logger.info("Deploying %s:%s", self._remote, self._ref)
        try:
            self._run(["ostree", "admin", "deploy", f"{self._remote}:{self._ref}"])
        except CommandFailed as err:
            raise errors.ImageDeployError(
                self._remote, self._ref, details=str(err)
            ) from err

        self.resync()

    def rollback(self) -> None:
        """Undeploy the newest deployment, returning to the previous one."""
        logger.info("Rolling back deployment %d", _ROLLBACK_DEPLOYMENT_INDEX)
        try:
            self._run(["ostree", "admin", "undeploy", str(_ROLLBACK_DEPLOYMENT_INDEX)])
        except CommandFailed as err:
            raise errors.ImageRollbackError(
                _ROLLBACK_DEPLOYMENT_INDEX, details=str(err)
            ) from err

    def resync(self) -> None:
        """Reinstall the overlay packages on top of the current deployment."""
        logger.info("Resyncing overlay packages")
        self._overlay_manager.resync()

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

"""Command line tool settings."""

import logging
from pathlib import Path
from typing import Any

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict

from hacker_ostree.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """Settings read from the optional configuration file.

    :ivar ostree_remote: The OSTree remote to pull base image updates from.
    :ivar ostree_ref: The reference to pull and deploy.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        frozen=True,
        alias_generator=lambda s: s.replace("_", "-"),
        populate_by_name=True,
    )

    ostree_remote: str = "origin"
    ostree_ref: str = "main"

    @classmethod
    def unmarshal(cls, data: dict[str, Any]) -> "Config":
        """Create and populate a new ``Config`` object from dictionary data.

        :param data: The dictionary data to unmarshal.

        :return: The newly created object.
        """
        if not isinstance(data, dict):
            raise TypeError("configuration data is not a dictionary")

        return cls.model_validate(data)

    @classmethod
    def load(cls, filepath: Path) -> "Config":
        """Read settings from a YAML file, or use defaults if it doesn't exist.

        :param filepath: The path to the configuration file.

        :raises InvalidConfiguration: If the file content is not valid.
        """
        if not filepath.exists():
            logger.debug("No configuration file at %s, using defaults", filepath)
            return cls()

        with filepath.open() as config_file:
            try:
                data = yaml.safe_load(config_file)
            except yaml.YAMLError as err:
                raise InvalidConfiguration(filepath, str(err)) from err

        # an empty document means default settings
        if data is None:
            return cls()

        try:
            return cls.unmarshal(data)
        except TypeError as err:
            raise InvalidConfiguration(filepath, str(err)) from err
        except pydantic.ValidationError as err:
            raise InvalidConfiguration(filepath, _format_errors(err)) from err


def _format_errors(err: pydantic.ValidationError) -> str:
    formatted_errors: list[str] = []

    for error in err.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        msg = error.get("msg", "invalid value")
        formatted_errors.append(f"- {loc}: {msg}" if loc else f"- {msg}")

    return "\n".join(formatted_errors)

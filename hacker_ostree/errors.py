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

"""Hacker-ostree errors."""

import dataclasses
from collections.abc import Sequence
from pathlib import Path


@dataclasses.dataclass(repr=True)
class HackerOstreeError(Exception):
    """Unexpected error.

    :param brief: Brief description of error.
    :param details: Detailed information.
    :param resolution: Recommendation, if any.
    """

    brief: str
    details: str | None = None
    resolution: str | None = None

    def __str__(self) -> str:
        components = [self.brief]

        if self.details:
            components.append(self.details)

        if self.resolution:
            components.append(self.resolution)

        return "\n".join(components)


class CommandNotRunnable(HackerOstreeError):
    """An external command could not be started.

    :param command: The command line that failed to start.
    :param message: The error message.
    """

    def __init__(self, command: Sequence[str], message: str) -> None:
        self.command = list(command)
        self.message = message
        brief = f"Failed to execute {self.command[0]}: {message}"

        super().__init__(brief=brief)


class CommandFailed(HackerOstreeError):
    """An external command exited with a non-zero status.

    :param command: The command line that failed.
    :param returncode: The command exit status.
    :param stderr: The captured standard error output.
    """

    def __init__(self, command: Sequence[str], returncode: int, stderr: str) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        brief = f"Command failed: {self.command[0]} (exit status {returncode})"
        details = f"Stderr: {stderr.strip()}" if stderr.strip() else None

        super().__init__(brief=brief, details=details)


class StateFileError(HackerOstreeError):
    """A persisted state file could not be parsed.

    :param filepath: The path to the offending file.
    :param message: The error message.
    """

    def __init__(self, filepath: Path, message: str) -> None:
        self.filepath = filepath
        self.message = message
        brief = f"Failed to parse {str(filepath)!r}: {message}"
        resolution = "Fix or remove the file and try again."

        super().__init__(brief=brief, resolution=resolution)


class InvalidConfiguration(HackerOstreeError):
    """The configuration file contains invalid settings.

    :param filepath: The path to the configuration file.
    :param message: The error message.
    """

    def __init__(self, filepath: Path, message: str) -> None:
        self.filepath = filepath
        self.message = message
        brief = f"Invalid configuration in {str(filepath)!r}."
        details = message
        resolution = "Review the configuration file and make sure it's correct."

        super().__init__(brief=brief, details=details, resolution=resolution)


class InvalidRepositoryIndex(HackerOstreeError):
    """A repository index is out of range.

    :param index: The requested index.
    :param count: The number of configured repositories.
    """

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        brief = f"Invalid index: {index}."
        if count:
            resolution = f"Use an index between 0 and {count - 1}."
        else:
            resolution = "No repositories are configured."

        super().__init__(brief=brief, resolution=resolution)

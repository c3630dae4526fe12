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

"""Persistent list of repository source lines."""

import json
import logging
from pathlib import Path

import pydantic

from hacker_ostree.errors import InvalidRepositoryIndex, StateFileError
from hacker_ostree.utils import file_utils

from .locking import LockFactory, default_lock

logger = logging.getLogger(__name__)

_REPOSITORY_LIST = pydantic.TypeAdapter(list[str])


class RepositoryStore:
    """Manage the ordered list of repository lines stored as a JSON array.

    :param filepath: The JSON file holding the repository lines.
    :param lock: A factory for the context manager guarding read-modify-write
        cycles. Defaults to an advisory lock on ``<filepath>.lock``.
    """

    def __init__(self, filepath: Path, *, lock: LockFactory | None = None) -> None:
        self._filepath = filepath
        self._lock = lock or default_lock(filepath)

    @property
    def filepath(self) -> Path:
        """Return the path to the repository list file."""
        return self._filepath

    def load(self) -> list[str]:
        """Read the repository lines.

        :return: The repository lines, or an empty list if the file doesn't exist.

        :raises StateFileError: If the file is not a JSON list of strings.
        """
        if not self._filepath.exists():
            return []

        try:
            return _REPOSITORY_LIST.validate_json(self._filepath.read_bytes())
        except pydantic.ValidationError as err:
            raise StateFileError(self._filepath, _first_error(err)) from err

    def save(self, repos: list[str]) -> None:
        """Overwrite the repository list file with the given lines."""
        file_utils.write_text_atomic(self._filepath, json.dumps(repos, indent=2))

    def add(self, repo_line: str) -> None:
        """Append a repository line to the list.

        :param repo_line: The repository line, in sources.list syntax.
        """
        with self._lock():
            repos = self.load()
            repos.append(repo_line)
            self.save(repos)

        logger.debug("Added repository %r", repo_line)

    def remove(self, index: int) -> str:
        """Remove the repository line at the given position.

        :param index: The zero-based index of the line to remove.

        :return: The removed repository line.

        :raises InvalidRepositoryIndex: If the index is out of range.
        """
        with self._lock():
            repos = self.load()
            if not 0 <= index < len(repos):
                raise InvalidRepositoryIndex(index, len(repos))

            repo_line = repos.pop(index)
            self.save(repos)

        logger.debug("Removed repository %r", repo_line)
        return repo_line

    def list_repositories(self) -> list[str]:
        """Return the configured repository lines."""
        return self.load()


def _first_error(err: pydantic.ValidationError) -> str:
    error = err.errors()[0]
    loc = error.get("loc")
    if loc:
        return f"item {loc[0]}: {error['msg']}"
    return error["msg"]

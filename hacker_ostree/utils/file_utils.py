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

"""File-related utilities."""

import contextlib
import fcntl
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def write_text_atomic(filepath: Path, text: str, *, mode: int = 0o644) -> None:
    """Replace the contents of a file without exposing a partial write.

    The text is written to a temporary file in the same directory, which
    is then renamed over the destination.

    :param filepath: The path to the file to write to.
    :param text: The text to write.
    :param mode: The permissions of the resulting file.
    """
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        "w", dir=filepath.parent, prefix=f".{filepath.name}.", delete=False
    ) as tmp_file:
        tmp_path = Path(tmp_file.name)
        try:
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        except BaseException:
            tmp_file.close()
            tmp_path.unlink(missing_ok=True)
            raise

    try:
        tmp_path.chmod(mode)
        os.replace(tmp_path, filepath)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug("Wrote %s", filepath)


@contextlib.contextmanager
def file_lock(lock_path: Path) -> Iterator[None]:
    """Hold an exclusive advisory lock for the duration of the context.

    :param lock_path: The lock file, created if it doesn't exist.
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    with lock_path.open("a") as lock_file:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

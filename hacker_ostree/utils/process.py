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

"""Utilities for executing external commands and collecting their output."""

import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from hacker_ostree.errors import CommandFailed, CommandNotRunnable

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Describes the outcome of a process."""

    returncode: int
    stdout: str
    stderr: str
    command: list[str]

    def check_returncode(self) -> None:
        """Raise an exception if the process returned non-zero."""
        if self.returncode != 0:
            raise CommandFailed(self.command, self.returncode, self.stderr)


Runner = Callable[..., ProcessResult]
"""The signature of :func:`run`, used to inject alternate command runners."""


def run(command: Sequence[str | Path], *, cwd: Path | None = None) -> ProcessResult:
    """Execute a command, wait for it to finish and collect its output.

    :param command: The executable name followed by its arguments.
    :param cwd: Path to execute in.

    :raises CommandNotRunnable: If the executable cannot be started.
    :raises CommandFailed: If the process exits with a non-zero return code.

    :return: A description of the process' outcome.
    """
    cmd = [str(arg) for arg in command]
    logger.debug("Executing: %s", cmd)

    try:
        proc = subprocess.run(cmd, capture_output=True, cwd=cwd, check=False)
    except OSError as err:
        raise CommandNotRunnable(cmd, err.strerror or str(err)) from err

    # tool output may use a non-UTF-8 locale encoding
    stdout = proc.stdout.decode(errors="replace") if proc.stdout else ""
    stderr = proc.stderr.decode(errors="replace") if proc.stderr else ""

    result = ProcessResult(proc.returncode, stdout, stderr, cmd)
    result.check_returncode()

    return result

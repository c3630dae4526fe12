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

"""Locking strategies for state files."""

import functools
from collections.abc import Callable
from contextlib import AbstractContextManager
from pathlib import Path

from hacker_ostree.utils import file_utils

LockFactory = Callable[[], AbstractContextManager]


def default_lock(filepath: Path) -> LockFactory:
    """Return an advisory lock factory for the given state file."""
    lock_path = filepath.with_name(filepath.name + ".lock")
    return functools.partial(file_utils.file_lock, lock_path)

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

from collections.abc import Sequence
from pathlib import Path

import pytest
from hacker_ostree.dirs import OverlayDirs
from hacker_ostree.errors import CommandFailed
from hacker_ostree.state_manager import InstalledPackagesStore, RepositoryStore
from hacker_ostree.utils.process import ProcessResult


class FakeRunner:
    """A command runner that records calls instead of executing them.

    Downloads create a fake archive in the working directory, like
    ``apt-get download`` does.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.cwds: list[Path | None] = []
        self.download_archives = True
        self._failures: dict[tuple[str, ...], str] = {}
        self._outputs: dict[tuple[str, ...], str] = {}
        self.staged_sources: list[tuple[str, str]] = []

    def fail(self, *prefix: str, stderr: str = "something bad happened") -> None:
        """Fail commands starting with the given arguments."""
        self._failures[prefix] = stderr

    def output(self, *prefix: str, stdout: str) -> None:
        """Set the output of commands starting with the given arguments."""
        self._outputs[prefix] = stdout

    def __call__(
        self, command: Sequence[str | Path], *, cwd: Path | None = None
    ) -> ProcessResult:
        cmd = [str(arg) for arg in command]
        self.calls.append(cmd)
        self.cwds.append(cwd)

        for arg in cmd:
            if arg.startswith("Dir::Etc::SourceList="):
                sources_path = arg.split("=", 1)[1]
                self.staged_sources.append(
                    (sources_path, Path(sources_path).read_text())
                )

        for prefix, stderr in self._failures.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                raise CommandFailed(cmd, 1, stderr)

        if self.download_archives and cmd[:2] == ["apt-get", "download"]:
            assert cwd is not None
            Path(cwd, f"{cmd[2]}_1.0_all.deb").touch()

        stdout = ""
        for prefix, out in self._outputs.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                stdout = out

        return ProcessResult(0, stdout, "", cmd)

    def commands(self) -> list[list[str]]:
        """Return the recorded calls with apt options stripped."""
        return [_strip_options(cmd) for cmd in self.calls]


def _strip_options(cmd: list[str]) -> list[str]:
    stripped: list[str] = []
    skip = False
    for arg in cmd:
        if skip:
            skip = False
        elif arg == "-o":
            skip = True
        else:
            stripped.append(arg)
    return stripped


@pytest.fixture
def new_path(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def overlay_dirs(tmp_path) -> OverlayDirs:
    return OverlayDirs(root=tmp_path)


@pytest.fixture
def repositories(overlay_dirs) -> RepositoryStore:
    return RepositoryStore(overlay_dirs.repos_file)


@pytest.fixture
def installed_packages(overlay_dirs) -> InstalledPackagesStore:
    return InstalledPackagesStore(overlay_dirs.installed_packages_file)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
